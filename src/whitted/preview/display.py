"""Matplotlib-based preview display for rendered images.

Features:
    - Preview window for a finished render
    - Gamma correction and saturation adjustment of the displayed pixels
    - Render statistics in the title

Example:
    >>> from whitted.preview.display import show_preview
    >>> renderer.render(image)
    >>> show_preview(image, stats=renderer.stats)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from whitted.core.image import LUMA_WEIGHTS

if TYPE_CHECKING:
    from whitted.core.image import Image
    from whitted.core.profiling import RenderStats


def apply_gamma(
    image: npt.NDArray[np.float64],
    gamma: float = 2.2,
) -> npt.NDArray[np.float64]:
    """Apply gamma correction for display.

    Args:
        image: Linear image array of shape (H, W, 3) in [0, 1] range.
        gamma: Gamma value (default 2.2 for sRGB).

    Returns:
        Gamma corrected image.
    """
    if gamma == 1.0:
        return image

    # Clamp to [0, 1] before gamma to avoid NaN from negative values
    image = np.clip(image, 0.0, 1.0)

    # Apply gamma encoding: out = in^(1/gamma)
    return np.power(image, 1.0 / gamma)


def apply_saturation(
    image: npt.NDArray[np.float64],
    saturation: float = 1.0,
) -> npt.NDArray[np.float64]:
    """Scale colour saturation around each pixel's luma.

    Args:
        image: Image array of shape (H, W, 3).
        saturation: 1 leaves colours unchanged, 0 gives greyscale and values
            above 1 exaggerate colour.

    Returns:
        The adjusted image.
    """
    if saturation == 1.0:
        return image

    luma = np.sum(image * LUMA_WEIGHTS, axis=-1, keepdims=True)
    return luma + (image - luma) * saturation


def process_image_for_display(
    image: npt.NDArray[np.float64],
    gamma: float = 1.0,
    saturation: float = 1.0,
) -> npt.NDArray[np.float64]:
    """Process an image array for display.

    Applies the display pipeline:
    1. Saturation adjustment
    2. Gamma correction
    3. Clamping to [0, 1], with NaN mapped to 0

    Args:
        image: Image array of shape (H, W, 3).
        gamma: Gamma correction value.
        saturation: Saturation multiplier.

    Returns:
        Processed image ready for display, in [0, 1] range.
    """
    result = np.nan_to_num(image.astype(np.float64), nan=0.0, posinf=1.0, neginf=0.0)
    result = apply_saturation(result, saturation)
    result = apply_gamma(result, gamma)
    return np.clip(result, 0.0, 1.0)


def show_preview(
    image: Image,
    *,
    gamma: float = 1.0,
    saturation: float = 1.0,
    stats: RenderStats | None = None,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> None:
    """Display a rendered image as a Matplotlib figure.

    Args:
        image: The rendered image.
        gamma: Extra display gamma applied on top of the image's own.
        saturation: Extra display saturation applied on top of the image's own.
        stats: Render statistics to summarize in the title.
        title: Custom title (overrides the statistics summary).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = process_image_for_display(image.data, gamma=gamma, saturation=saturation)

    fig, ax = plt.subplots(1, 1, figsize=figsize)

    # Storage order is top row first when the image is inverted
    ax.imshow(display_image if image.inverted else display_image[::-1])
    ax.axis("off")

    if title is None:
        title = f"{image.width}x{image.height}"
        if stats is not None:
            title += f" - {stats.elapsed:.2f}s, {stats.traces_per_pixel:.2f} traces/pixel"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
