"""Image export utilities for rendered images.

Supported formats:
    - PPM (plain-text ``P3`` pixel map)
    - PNG (8-bit via Pillow)

Pixels are written in the image's storage order: with an inverted image
(the default) the top row of the picture comes first.

Example:
    >>> from whitted.preview.export import write_ppm
    >>> image = Image(512, 512)
    >>> renderer.render(image)
    >>> write_ppm(image, "render.ppm")
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from whitted.core.colour import PIXEL_MAX

if TYPE_CHECKING:
    from whitted.core.image import Image

PathLike = str | os.PathLike[str]


def format_ppm(image: Image) -> str:
    """Serialize an image as plain-text PPM.

    Args:
        image: The image to serialize.

    Returns:
        The PPM document: a ``P3`` header with dimensions and maximum
        value, followed by one line of ``r g b`` triples per row.
    """
    lines = ["P3", f"{image.width} {image.height}", str(PIXEL_MAX)]
    for row in image.to_uint8():
        lines.append(" ".join(f"{r} {g} {b}" for r, g, b in row.tolist()))
    return "\n".join(lines) + "\n"


def write_ppm(image: Image, filepath: PathLike) -> None:
    """Write an image to a plain-text PPM file.

    Raises:
        OSError: If the file cannot be written.
    """
    with open(filepath, "w", encoding="ascii") as out:
        out.write(format_ppm(image))


def parse_ppm(text: str) -> tuple[int, int, int, npt.NDArray[np.uint8]]:
    """Parse a plain-text PPM document.

    Comments (``#`` to end of line) are ignored anywhere in the document.

    Args:
        text: The PPM document.

    Returns:
        Tuple of (width, height, max_value, pixels) where pixels has shape
        (height, width, 3) in file order.

    Raises:
        ValueError: If the document is not a well-formed ``P3`` pixel map.
    """
    tokens = []
    for line in text.splitlines():
        tokens.extend(line.split("#", 1)[0].split())

    if len(tokens) < 4 or tokens[0] != "P3":
        raise ValueError("Not a plain-text (P3) PPM document")

    width, height, max_value = (int(t) for t in tokens[1:4])
    values = tokens[4:]
    expected = width * height * 3
    if len(values) != expected:
        raise ValueError(f"Expected {expected} pixel values, found {len(values)}")

    pixels = np.array([int(v) for v in values], dtype=np.int64)
    if pixels.size and (pixels.min() < 0 or pixels.max() > max_value):
        raise ValueError(f"Pixel values must lie in [0, {max_value}]")
    return width, height, max_value, pixels.astype(np.uint8).reshape(height, width, 3)


def read_ppm(filepath: PathLike) -> tuple[int, int, int, npt.NDArray[np.uint8]]:
    """Read a plain-text PPM file. See :func:`parse_ppm`."""
    with open(filepath, encoding="ascii") as f:
        return parse_ppm(f.read())


def save_png(image: Image, filepath: PathLike) -> None:
    """Save an image as an 8-bit PNG file.

    Args:
        image: The image to save.
        filepath: Output file path (should end in .png).
    """
    pil_image = PILImage.fromarray(image.to_uint8())
    pil_image.save(filepath)


def compute_rmse(
    image_a: npt.NDArray[np.floating | np.integer],
    image_b: npt.NDArray[np.floating | np.integer],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
