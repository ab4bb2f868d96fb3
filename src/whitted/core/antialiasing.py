"""Per-pixel sampling strategies.

Both strategies are written against a ``render_points`` callback that
evaluates a batch of image-space sample positions at once and returns one
colour per position. Every batch is a single parallel kernel launch, so the
strategies only decide *where* to sample and how to combine the results.

Adaptive supersampling:

1. Sample every pixel centre, plus a one pixel border around the image.
2. A pixel whose colour differs from any of its 8 neighbours by more than
   ``max_pixel_diff`` is supersampled as a region of size 1.
3. A region is split into a 2x2 grid of subregions and each subregion centre
   is sampled. A subregion whose sample differs from the mean of the four by
   more than ``max_subpixel_diff`` is split again. The pixel itself is
   depth 0 and regions stop splitting at ``max_subpixel_depth``, so up to
   ``max_subpixel_depth + 1`` levels are sampled. A region's colour is the
   mean of its four (possibly refined) subregion colours.

Regions are processed a whole level at a time rather than recursively, then
resolved bottom-up.

Stochastic supersampling averages each pixel centre with
``antialiasing_samples`` samples jittered uniformly by up to
``antialiasing_offset`` along each axis.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from whitted.core.config import RenderConfig
from whitted.core.sampler import UniformDistribution

# Evaluates colours (n, 3) at sample positions xs (n,), ys (n,)
RenderPoints = Callable[[npt.NDArray[np.float64], npt.NDArray[np.float64]], npt.NDArray[np.float64]]

# Origins of the four subregions of a region, in units of the subregion size
SUBREGION_OFFSETS = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])

# The 8 neighbours of a pixel as (dx, dy)
NEIGHBOURS = [(dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)]


@dataclass
class SamplingResult:
    """Output of a sampling strategy.

    Attributes:
        colours: Array of shape (height, width, 3) indexed ``[y, x]`` in image
            coordinates.
        supersampled: Number of pixels that were refined.
    """

    colours: npt.NDArray[np.float64]
    supersampled: int = 0


def _pixel_centres(width: int, height: int, border: int = 0):
    ys, xs = np.mgrid[-border:height + border, -border:width + border]
    return xs.astype(np.float64).ravel() + 0.5, ys.astype(np.float64).ravel() + 0.5


def _colour_diff(a: npt.NDArray[np.float64], b: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Maximum component-wise absolute difference along the last axis."""
    return np.abs(a - b).max(axis=-1)


def render_stochastic(
    render_points: RenderPoints,
    width: int,
    height: int,
    config: RenderConfig,
) -> SamplingResult:
    """Render every pixel with fixed stochastic supersampling.

    Args:
        render_points: Batch sample evaluator.
        width: Image width in pixels.
        height: Image height in pixels.
        config: Supplies ``antialiasing_samples``, ``antialiasing_offset`` and
            ``seed``.

    Returns:
        The averaged pixel colours.
    """
    cx, cy = _pixel_centres(width, height)
    n = cx.size
    samples = config.antialiasing_samples

    if samples == 0:
        colours = render_points(cx, cy)
        return SamplingResult(colours.reshape(height, width, 3))

    offset = config.antialiasing_offset
    jitter = UniformDistribution(-offset, offset, config.seed)
    dx = jitter.sample(n * samples).reshape(n, samples)
    dy = jitter.sample(n * samples).reshape(n, samples)

    xs = np.concatenate([cx[:, None], cx[:, None] + dx], axis=1)
    ys = np.concatenate([cy[:, None], cy[:, None] + dy], axis=1)

    colours = render_points(xs.ravel(), ys.ravel()).reshape(n, samples + 1, 3)
    return SamplingResult(colours.mean(axis=1).reshape(height, width, 3), n)


def render_adaptive(
    render_points: RenderPoints,
    width: int,
    height: int,
    config: RenderConfig,
) -> SamplingResult:
    """Render every pixel with adaptive supersampling.

    Args:
        render_points: Batch sample evaluator.
        width: Image width in pixels.
        height: Image height in pixels.
        config: Supplies the thresholds, maximum depth and debug toggles.

    Returns:
        The pixel colours and the number of supersampled pixels.
    """
    bw, bh = width + 2, height + 2

    # Bordered index b samples image coordinate b - 1 + 0.5.
    bx, by = _pixel_centres(width, height, border=1)
    bordered = render_points(bx, by).reshape(bh, bw, 3)
    centre = bordered[1:-1, 1:-1]

    diff = np.zeros((height, width), dtype=np.float64)
    for dx, dy in NEIGHBOURS:
        neighbour = bordered[1 + dy:bh - 1 + dy, 1 + dx:bw - 1 + dx]
        diff = np.fmax(diff, _colour_diff(centre, neighbour))

    flagged = diff > config.max_pixel_diff
    colours = centre.copy()
    if not flagged.any():
        return SamplingResult(colours)

    ys, xs = np.nonzero(flagged)
    if config.show_supersample_pixels:
        colours[ys, xs] = config.highlight_colour.to_tuple()
    else:
        colours[ys, xs] = render_regions(
            render_points, xs.astype(np.float64), ys.astype(np.float64), 1.0, config
        )
    return SamplingResult(colours, int(xs.size))


def render_regions(
    render_points: RenderPoints,
    xs: npt.NDArray[np.float64],
    ys: npt.NDArray[np.float64],
    size: float,
    config: RenderConfig,
) -> npt.NDArray[np.float64]:
    """Recursively supersample square regions.

    Args:
        render_points: Batch sample evaluator.
        xs: Region origins along x.
        ys: Region origins along y.
        size: Side length of every region.
        config: Supplies ``max_subpixel_diff``, ``max_subpixel_depth`` and
            the recursion debug toggle.

    Returns:
        Array of shape (len(xs), 3) with the colour of each region.
    """
    levels: list[tuple[npt.NDArray[np.float64], npt.NDArray[np.bool_]]] = []
    region_x, region_y = xs, ys
    depth = 0

    while True:
        sub = size / 2
        sx = (region_x[:, None] + SUBREGION_OFFSETS[:, 0] * sub + sub / 2).ravel()
        sy = (region_y[:, None] + SUBREGION_OFFSETS[:, 1] * sub + sub / 2).ravel()
        samples = render_points(sx, sy).reshape(-1, 4, 3)
        mean = samples.mean(axis=1)

        if depth >= config.max_subpixel_depth:
            refine = np.zeros(samples.shape[:2], dtype=bool)
        else:
            refine = _colour_diff(samples, mean[:, None, :]) > config.max_subpixel_diff

        if config.show_recursive_supersample_pixels:
            values = np.where(refine.any(axis=1)[:, None], config.highlight_colour.to_tuple(), mean)
            return _resolve(levels, values)

        levels.append((samples, refine))
        if not refine.any():
            break

        parents, children = np.nonzero(refine)
        region_x = region_x[parents] + SUBREGION_OFFSETS[children, 0] * sub
        region_y = region_y[parents] + SUBREGION_OFFSETS[children, 1] * sub
        size = sub
        depth += 1

    return _resolve(levels[:-1], levels[-1][0].mean(axis=1))


def _resolve(
    levels: list[tuple[npt.NDArray[np.float64], npt.NDArray[np.bool_]]],
    values: npt.NDArray[np.float64],
) -> npt.NDArray[np.float64]:
    """Fold refined region colours back into their parents, deepest first."""
    for samples, refine in reversed(levels):
        samples = samples.copy()
        samples[refine] = values
        values = samples.mean(axis=1)
    return values
