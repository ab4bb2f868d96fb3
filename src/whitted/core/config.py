"""Renderer configuration.

All tunable knobs of a render (recursion bound, anti-aliasing strategy and
thresholds, depth-of-field sample count, random seed, debug highlighting)
live in one frozen :class:`RenderConfig` passed to the renderer at
construction. There is no global render state.

Example:
    >>> config = RenderConfig(max_ray_depth=3, num_dof_samples=16, seed=1)
    >>> config.strategy
    'adaptive'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from whitted.core.colour import BLACK, WHITE, Colour

# Type alias for anti-aliasing strategies
SamplingStrategy = Literal["adaptive", "stochastic"]

# Default anti-aliasing knobs.
MAX_PIXEL_DIFF = 0.040
MAX_SUBPIXEL_DIFF = 0.008
MAX_SUBPIXEL_DEPTH = 3

# Default bound on reflection recursion.
MAX_RAY_DEPTH = 5


@dataclass(frozen=True)
class RenderConfig:
    """Configuration for a :class:`~whitted.core.renderer.Renderer`.

    Attributes:
        max_ray_depth: Maximum number of mirror-reflection bounces per
            primary ray.
        num_dof_samples: Rays fired per sample point for depth of field.
            Values below 1 behave as 1 (no blur).
        strategy: Per-pixel sampling strategy, "adaptive" or "stochastic".
        max_pixel_diff: Neighbour colour difference above which a pixel is
            supersampled (adaptive strategy).
        max_subpixel_diff: Difference from the region mean above which a
            subregion is subdivided again (adaptive strategy).
        max_subpixel_depth: Maximum subdivision depth (adaptive strategy).
        antialiasing_samples: Jittered samples added to each pixel's centre
            sample (stochastic strategy).
        antialiasing_offset: Maximum jitter, in pixels, along each axis
            (stochastic strategy).
        seed: Seed for every random decision of the render.
        background: Colour returned by rays that hit nothing.
        show_supersample_pixels: Paint pixels chosen for supersampling with
            ``highlight_colour`` instead of supersampling them.
        show_recursive_supersample_pixels: Paint regions that would be
            subdivided with ``highlight_colour``.
        highlight_colour: Colour used by the debug toggles.
    """

    max_ray_depth: int = MAX_RAY_DEPTH
    num_dof_samples: int = 1
    strategy: SamplingStrategy = "adaptive"
    max_pixel_diff: float = MAX_PIXEL_DIFF
    max_subpixel_diff: float = MAX_SUBPIXEL_DIFF
    max_subpixel_depth: int = MAX_SUBPIXEL_DEPTH
    antialiasing_samples: int = 0
    antialiasing_offset: float = 0.5
    seed: int = 0
    background: Colour = field(default=BLACK)
    show_supersample_pixels: bool = False
    show_recursive_supersample_pixels: bool = False
    highlight_colour: Colour = field(default=WHITE)

    def __post_init__(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any value is outside its legal range.
        """
        if self.strategy not in ("adaptive", "stochastic"):
            raise ValueError(
                f"Unknown sampling strategy {self.strategy!r}; "
                "expected 'adaptive' or 'stochastic'"
            )
        for name in ("max_ray_depth", "num_dof_samples", "max_subpixel_depth",
                     "antialiasing_samples"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        for name in ("max_pixel_diff", "max_subpixel_diff", "antialiasing_offset"):
            if getattr(self, name) < 0.0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        if not 0 <= self.seed < 2**32:
            raise ValueError(f"seed must fit in 32 bits, got {self.seed}")

    @property
    def dof_samples(self) -> int:
        """Effective number of depth-of-field rays per sample point."""
        return max(1, self.num_dof_samples)
