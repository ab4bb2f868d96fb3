"""Thin lens model."""

from __future__ import annotations

from whitted.core.sampler import UniformDiskDistribution


class Lens:
    """A lens with a focal length, an aperture and a focus setting.

    Attributes:
        focal_length: Distance from the camera position back to the film.
        aperture: Radius of the lens disk rays are fired from. Zero gives a
            pinhole camera.
        focus: Multiplier on the camera to look-at distance giving the
            distance of the plane in focus.
        sampler: Seeded uniform distribution over the aperture disk.

    Example:
        >>> lens = Lens(50.0, aperture=0.0)
        >>> lens.sampler()
        Vector(x=0.0, y=0.0, z=0.0, w=0.0)
    """

    def __init__(
        self,
        focal_length: float,
        aperture: float = 1.0,
        focus: float = 1.0,
        seed: int | None = 0,
    ) -> None:
        """Create a lens.

        Raises:
            ValueError: If ``aperture`` is negative.
        """
        if aperture < 0.0:
            raise ValueError(f"Lens aperture must be non-negative, got {aperture}")
        self.focal_length = float(focal_length)
        self.aperture = float(aperture)
        self.focus = float(focus)
        self.sampler = UniformDiskDistribution(self.aperture, seed)

    def __repr__(self) -> str:
        return f"Lens({self.focal_length}, aperture={self.aperture}, focus={self.focus})"
