"""Soft (area-like) light source.

A soft light integrates the lighting model over ``samples`` light positions
jittered uniformly within ``[-radius, radius]`` of its centre on each axis.
Partially occluded points receive a fraction of the light, giving soft
shadow edges. Larger lights get more samples so that the noise level stays
roughly constant:

    samples = round(SAMPLES_BASE + (radius * SAMPLES_FACTOR) ** 3)

Example:
    >>> SoftLight(Vector(0.0, 0.0, 0.0), Colour(1.0, 1.0, 1.0), radius=20.0).samples
    126
"""

from __future__ import annotations

from collections.abc import Sequence

from whitted.core.colour import BLACK, Colour
from whitted.core.sampler import UniformDistribution
from whitted.core.vector import Vector
from whitted.geometry.base import SceneObject
from whitted.lights.base import Light, LightKind, shade_sample
from whitted.materials.material import Material

SAMPLES_BASE = 1
SAMPLES_FACTOR = 0.25


def soft_light_samples(radius: float) -> int:
    """Default number of samples for a light of ``radius``."""
    return int(round(SAMPLES_BASE + (radius * SAMPLES_FACTOR) ** 3))


class SoftLight(Light):
    """A spherical-ish light casting soft shadows.

    Attributes:
        position: Centre of the light.
        colour: Emitted colour, split evenly between the samples.
        sampler: Seeded distribution of per-axis sample offsets.
    """

    kind = LightKind.SOFT

    def __init__(
        self,
        position: Vector,
        colour: Colour,
        radius: float = 0.0,
        samples: int | None = None,
        seed: int | None = 0,
    ) -> None:
        """Create a soft light.

        Args:
            position: Centre of the light.
            colour: Emitted colour.
            radius: Half-width of the sampling volume.
            samples: Explicit sample count, overriding the radius-derived
                default.
            seed: Seed of the sample offset distribution.

        Raises:
            ValueError: If ``radius`` is negative or ``samples`` is below 1.
        """
        if radius < 0.0:
            raise ValueError(f"Light radius must be non-negative, got {radius}")
        if samples is None:
            samples = soft_light_samples(radius)
        if samples < 1:
            raise ValueError(f"Light samples must be at least 1, got {samples}")
        super().__init__(position, colour)
        self._radius = float(radius)
        self._samples = int(samples)
        self.sampler = UniformDistribution(-self._radius, self._radius, seed)

    @property
    def samples(self) -> int:
        return self._samples

    @property
    def radius(self) -> float:
        return self._radius

    def shade(
        self,
        point: Vector,
        normal: Vector,
        to_ray: Vector,
        material: Material,
        objects: Sequence[SceneObject],
    ) -> Colour:
        output = BLACK
        illumination = (self.colour * material.colour) / self._samples

        for _ in range(self._samples):
            sample = Vector(
                self.position.x + self.sampler(),
                self.position.y + self.sampler(),
                self.position.z + self.sampler(),
            )
            output = output + shade_sample(
                sample, illumination, point, normal, to_ray, material, objects
            )

        return output

    def __repr__(self) -> str:
        return f"SoftLight({self.position!r}, {self.colour!r}, radius={self._radius})"
