"""Point light source."""

from __future__ import annotations

from collections.abc import Sequence

from whitted.core.colour import Colour
from whitted.core.vector import Vector
from whitted.geometry.base import SceneObject
from whitted.lights.base import Light, LightKind, shade_sample
from whitted.materials.material import Material


class PointLight(Light):
    """An infinitely small light casting hard shadows.

    Example:
        >>> light = PointLight(Vector(0.0, 100.0, 0.0), Colour.from_hex(0xffffff))
        >>> light.samples
        1
    """

    kind = LightKind.POINT

    def shade(
        self,
        point: Vector,
        normal: Vector,
        to_ray: Vector,
        material: Material,
        objects: Sequence[SceneObject],
    ) -> Colour:
        illumination = self.colour * material.colour
        return shade_sample(self.position, illumination, point, normal, to_ray, material, objects)

    def __repr__(self) -> str:
        return f"PointLight({self.position!r}, {self.colour!r})"
