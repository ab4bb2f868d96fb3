"""Light source contract and the shared lighting model.

A light computes an additive shading colour at a surface point. Each light
sample is shadow-tested against every object in the scene; an unoccluded
sample contributes

    illumination * diffuse * max(n . l, 0)
        + illumination * specular * max(n . h, 0) ** shininess

where ``illumination = light.colour * material.colour / samples``, ``l`` is
the unit direction to the sample and ``h = normalise(to_ray + l)``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import IntEnum

from whitted.core.colour import BLACK, Colour
from whitted.core.ray import Ray
from whitted.core.vector import Vector
from whitted.geometry.base import SceneObject
from whitted.materials.material import Material


class LightKind(IntEnum):
    """Tags for the closed set of light kinds."""

    POINT = 0
    SOFT = 1


class Light(ABC):
    """A light source.

    Attributes:
        position: Centre of the light.
        colour: Emitted colour.
    """

    kind: LightKind

    def __init__(self, position: Vector, colour: Colour) -> None:
        self.position = position
        self.colour = colour

    @property
    def samples(self) -> int:
        """Number of shadow rays cast per shaded point."""
        return 1

    @property
    def radius(self) -> float:
        """Half-width of the volume light samples are drawn from."""
        return 0.0

    @abstractmethod
    def shade(
        self,
        point: Vector,
        normal: Vector,
        to_ray: Vector,
        material: Material,
        objects: Sequence[SceneObject],
    ) -> Colour:
        """Shading contribution of this light at ``point``.

        Args:
            point: The surface point being shaded.
            normal: Unit surface normal at ``point``.
            to_ray: Unit direction from ``point`` back towards the viewer.
            material: Surface material at ``point``.
            objects: Every object in the scene, for shadow testing.

        Returns:
            The additive colour contribution.
        """


def occluded(ray: Ray, objects: Sequence[SceneObject], distance: float) -> bool:
    """Whether any object intersects ``ray`` closer than ``distance``."""
    for obj in objects:
        t = obj.intersect(ray)
        if 0.0 < t < distance:
            return True
    return False


def shade_sample(
    sample: Vector,
    illumination: Colour,
    point: Vector,
    normal: Vector,
    to_ray: Vector,
    material: Material,
    objects: Sequence[SceneObject],
) -> Colour:
    """Shade ``point`` from a single light sample position.

    Returns:
        Black if the sample is occluded, else the diffuse plus specular
        contribution of ``illumination``.
    """
    to_light = sample - point
    distance = to_light.magnitude()
    direction = to_light / distance

    if occluded(Ray(point, direction), objects, distance):
        return BLACK

    lambert = max(normal.dot(direction), 0.0)
    output = illumination * material.diffuse * lambert

    half = (to_ray + direction).normalise()
    phong = max(normal.dot(half), 0.0) ** material.shininess
    return output + illumination * material.specular * phong
