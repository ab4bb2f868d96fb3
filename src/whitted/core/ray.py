"""Ray value type and device-side ray helpers.

A ray is an origin point plus a normalised direction. On the Python side it
is a small frozen dataclass; inside Taichi kernels rays are passed around as
an ``(origin, direction)`` pair of vec3 values.

Example:
    >>> ray = Ray.towards(Vector(0, 0, -5), Vector(0, 0, 0))
    >>> ray.at(5.0)
    Vector(x=0.0, y=0.0, z=0.0, w=0.0)
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from whitted.core.types import Scalar, vec3
from whitted.core.vector import Vector


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        position: The starting point of the ray.
        direction: The direction of the ray. Normalised by :meth:`towards`
            and :meth:`create`; not enforced by the constructor.
    """

    position: Vector
    direction: Vector

    @classmethod
    def create(cls, position: Vector, direction: Vector) -> "Ray":
        """Create a ray, normalising ``direction``."""
        return cls(position, direction.normalise())

    @classmethod
    def towards(cls, position: Vector, target: Vector) -> "Ray":
        """Create a ray from ``position`` aimed at ``target``."""
        return cls(position, (target - position).normalise())

    def at(self, t: float) -> Vector:
        """The point ``t`` units along the ray."""
        return self.position + self.direction * t


def reflect(to_ray: Vector, normal: Vector) -> Vector:
    """Mirror ``to_ray`` (pointing away from the surface) about ``normal``."""
    return (normal * (2.0 * normal.dot(to_ray)) - to_ray).normalise()


# =============================================================================
# Device-side helpers
# =============================================================================


@ti.func
def ray_at(origin: vec3, direction: vec3, t: Scalar) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        origin: The ray origin.
        direction: The ray direction.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point origin + t * direction.
    """
    return origin + t * direction


@ti.func
def reflect_direction(to_ray: vec3, normal: vec3) -> vec3:
    """Reflect the direction back toward the ray source about a normal.

    Computes ``normalise(normal * 2 * (normal . to_ray) - to_ray)``.

    Args:
        to_ray: Unit direction from the surface point back to the ray origin.
        normal: The unit surface normal.

    Returns:
        The unit mirror-reflection direction.
    """
    return tm.normalize(normal * 2.0 * tm.dot(normal, to_ray) - to_ray)
