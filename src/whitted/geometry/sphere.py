"""Sphere primitive.

Ray-sphere intersection solves ``|o + t d - c|^2 = r^2`` for a unit ray
direction ``d``. With ``b = d . (c - o)`` the roots are

    t = b -/+ sqrt(b^2 + r^2 - |c - o|^2)

and the smaller root beyond the precision band wins. A ray starting inside
the sphere therefore hits the far wall.

Example:
    >>> red = Material(Colour(1.0, 0.0, 0.0), diffuse=1.0)
    >>> sphere = Sphere(Vector(0.0, 0.0, 0.0), 1.0, red)
    >>> sphere.intersect(Ray.towards(Vector(0.0, 0.0, -5.0), Vector(0.0, 0.0, 0.0)))
    4.0
"""

import math

import taichi as ti
import taichi.math as tm

from whitted.core.ray import Ray
from whitted.core.types import Scalar, vec3
from whitted.core.vector import Vector
from whitted.geometry.base import ObjectKind, SceneObject, device_select_root, select_root
from whitted.materials.material import Material


class Sphere(SceneObject):
    """A sphere defined by centre point and radius.

    Attributes:
        position: The centre of the sphere.
        radius: The radius of the sphere (non-negative).
        material: Material of the whole surface.
    """

    kind = ObjectKind.SPHERE

    def __init__(self, position: Vector, radius: float, material: Material) -> None:
        if radius < 0.0:
            raise ValueError(f"Sphere radius must be non-negative, got {radius}")
        super().__init__(position)
        self.radius = float(radius)
        self.material = material

    def intersect(self, ray: Ray) -> float:
        distance = self.position - ray.position
        b = ray.direction.dot(distance)
        discriminant = b * b + self.radius * self.radius - distance.dot(distance)

        if discriminant < 0.0:
            return 0.0

        root = math.sqrt(discriminant)
        return select_root(b - root, b + root)

    def normal(self, point: Vector) -> Vector:
        return (point - self.position).normalise()

    def surface(self, point: Vector) -> Material:
        return self.material

    def materials(self) -> tuple[Material, ...]:
        return (self.material,)

    def __repr__(self) -> str:
        return f"Sphere({self.position!r}, {self.radius})"


# =============================================================================
# Device-side routines
# =============================================================================


@ti.func
def intersect_sphere(origin: vec3, direction: vec3, centre: vec3, radius: Scalar) -> Scalar:
    """Intersect a ray with a sphere.

    Args:
        origin: The ray origin.
        direction: The unit ray direction.
        centre: The sphere centre.
        radius: The sphere radius.

    Returns:
        Distance to the nearest intersection beyond the precision band, or 0.
    """
    distance = centre - origin
    b = tm.dot(direction, distance)
    discriminant = b * b + radius * radius - tm.dot(distance, distance)

    t = 0.0
    if discriminant >= 0.0:
        root = ti.sqrt(discriminant)
        t = device_select_root(b - root, b + root)
    return t


@ti.func
def sphere_normal(point: vec3, centre: vec3) -> vec3:
    """Outward unit normal at a point on the sphere surface."""
    return tm.normalize(point - centre)
