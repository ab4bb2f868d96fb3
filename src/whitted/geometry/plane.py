"""Infinite planes and checkerboards.

A plane is a point and a unit normal. Intersection distance is

    t = ((p - o) . n) / (d . n)

widened into the interval ``t -/+ PRECISION / 2`` so that a ray starting on
the plane does not hit it again. A ray parallel to the plane never hits it.

A :class:`CheckerBoard` is a plane whose material alternates between two
materials in square tiles of side ``size`` on the world x and z axes,
measured from the plane's position.
"""

import math

import taichi as ti
import taichi.math as tm

from whitted.core.ray import Ray
from whitted.core.types import PRECISION, Scalar, vec3
from whitted.core.vector import Vector
from whitted.geometry.base import ObjectKind, SceneObject, device_select_root, select_root
from whitted.materials.material import Material


class Plane(SceneObject):
    """An infinite plane.

    Attributes:
        position: A point on the plane.
        direction: Unit normal of the plane.
        material: Material of the whole surface.
    """

    kind = ObjectKind.PLANE

    def __init__(self, position: Vector, direction: Vector, material: Material) -> None:
        super().__init__(position)
        self.direction = direction.normalise()
        self.material = material

    def intersect(self, ray: Ray) -> float:
        g = ray.direction.dot(self.direction)
        if g == 0.0:
            return 0.0

        t = (self.position - ray.position).dot(self.direction) / g
        return select_root(t - PRECISION / 2, t + PRECISION / 2)

    def normal(self, point: Vector) -> Vector:
        return self.direction

    def surface(self, point: Vector) -> Material:
        return self.material

    def materials(self) -> tuple[Material, ...]:
        return (self.material,)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.position!r}, {self.direction!r})"


class CheckerBoard(Plane):
    """A plane tiled with two alternating materials.

    Attributes:
        size: Side length of a single tile.
        material1: Material of tiles whose index sum is even, including the
            tile at the plane's position.
        material2: Material of the other tiles.
    """

    kind = ObjectKind.CHECKERBOARD

    def __init__(
        self,
        position: Vector,
        direction: Vector,
        size: float,
        material1: Material,
        material2: Material,
    ) -> None:
        if size <= 0.0:
            raise ValueError(f"Checker size must be positive, got {size}")
        super().__init__(position, direction, material1)
        self.size = float(size)
        self.material1 = material1
        self.material2 = material2

    def surface(self, point: Vector) -> Material:
        relative = point - self.position
        tile = math.floor(relative.x / self.size) + math.floor(relative.z / self.size)
        return self.material1 if tile % 2 == 0 else self.material2

    def materials(self) -> tuple[Material, ...]:
        return (self.material1, self.material2)


# =============================================================================
# Device-side routines
# =============================================================================


@ti.func
def intersect_plane(origin: vec3, direction: vec3, position: vec3, normal: vec3) -> Scalar:
    """Intersect a ray with a plane.

    Args:
        origin: The ray origin.
        direction: The unit ray direction.
        position: A point on the plane.
        normal: The unit plane normal.

    Returns:
        Distance to the intersection beyond the precision band, or 0 if the
        ray is parallel to the plane or the plane is behind it.
    """
    g = tm.dot(direction, normal)
    t = 0.0
    if g != 0.0:
        d = tm.dot(position - origin, normal) / g
        t = device_select_root(d - PRECISION / 2, d + PRECISION / 2)
    return t


@ti.func
def checker_tile_parity(point: vec3, position: vec3, size: Scalar) -> ti.i32:
    """Parity of the checkerboard tile containing ``point``.

    Returns:
        0 for tiles of the first material, 1 for the second.
    """
    relative = point - position
    tile = ti.cast(ti.floor(relative.x / size) + ti.floor(relative.z / size), ti.i64)
    parity = tile % 2
    if parity < 0:
        parity += 2
    return ti.cast(parity, ti.i32)
