"""Scene object contract.

Every object answers three questions about itself:

- ``intersect(ray)``: distance along the ray to the nearest intersection
  beyond the precision band, or ``0`` for no intersection;
- ``normal(point)``: unit surface normal at a point on the surface;
- ``surface(point)``: the material at a point on the surface.

The set of object kinds is closed. Each kind carries an :class:`ObjectKind`
tag that selects its device-side routines when the scene is uploaded.
"""

from abc import ABC, abstractmethod
from enum import IntEnum

import taichi as ti

from whitted.core.ray import Ray
from whitted.core.types import PRECISION, Scalar
from whitted.core.vector import Vector
from whitted.materials.material import Material


class ObjectKind(IntEnum):
    """Tags for the closed set of object kinds."""

    SPHERE = 0
    PLANE = 1
    CHECKERBOARD = 2


class SceneObject(ABC):
    """An object that can be intersected and shaded.

    Attributes:
        position: Reference point of the object (sphere centre, a point on
            a plane).
    """

    kind: ObjectKind

    def __init__(self, position: Vector) -> None:
        self.position = position

    @abstractmethod
    def intersect(self, ray: Ray) -> float:
        """Distance to the nearest intersection, or 0 if there is none."""

    @abstractmethod
    def normal(self, point: Vector) -> Vector:
        """Unit surface normal at ``point``."""

    @abstractmethod
    def surface(self, point: Vector) -> Material:
        """Material at ``point``."""

    @abstractmethod
    def materials(self) -> tuple[Material, ...]:
        """Every material the object can return from :meth:`surface`."""


def select_root(t0: float, t1: float) -> float:
    """Pick the first root beyond the precision band.

    Args:
        t0: The smaller root.
        t1: The larger root.

    Returns:
        ``t0`` if it is beyond ``PRECISION``, else ``t1`` if it is, else 0.
    """
    if t0 > PRECISION:
        return t0
    if t1 > PRECISION:
        return t1
    return 0.0


@ti.func
def device_select_root(t0: Scalar, t1: Scalar) -> Scalar:
    """Kernel version of :func:`select_root`."""
    t = 0.0
    if t0 > PRECISION:
        t = t0
    elif t1 > PRECISION:
        t = t1
    return t
