"""Immutable homogeneous vector type.

A vector consists of three coordinates and a translation component ``w``.
The ``w`` component only takes part in dot products and matrix transforms;
every operation with 3D semantics (cross product, magnitude, normalisation,
equality) ignores it.

Example:
    >>> a = Vector(1.0, 0.0, 0.0)
    >>> b = Vector(0.0, 1.0, 0.0)
    >>> a.cross(b)
    Vector(x=0.0, y=0.0, z=1.0, w=0.0)
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True, eq=False)
class Vector:
    """A vector V = (x, y, z, w).

    Attributes:
        x: X coordinate.
        y: Y coordinate.
        z: Z coordinate.
        w: Homogeneous/translation component (default 0).
    """

    x: float
    y: float
    z: float
    w: float = 0.0

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: float | Vector) -> Vector:
        """Scalar multiplication, or component-wise product with a Vector."""
        if isinstance(other, Vector):
            return Vector(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vector(self.x * other, self.y * other, self.z * other)

    __rmul__ = __mul__

    def __truediv__(self, a: float) -> Vector:
        return Vector(_div(self.x, a), _div(self.y, a), _div(self.z, a))

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    def __iter__(self) -> Iterator[float]:
        """Iterate over the (x, y, z) components."""
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other: Vector) -> float:
        """Dot product, including the ``w`` components."""
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def cross(self, other: Vector) -> Vector:
        """Cross product A x B."""
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude(self) -> float:
        """Length of the vector, |A| = sqrt(x^2 + y^2 + z^2)."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalise(self) -> Vector:
        """Return A / |A|.

        A zero-length vector normalises to a NaN vector rather than raising.
        """
        return self / self.magnitude()

    def product(self) -> float:
        """Product of components: x * y * z."""
        return self.x * self.y * self.z

    def sum(self) -> float:
        """Sum of components: x + y + z."""
        return self.x + self.y + self.z

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @classmethod
    def from_iterable(cls, values: tuple[float, ...] | list[float]) -> Vector:
        """Build a vector from a 3- or 4-element sequence."""
        return cls(*(float(v) for v in values))


def _div(n: float, d: float) -> float:
    """IEEE float division: x / 0 gives +-inf, 0 / 0 gives NaN."""
    if d != 0.0:
        return n / d
    if n == 0.0 or math.isnan(n):
        return math.nan
    return math.copysign(math.inf, n) * math.copysign(1.0, d)


ZERO = Vector(0.0, 0.0, 0.0)

# World up direction used to derive camera bases.
WORLD_UP = Vector(0.0, 1.0, 0.0)
