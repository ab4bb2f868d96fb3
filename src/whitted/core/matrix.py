"""Immutable 4x4 affine transforms.

Matrices are declared row-wise but also cache their column vectors, so that
both matrix products and matrix-vector products reduce to Vector dot
products. Composition applies right to left: ``(A * B) * v == A * (B * v)``.

Example:
    >>> m = Translation(1.0, 2.0, 3.0) * Scale(2.0, 2.0, 2.0)
    >>> m * Vector(1.0, 1.0, 1.0)
    Vector(x=3.0, y=4.0, z=5.0, w=1.0)
"""

from __future__ import annotations

import math
from typing import overload

import numpy as np
import numpy.typing as npt

from whitted.core.vector import Vector


class Matrix:
    """A 4x4 matrix built from four row vectors.

    Attributes:
        rows: The four row vectors.
        columns: The four column vectors (derived).
    """

    __slots__ = ("rows", "columns")

    rows: tuple[Vector, Vector, Vector, Vector]
    columns: tuple[Vector, Vector, Vector, Vector]

    def __init__(self, r1: Vector, r2: Vector, r3: Vector, r4: Vector) -> None:
        object.__setattr__(self, "rows", (r1, r2, r3, r4))
        object.__setattr__(
            self,
            "columns",
            (
                Vector(r1.x, r2.x, r3.x, r4.x),
                Vector(r1.y, r2.y, r3.y, r4.y),
                Vector(r1.z, r2.z, r3.z, r4.z),
                Vector(r1.w, r2.w, r3.w, r4.w),
            ),
        )

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Matrix is immutable")

    @overload
    def __mul__(self, other: Matrix) -> Matrix: ...

    @overload
    def __mul__(self, other: Vector) -> Vector: ...

    @overload
    def __mul__(self, other: float) -> Matrix: ...

    def __mul__(self, other):
        if isinstance(other, Matrix):
            return Matrix(*(
                Vector(*(row.dot(col) for col in other.columns))
                for row in self.rows
            ))
        if isinstance(other, Vector):
            # Pad the "w" component.
            v = Vector(other.x, other.y, other.z, 1.0)
            return Vector(*(row.dot(v) for row in self.rows))
        return Matrix(*(_scale_row(row, other) for row in self.rows))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return all(
            a.to_tuple() + (a.w,) == b.to_tuple() + (b.w,)
            for a, b in zip(self.rows, other.rows)
        )

    def __hash__(self) -> int:
        return hash(tuple(r.to_tuple() + (r.w,) for r in self.rows))

    def __repr__(self) -> str:
        rows = ", ".join(f"({r.x}, {r.y}, {r.z}, {r.w})" for r in self.rows)
        return f"Matrix({rows})"

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return the matrix as a (4, 4) float64 array, row-major."""
        return np.array([[r.x, r.y, r.z, r.w] for r in self.rows], dtype=np.float64)

    @classmethod
    def identity(cls) -> Matrix:
        return cls(
            Vector(1, 0, 0, 0),
            Vector(0, 1, 0, 0),
            Vector(0, 0, 1, 0),
            Vector(0, 0, 0, 1),
        )


def _scale_row(row: Vector, a: float) -> Vector:
    return Vector(row.x * a, row.y * a, row.z * a, row.w * a)


def Translation(x: float, y: float, z: float) -> Matrix:  # noqa: N802
    """A translation matrix."""
    return Matrix(
        Vector(1, 0, 0, x),
        Vector(0, 1, 0, y),
        Vector(0, 0, 1, z),
        Vector(0, 0, 0, 1),
    )


def Scale(x: float, y: float, z: float) -> Matrix:  # noqa: N802
    """A scale matrix."""
    return Matrix(
        Vector(x, 0, 0, 0),
        Vector(0, y, 0, 0),
        Vector(0, 0, z, 0),
        Vector(0, 0, 0, 1),
    )


def RotationX(theta: float) -> Matrix:  # noqa: N802
    """A rotation about the X axis by ``theta`` degrees."""
    c, s = _cos_sin(theta)
    return Matrix(
        Vector(1, 0, 0, 0),
        Vector(0, c, -s, 0),
        Vector(0, s, c, 0),
        Vector(0, 0, 0, 1),
    )


def RotationY(theta: float) -> Matrix:  # noqa: N802
    """A rotation about the Y axis by ``theta`` degrees."""
    c, s = _cos_sin(theta)
    return Matrix(
        Vector(c, 0, s, 0),
        Vector(0, 1, 0, 0),
        Vector(-s, 0, c, 0),
        Vector(0, 0, 0, 1),
    )


def RotationZ(theta: float) -> Matrix:  # noqa: N802
    """A rotation about the Z axis by ``theta`` degrees."""
    c, s = _cos_sin(theta)
    return Matrix(
        Vector(c, -s, 0, 0),
        Vector(s, c, 0, 0),
        Vector(0, 0, 1, 0),
        Vector(0, 0, 0, 1),
    )


def rotation(x: float, y: float, z: float) -> Matrix:
    """Yaw, pitch, roll rotation (degrees): Z * Y * X."""
    return RotationZ(z) * RotationY(y) * RotationX(x)


def _cos_sin(degrees: float) -> tuple[float, float]:
    theta = math.radians(degrees)
    return math.cos(theta), math.sin(theta)
