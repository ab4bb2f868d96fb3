"""RGB colour values and pixel conversion.

Colours hold unbounded ``(r, g, b)`` scalars; nominal values lie in [0, 1].
They are immutable: accumulation is written ``total = total + part``.
Conversion to a displayable :class:`Pixel` is the only point where
channels are clamped.

Example:
    >>> red = Colour.from_hex(0xff0000)
    >>> (red * 0.5).to_pixel()
    Pixel(r=127, g=0, b=0)
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass
from typing import NamedTuple

# The maximum value of a single R, G, B pixel component.
PIXEL_MAX = 255


class Pixel(NamedTuple):
    """A trio of integer R, G, B components in [0, PIXEL_MAX]."""

    r: int
    g: int
    b: int


@dataclass(frozen=True)
class Colour:
    """An RGB colour.

    Attributes:
        r: Red component.
        g: Green component.
        b: Blue component.
    """

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    @classmethod
    def from_hex(cls, value: int) -> Colour:
        """Create a colour from a packed 24-bit value, e.g. ``0xff00aa``."""
        return cls(
            ((value >> 16) & 0xFF) / 255.0,
            ((value >> 8) & 0xFF) / 255.0,
            (value & 0xFF) / 255.0,
        )

    def __add__(self, other: Colour) -> Colour:
        return Colour(self.r + other.r, self.g + other.g, self.b + other.b)

    def __mul__(self, other: float | Colour) -> Colour:
        """Scalar multiplication, or component-wise combination of two colours."""
        if isinstance(other, Colour):
            return Colour(self.r * other.r, self.g * other.g, self.b * other.b)
        return Colour(self.r * other, self.g * other, self.b * other)

    __rmul__ = __mul__

    def __truediv__(self, x: float) -> Colour:
        return Colour(self.r / x, self.g / x, self.b / x)

    def __iter__(self) -> Iterator[float]:
        yield self.r
        yield self.g
        yield self.b

    def diff(self, other: Colour) -> float:
        """Maximum component-wise absolute difference between two colours."""
        return max(abs(self.r - other.r), abs(self.g - other.g), abs(self.b - other.b))

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)

    def to_pixel(self) -> Pixel:
        """Clamp each channel to [0, 1] and scale it to [0, PIXEL_MAX].

        NaN channels map to 0; infinities saturate to the range extremes.
        """
        return Pixel(scale(clamp(self.r)), scale(clamp(self.g)), scale(clamp(self.b)))


def clamp(x: float) -> float:
    """Clamp a scalar to [0, 1], mapping NaN to 0."""
    if math.isnan(x) or x < 0.0:
        return 0.0
    if x > 1.0:
        return 1.0
    return x


def scale(x: float) -> int:
    """Transform a clamped scalar from [0, 1] to [0, PIXEL_MAX] (truncating)."""
    return int(x * PIXEL_MAX)


BLACK = Colour(0.0, 0.0, 0.0)
WHITE = Colour(1.0, 1.0, 1.0)
