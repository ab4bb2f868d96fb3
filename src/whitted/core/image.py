"""Rendered image buffer.

An :class:`Image` is a ``width x height`` grid of colours stored as a float64
numpy array of shape ``(height, width, 3)`` in storage (row) order. Image
coordinates put ``y = 0`` at the bottom; with ``inverted=True`` (the default)
image row ``y`` is stored at buffer row ``height - 1 - y`` so that the top
row of the picture comes first when the buffer is serialized.

Saturation and per-channel gamma are applied when a colour is stored. Values
are only clamped to [0, 1] on conversion to 8-bit pixels.

Example:
    >>> image = Image(4, 2)
    >>> image.set(0, 0, Colour(1.0, 0.0, 0.0))
    >>> image.to_uint8()[1, 0].tolist()
    [255, 0, 0]
"""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np
import numpy.typing as npt

from whitted.core.colour import PIXEL_MAX, Colour, Pixel

# Rec. 709 luma coefficients used by the saturation adjustment
LUMA_WEIGHTS = np.array([0.2126, 0.7152, 0.0722], dtype=np.float64)


class Image:
    """A rendered image.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        saturation: Colour saturation multiplier (1 leaves colours unchanged,
            0 produces greyscale).
        gamma: Per-channel gamma; a channel value ``c`` is stored as
            ``c ** (1 / gamma)``.
        inverted: Whether image y coordinates grow upwards.
        data: The (height, width, 3) float64 buffer in storage order.
    """

    def __init__(
        self,
        width: int,
        height: int,
        saturation: float = 1.0,
        gamma: Colour = Colour(1.0, 1.0, 1.0),
        inverted: bool = True,
    ) -> None:
        """Create a black image.

        Raises:
            ValueError: If a dimension is not positive, or a gamma channel is
                not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        if min(gamma) <= 0.0:
            raise ValueError(f"Gamma channels must be positive, got {gamma}")
        self._width = int(width)
        self._height = int(height)
        self.saturation = float(saturation)
        self.gamma = gamma
        self.inverted = inverted
        self.data: npt.NDArray[np.float64] = np.zeros((self._height, self._width, 3), dtype=np.float64)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> int:
        """Number of pixels."""
        return self._width * self._height

    def _row(self, y: int) -> int:
        return self._height - 1 - y if self.inverted else y

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self._width}x{self._height} image")

    def set(self, x: int, y: int, colour: Colour) -> None:
        """Store ``colour`` at image coordinate ``(x, y)``."""
        self._check(x, y)
        values = self._process(np.array(colour.to_tuple(), dtype=np.float64))
        self.data[self._row(y), x] = values

    def get(self, x: int, y: int) -> Colour:
        """The stored colour at image coordinate ``(x, y)``."""
        self._check(x, y)
        r, g, b = self.data[self._row(y), x]
        return Colour(float(r), float(g), float(b))

    def set_all(self, colours: npt.NDArray[np.float64]) -> None:
        """Store a full frame of colours.

        Args:
            colours: Array of shape (height, width, 3) indexed by image
                coordinate ``[y, x]``, i.e. row 0 is the bottom of the image
                when the image is inverted.

        Raises:
            ValueError: If the array shape does not match the image.
        """
        colours = np.asarray(colours, dtype=np.float64)
        if colours.shape != self.data.shape:
            raise ValueError(
                f"Colour array shape {colours.shape} does not match image {self.data.shape}"
            )
        processed = self._process(colours)
        self.data[...] = processed[::-1] if self.inverted else processed

    def _process(self, values: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        """Apply saturation and gamma to colour values (last axis is RGB)."""
        if self.saturation != 1.0:
            luma = np.sum(values * LUMA_WEIGHTS, axis=-1, keepdims=True)
            values = luma + (values - luma) * self.saturation
        gamma = np.array(self.gamma.to_tuple(), dtype=np.float64)
        if np.any(gamma != 1.0):
            with np.errstate(invalid="ignore"):
                clamped = np.clip(np.nan_to_num(values, nan=0.0), 0.0, 1.0)
            values = np.where(gamma != 1.0, np.power(clamped, 1.0 / gamma), values)
        return values

    def to_uint8(self) -> npt.NDArray[np.uint8]:
        """Convert the buffer to 8-bit pixels in storage order.

        NaN channels become 0 and infinities saturate; finite values are
        clamped to [0, 1] and truncated after scaling to [0, PIXEL_MAX].
        """
        values = np.nan_to_num(self.data, nan=0.0, posinf=1.0, neginf=0.0)
        values = np.clip(values, 0.0, 1.0)
        return (values * PIXEL_MAX).astype(np.uint8)

    def rows(self) -> Iterator[list[Pixel]]:
        """Iterate over rows of pixels in storage order."""
        for row in self.to_uint8():
            yield [Pixel(int(r), int(g), int(b)) for r, g, b in row]

    def __repr__(self) -> str:
        return f"Image({self._width}x{self._height}, inverted={self.inverted})"
