"""Tests for the rendered image buffer.

Tests cover:
- Coordinate mapping with and without row inversion
- Bounds checking
- Saturation and gamma applied on store
- 8-bit conversion of out-of-range and NaN values
"""

import math

import numpy as np
import pytest

from whitted.core.colour import Colour, Pixel
from whitted.core.image import Image


class TestImageConstruction:
    """Tests for creating images."""

    def test_starts_black(self):
        image = Image(4, 3)
        assert image.data.shape == (3, 4, 3)
        assert np.all(image.data == 0.0)
        assert image.size == 12

    @pytest.mark.parametrize("width,height", [(0, 4), (4, 0), (-1, 4)])
    def test_non_positive_dimensions_rejected(self, width, height):
        with pytest.raises(ValueError):
            Image(width, height)

    def test_non_positive_gamma_rejected(self):
        with pytest.raises(ValueError):
            Image(4, 4, gamma=Colour(1.0, 0.0, 1.0))


class TestImageAccess:
    """Tests for reading and writing pixels."""

    def test_inverted_stores_bottom_row_last(self):
        image = Image(4, 3)
        image.set(1, 0, Colour(1.0, 0.0, 0.0))
        assert image.data[2, 1].tolist() == [1.0, 0.0, 0.0]
        assert image.get(1, 0) == Colour(1.0, 0.0, 0.0)

    def test_not_inverted_stores_rows_in_order(self):
        image = Image(4, 3, inverted=False)
        image.set(1, 0, Colour(1.0, 0.0, 0.0))
        assert image.data[0, 1].tolist() == [1.0, 0.0, 0.0]

    def test_out_of_bounds_rejected(self):
        image = Image(4, 3)
        with pytest.raises(IndexError):
            image.set(4, 0, Colour())
        with pytest.raises(IndexError):
            image.get(0, -1)

    def test_set_all_flips_rows_when_inverted(self):
        image = Image(2, 2)
        colours = np.zeros((2, 2, 3))
        colours[0, 0] = (1.0, 1.0, 1.0)  # image coordinate (0, 0)
        image.set_all(colours)
        assert image.get(0, 0) == Colour(1.0, 1.0, 1.0)
        assert image.data[1, 0].tolist() == [1.0, 1.0, 1.0]

    def test_set_all_shape_mismatch_rejected(self):
        with pytest.raises(ValueError):
            Image(2, 2).set_all(np.zeros((3, 2, 3)))

    def test_values_outside_unit_range_are_kept(self):
        image = Image(1, 1)
        image.set(0, 0, Colour(2.0, -1.0, 0.5))
        assert image.get(0, 0) == Colour(2.0, -1.0, 0.5)


class TestImageProcessing:
    """Tests for saturation and gamma applied on store."""

    def test_zero_saturation_is_greyscale(self):
        image = Image(1, 1, saturation=0.0)
        image.set(0, 0, Colour(1.0, 0.0, 0.0))
        r, g, b = image.get(0, 0)
        assert r == pytest.approx(0.2126)
        assert g == pytest.approx(r)
        assert b == pytest.approx(r)

    def test_gamma_applied_per_channel(self):
        image = Image(1, 1, gamma=Colour(2.0, 1.0, 1.0))
        image.set(0, 0, Colour(0.25, 0.25, 0.25))
        r, g, b = image.get(0, 0)
        assert r == pytest.approx(0.5)
        assert g == 0.25

    def test_gamma_clamps_before_power(self):
        image = Image(1, 1, gamma=Colour(2.2, 2.2, 2.2))
        image.set(0, 0, Colour(-1.0, 4.0, math.nan))
        assert image.get(0, 0) == Colour(0.0, 1.0, 0.0)


class TestImageConversion:
    """Tests for conversion to 8-bit pixels."""

    def test_to_uint8_clamps_and_truncates(self):
        image = Image(3, 1)
        image.set(0, 0, Colour(2.0, -1.0, 0.5))
        image.set(1, 0, Colour(math.nan, math.inf, -math.inf))
        image.set(2, 0, Colour(1.0, 1.0, 1.0))
        pixels = image.to_uint8()
        assert pixels.dtype == np.uint8
        assert pixels[0].tolist() == [[255, 0, 127], [0, 255, 0], [255, 255, 255]]

    def test_rows_yield_pixels(self):
        image = Image(2, 2)
        image.set(0, 1, Colour(1.0, 1.0, 1.0))
        rows = list(image.rows())
        # Top row first
        assert rows[0][0] == Pixel(255, 255, 255)
        assert rows[1][0] == Pixel(0, 0, 0)
