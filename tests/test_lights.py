"""Tests for point and soft lights.

Tests cover:
- The diffuse and Blinn-Phong lighting model
- Shadow testing, bounded by the distance to the light
- Soft light sample counts and sample averaging
- Device light storage
"""

import math

import pytest

from whitted.core.colour import BLACK, Colour
from whitted.core.ray import Ray
from whitted.core.vector import Vector
from whitted.geometry.sphere import Sphere
from whitted.lights.base import LightKind, occluded
from whitted.lights.point import PointLight
from whitted.lights.soft import SoftLight, soft_light_samples
from whitted.materials.material import Material

MATTE = Material(Colour(1.0, 0.5, 0.25), diffuse=1.0)
SHINY = Material(Colour(1.0, 1.0, 1.0), diffuse=0.0, specular=1.0, shininess=10.0)

UP = Vector(0.0, 1.0, 0.0)
ORIGIN = Vector(0.0, 0.0, 0.0)


class TestOcclusion:
    """Tests for shadow ray occlusion."""

    def test_object_between_point_and_light(self):
        blocker = Sphere(Vector(0.0, 5.0, 0.0), 1.0, MATTE)
        assert occluded(Ray(ORIGIN, UP), [blocker], 10.0)

    def test_object_beyond_light_does_not_occlude(self):
        blocker = Sphere(Vector(0.0, 20.0, 0.0), 1.0, MATTE)
        assert not occluded(Ray(ORIGIN, UP), [blocker], 10.0)

    def test_no_objects(self):
        assert not occluded(Ray(ORIGIN, UP), [], 10.0)


class TestPointLight:
    """Tests for point light shading."""

    def test_light_straight_above(self):
        """Full Lambertian response when the light is along the normal."""
        light = PointLight(Vector(0.0, 10.0, 0.0), Colour(1.0, 1.0, 1.0))
        result = light.shade(ORIGIN, UP, UP, MATTE, [])
        assert result.r == pytest.approx(1.0)
        assert result.g == pytest.approx(0.5)
        assert result.b == pytest.approx(0.25)

    def test_lambert_cosine(self):
        light = PointLight(Vector(10.0, 10.0, 0.0), Colour(1.0, 1.0, 1.0))
        result = light.shade(ORIGIN, UP, UP, MATTE, [])
        assert result.r == pytest.approx(math.cos(math.radians(45.0)))

    def test_light_below_surface_gives_black(self):
        light = PointLight(Vector(0.0, -10.0, 0.0), Colour(1.0, 1.0, 1.0))
        result = light.shade(ORIGIN, UP, UP, MATTE, [])
        assert result == BLACK

    def test_occluded_light_contributes_exactly_zero(self):
        light = PointLight(Vector(0.0, 10.0, 0.0), Colour(1.0, 1.0, 1.0))
        blocker = Sphere(Vector(0.0, 5.0, 0.0), 1.0, MATTE)
        result = light.shade(ORIGIN, UP, UP, SHINY, [blocker])
        assert result == Colour(0.0, 0.0, 0.0)

    def test_specular_highlight_on_mirror_direction(self):
        """The half vector equals the normal for a mirror configuration."""
        light = PointLight(Vector(10.0, 10.0, 0.0), Colour(1.0, 1.0, 1.0))
        to_ray = Vector(-1.0, 1.0, 0.0).normalise()
        result = light.shade(ORIGIN, UP, to_ray, SHINY, [])
        assert result.r == pytest.approx(1.0)

    def test_single_sample(self):
        light = PointLight(ORIGIN, Colour(1.0, 1.0, 1.0))
        assert light.samples == 1
        assert light.radius == 0.0
        assert light.kind == LightKind.POINT


class TestSoftLight:
    """Tests for soft light sampling."""

    @pytest.mark.parametrize(
        "radius,expected",
        [(0.0, 1), (4.0, 2), (12.0, 28), (20.0, 126)],
    )
    def test_sample_count_from_radius(self, radius, expected):
        assert soft_light_samples(radius) == expected
        assert SoftLight(ORIGIN, Colour(1.0, 1.0, 1.0), radius=radius).samples == expected

    def test_explicit_sample_count(self):
        light = SoftLight(ORIGIN, Colour(1.0, 1.0, 1.0), radius=20.0, samples=4)
        assert light.samples == 4

    def test_invalid_parameters_rejected(self):
        with pytest.raises(ValueError):
            SoftLight(ORIGIN, Colour(1.0, 1.0, 1.0), radius=-1.0)
        with pytest.raises(ValueError):
            SoftLight(ORIGIN, Colour(1.0, 1.0, 1.0), samples=0)

    def test_zero_radius_matches_point_light(self):
        soft = SoftLight(Vector(3.0, 10.0, -2.0), Colour(0.8, 0.8, 0.8))
        point = PointLight(Vector(3.0, 10.0, -2.0), Colour(0.8, 0.8, 0.8))
        to_ray = Vector(0.0, 1.0, -1.0).normalise()
        a = soft.shade(ORIGIN, UP, to_ray, MATTE, [])
        b = point.shade(ORIGIN, UP, to_ray, MATTE, [])
        assert a.to_tuple() == pytest.approx(b.to_tuple())

    def test_samples_share_the_light_colour(self):
        """An unobstructed soft light far away approaches a point light."""
        soft = SoftLight(Vector(0.0, 1000.0, 0.0), Colour(1.0, 1.0, 1.0), radius=1.0, samples=16)
        result = soft.shade(ORIGIN, UP, UP, MATTE, [])
        assert result.r == pytest.approx(1.0, abs=1e-4)

    def test_partial_occlusion_gives_penumbra(self):
        light = SoftLight(Vector(0.0, 10.0, 0.0), Colour(1.0, 1.0, 1.0), radius=4.0, samples=64, seed=3)
        # Blocks roughly half the light volume
        blocker = Sphere(Vector(2.5, 5.0, 0.0), 2.0, MATTE)
        result = light.shade(ORIGIN, UP, UP, MATTE, [blocker])
        assert 0.0 < result.r < 1.0

    def test_kind(self):
        assert SoftLight(ORIGIN, Colour(1.0, 1.0, 1.0)).kind == LightKind.SOFT


class TestDeviceLights:
    """Tests for device light storage."""

    def test_add_and_clear_lights(self):
        from whitted.lights.shading import (
            add_light,
            clear_lights,
            get_light_count,
            light_kinds,
            light_samples,
        )

        add_light(PointLight(ORIGIN, Colour(1.0, 1.0, 1.0)))
        idx = add_light(SoftLight(ORIGIN, Colour(1.0, 1.0, 1.0), radius=20.0))
        assert idx == 1
        assert get_light_count() == 2
        assert light_kinds[0] == int(LightKind.POINT)
        assert light_kinds[1] == int(LightKind.SOFT)
        assert light_samples[1] == 126

        clear_lights()
        assert get_light_count() == 0
