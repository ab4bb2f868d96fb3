"""Tests for the material model and its device registry."""

import pytest
import taichi as ti

from whitted.core.colour import Colour
from whitted.materials.material import Material


class TestMaterialValidation:
    """Tests for material coefficient ranges."""

    def test_defaults(self):
        material = Material(Colour(1.0, 0.0, 0.0))
        assert material.ambient == 0.0
        assert material.reflectivity == 0.0

    @pytest.mark.parametrize("name", ["ambient", "diffuse", "specular"])
    def test_coefficients_outside_unit_interval_rejected(self, name):
        with pytest.raises(ValueError, match=name):
            Material(Colour(1.0, 1.0, 1.0), **{name: 1.5})
        with pytest.raises(ValueError, match=name):
            Material(Colour(1.0, 1.0, 1.0), **{name: -0.1})

    def test_negative_shininess_rejected(self):
        with pytest.raises(ValueError, match="shininess"):
            Material(Colour(1.0, 1.0, 1.0), shininess=-1.0)

    def test_perfect_mirror_rejected(self):
        with pytest.raises(ValueError, match="reflectivity"):
            Material(Colour(1.0, 1.0, 1.0), reflectivity=1.0)

    def test_equality_is_identity(self):
        a = Material(Colour(1.0, 0.0, 0.0), diffuse=1.0)
        b = Material(Colour(1.0, 0.0, 0.0), diffuse=1.0)
        assert a == a
        assert a != b

    def test_immutable(self):
        material = Material(Colour(1.0, 0.0, 0.0))
        with pytest.raises(AttributeError):
            material.diffuse = 0.5


class TestMaterialRegistry:
    """Tests for uploading materials into device storage."""

    def test_add_material_returns_sequential_ids(self):
        from whitted.materials.registry import add_material, get_material_count

        first = add_material(Material(Colour(1.0, 0.0, 0.0), diffuse=1.0))
        second = add_material(Material(Colour(0.0, 1.0, 0.0), diffuse=1.0))
        assert (first, second) == (0, 1)
        assert get_material_count() == 2

    def test_clear_materials(self):
        from whitted.materials.registry import add_material, clear_materials, get_material_count

        add_material(Material(Colour(1.0, 0.0, 0.0)))
        clear_materials()
        assert get_material_count() == 0

    def test_properties_readable_in_kernel(self):
        from whitted.materials.registry import (
            add_material,
            get_material_ambient,
            get_material_colour,
            get_material_phong,
            get_material_reflectivity,
        )

        material = Material(
            Colour(0.2, 0.4, 0.6), ambient=0.1, diffuse=0.7, specular=0.3, shininess=12.0,
            reflectivity=0.25,
        )
        mat_id = add_material(material)

        colour = ti.Vector.field(3, dtype=ti.f64, shape=())
        values = ti.field(dtype=ti.f64, shape=5)

        @ti.kernel
        def test_kernel(i: ti.i32):
            colour[None] = get_material_colour(i)
            values[0] = get_material_ambient(i)
            diffuse, specular, shininess = get_material_phong(i)
            values[1] = diffuse
            values[2] = specular
            values[3] = shininess
            values[4] = get_material_reflectivity(i)

        test_kernel(mat_id)
        assert list(colour.to_numpy()) == pytest.approx([0.2, 0.4, 0.6])
        assert list(values.to_numpy()) == pytest.approx([0.1, 0.7, 0.3, 12.0, 0.25])
