"""Tests for the Scene aggregate and its upload into device storage."""

import pytest

from whitted.core.colour import Colour
from whitted.core.vector import Vector
from whitted.geometry.base import SceneObject
from whitted.geometry.plane import CheckerBoard, Plane
from whitted.geometry.sphere import Sphere
from whitted.lights.point import PointLight
from whitted.lights.soft import SoftLight
from whitted.materials.material import Material
from whitted.scene.scene import Scene


@pytest.fixture
def materials():
    red = Material(Colour(1.0, 0.0, 0.0), diffuse=1.0)
    white = Material(Colour(1.0, 1.0, 1.0), diffuse=1.0, reflectivity=0.5)
    black = Material(Colour(0.0, 0.0, 0.0), diffuse=1.0)
    return red, white, black


@pytest.fixture
def scene(materials):
    red, white, black = materials
    return Scene(
        [
            Sphere(Vector(0.0, 0.0, 0.0), 1.0, red),
            Sphere(Vector(3.0, 0.0, 0.0), 1.0, red),
            CheckerBoard(Vector(0.0, -1.0, 0.0), Vector(0.0, 1.0, 0.0), 2.0, white, black),
            Plane(Vector(0.0, 0.0, 50.0), Vector(0.0, 0.0, -1.0), white),
        ],
        [
            PointLight(Vector(0.0, 10.0, 0.0), Colour(1.0, 1.0, 1.0)),
            SoftLight(Vector(5.0, 10.0, 0.0), Colour(0.5, 0.5, 0.5), radius=4.0),
        ],
    )


class TestScene:
    """Tests for the immutable scene aggregate."""

    def test_materials_deduplicated_in_first_use_order(self, scene, materials):
        red, white, black = materials
        assert scene.materials() == [red, white, black]

    def test_immutable(self, scene):
        with pytest.raises(AttributeError):
            scene.objects = ()

    def test_collections_are_tuples(self):
        scene = Scene(iter([]), iter([]))
        assert scene.objects == ()
        assert scene.lights == ()


class TestSceneManager:
    """Tests for uploading scenes."""

    def test_upload_counts(self, scene):
        from whitted.scene.manager import SceneManager

        manager = SceneManager()
        manager.upload(scene)
        assert manager.get_stats() == {"objects": 4, "lights": 2, "materials": 3}
        assert manager.scene is scene

    def test_shared_material_shares_id(self, scene, materials):
        from whitted.scene.intersection import object_alt_material_ids, object_material_ids
        from whitted.scene.manager import SceneManager

        red, white, black = materials
        manager = SceneManager()
        manager.upload(scene)

        assert object_material_ids[0] == object_material_ids[1] == manager.material_ids[id(red)]
        assert object_material_ids[2] == manager.material_ids[id(white)]
        assert object_alt_material_ids[2] == manager.material_ids[id(black)]
        assert object_material_ids[3] == manager.material_ids[id(white)]

    def test_object_kinds(self, scene):
        from whitted.geometry.base import ObjectKind
        from whitted.scene.intersection import object_extents, object_kinds
        from whitted.scene.manager import SceneManager

        SceneManager().upload(scene)
        kinds = [object_kinds[i] for i in range(4)]
        assert kinds == [ObjectKind.SPHERE, ObjectKind.SPHERE, ObjectKind.CHECKERBOARD, ObjectKind.PLANE]
        assert object_extents[2] == 2.0

    def test_upload_replaces_previous_scene(self, scene, materials):
        from whitted.scene.manager import SceneManager

        red, _, _ = materials
        manager = SceneManager()
        manager.upload(scene)
        manager.upload(Scene([Sphere(Vector(0.0, 0.0, 0.0), 1.0, red)], []))
        assert manager.get_stats() == {"objects": 1, "lights": 0, "materials": 1}

    def test_clear(self, scene):
        from whitted.scene.manager import SceneManager

        manager = SceneManager()
        manager.upload(scene)
        manager.clear()
        assert manager.get_stats() == {"objects": 0, "lights": 0, "materials": 0}
        assert manager.material_ids == {}
        assert manager.scene is None

    def test_unsupported_object_rejected(self, materials):
        from whitted.scene.manager import SceneManager

        class Cube(SceneObject):
            def intersect(self, ray):
                return 0.0

            def normal(self, point):
                return Vector(0.0, 1.0, 0.0)

            def surface(self, point):
                return materials[0]

            def materials(self):
                return (materials[0],)

        with pytest.raises(ValueError, match="Cube"):
            SceneManager().upload(Scene([Cube(Vector(0.0, 0.0, 0.0))], []))
