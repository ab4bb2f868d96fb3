"""Pytest configuration for whitted tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    import whitted

    whitted.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear device storage and counters before and after each test.

    This ensures tests are isolated from each other.
    """
    # Import here so the field modules are created after Taichi is initialized
    from whitted.core import profiling
    from whitted.core.renderer import reset_active_renderer
    from whitted.lights.shading import clear_lights
    from whitted.materials.registry import clear_materials
    from whitted.scene.intersection import clear_scene

    def _clear_all():
        clear_scene()
        clear_lights()
        clear_materials()
        profiling.reset_counters()
        reset_active_renderer()

    _clear_all()

    yield

    _clear_all()


@pytest.fixture
def red_material():
    """A matte red material without ambient or reflection."""
    from whitted.core.colour import Colour
    from whitted.materials.material import Material

    return Material(Colour(1.0, 0.0, 0.0), ambient=0.0, diffuse=1.0, specular=0.0, shininess=1.0)


@pytest.fixture
def head_on_camera():
    """A pinhole camera on the -z axis looking at the origin."""
    from whitted.camera.camera import Camera
    from whitted.camera.lens import Lens
    from whitted.core.vector import Vector

    return Camera(Vector(0.0, 0.0, -250.0), Vector(0.0, 0.0, 0.0), 50.0, 50.0, Lens(50.0, aperture=0.0))
