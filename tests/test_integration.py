"""Integration tests for end-to-end rendering pipeline.

This module tests the complete rendering pipeline from scene creation through
final image output. It verifies that all components work together correctly
and that the output meets basic quality criteria.

Tests are designed to be fast (low resolution, few samples) while still
exercising the full pipeline.

Note: Imports are done inside test methods to avoid Taichi initialization issues.
The conftest.py fixture initializes Taichi before tests run.
"""

from __future__ import annotations

import importlib
import pkgutil

import numpy as np
import pytest

from whitted.core.config import RenderConfig
from whitted.core.image import Image


def _whitted_modules():
    import whitted

    return sorted(
        info.name for info in pkgutil.walk_packages(whitted.__path__, prefix="whitted.")
    )


class TestPackage:
    """Every module imports, including those that compile Taichi functions."""

    @pytest.mark.parametrize("name", _whitted_modules())
    def test_module_imports(self, name) -> None:
        module = importlib.import_module(name)
        assert module.__name__ == name


class TestDemoScenes:
    """Integration tests for the demo scenes."""

    @pytest.mark.parametrize("name", ["spheres", "mirrors"])
    def test_demo_scene_renders(self, name) -> None:
        """Test that each demo scene renders a finite, non-empty image."""
        from whitted.core.renderer import Renderer
        from whitted.scene.demo import SCENES

        scene, camera = SCENES[name]()
        renderer = Renderer(scene, camera, RenderConfig(max_ray_depth=3))
        image = Image(24, 24)
        renderer.render(image)

        assert np.all(np.isfinite(image.data))
        assert image.data.max() > 0.0
        assert renderer.stats.traces > 0
        assert renderer.stats.rays > 0

    def test_three_spheres_layout(self) -> None:
        from whitted.scene.demo import create_three_spheres_scene

        scene, camera = create_three_spheres_scene()
        assert len(scene.objects) == 3
        assert len(scene.lights) == 2
        assert camera.lens.focal_length == 50.0

    def test_mirror_scene_has_reflective_floor(self) -> None:
        from whitted.geometry.plane import CheckerBoard
        from whitted.scene.demo import create_mirror_scene

        scene, camera = create_mirror_scene(aperture=0.0)
        board = scene.objects[0]
        assert isinstance(board, CheckerBoard)
        assert board.material1.reflectivity > 0.0
        assert camera.lens.aperture == 0.0

    def test_mirror_scene_reflections_add_traces(self) -> None:
        from whitted.core.renderer import Renderer
        from whitted.scene.demo import create_mirror_scene

        scene, camera = create_mirror_scene(aperture=0.0, light_radius=0.0)
        renderer = Renderer(scene, camera, RenderConfig(strategy="stochastic", max_ray_depth=4))
        renderer.render(Image(16, 16))
        assert 16 * 16 < renderer.stats.traces <= 16 * 16 * 5


class TestOutputFiles:
    """End-to-end tests writing image files."""

    def test_render_to_ppm(self, tmp_path) -> None:
        from whitted.core.renderer import Renderer
        from whitted.preview.export import read_ppm, write_ppm
        from whitted.scene.demo import create_three_spheres_scene

        scene, camera = create_three_spheres_scene()
        image = Image(16, 12)
        Renderer(scene, camera).render(image)

        path = tmp_path / "spheres.ppm"
        write_ppm(image, path)
        width, height, max_value, pixels = read_ppm(path)
        assert (width, height, max_value) == (16, 12, 255)
        assert np.array_equal(pixels, image.to_uint8())

    @pytest.mark.parametrize("suffix", [".ppm", ".png"])
    def test_render_scene_script(self, tmp_path, suffix) -> None:
        from examples.render_scene import render_scene

        output = render_scene(
            scene_name="spheres",
            width=12,
            height=12,
            output_path=str(tmp_path / f"out{suffix}"),
            depth=2,
            quiet=True,
        )
        assert output.exists()
        assert output.stat().st_size > 0
