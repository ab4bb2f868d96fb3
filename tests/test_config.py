"""Tests for render configuration and profiling helpers."""

import dataclasses

import pytest

from whitted.core import profiling
from whitted.core.colour import BLACK, WHITE
from whitted.core.config import (
    MAX_PIXEL_DIFF,
    MAX_RAY_DEPTH,
    MAX_SUBPIXEL_DEPTH,
    MAX_SUBPIXEL_DIFF,
    RenderConfig,
)


class TestRenderConfig:
    """Tests for RenderConfig defaults and validation."""

    def test_defaults(self):
        config = RenderConfig()
        assert config.max_ray_depth == MAX_RAY_DEPTH == 5
        assert config.strategy == "adaptive"
        assert config.max_pixel_diff == MAX_PIXEL_DIFF == 0.040
        assert config.max_subpixel_diff == MAX_SUBPIXEL_DIFF == 0.008
        assert config.max_subpixel_depth == MAX_SUBPIXEL_DEPTH == 3
        assert config.background == BLACK
        assert config.highlight_colour == WHITE
        assert not config.show_supersample_pixels
        assert not config.show_recursive_supersample_pixels

    def test_unknown_strategy_rejected(self):
        with pytest.raises(ValueError, match="strategy"):
            RenderConfig(strategy="uniform")

    @pytest.mark.parametrize(
        "field",
        ["max_ray_depth", "num_dof_samples", "max_subpixel_depth", "antialiasing_samples"],
    )
    def test_negative_counts_rejected(self, field):
        with pytest.raises(ValueError, match=field):
            RenderConfig(**{field: -1})

    @pytest.mark.parametrize("field", ["max_pixel_diff", "max_subpixel_diff", "antialiasing_offset"])
    def test_negative_thresholds_rejected(self, field):
        with pytest.raises(ValueError, match=field):
            RenderConfig(**{field: -0.1})

    @pytest.mark.parametrize("seed", [-1, 2**32])
    def test_seed_must_fit_32_bits(self, seed):
        with pytest.raises(ValueError, match="seed"):
            RenderConfig(seed=seed)

    @pytest.mark.parametrize("requested,effective", [(0, 1), (1, 1), (16, 16)])
    def test_dof_samples_at_least_one(self, requested, effective):
        assert RenderConfig(num_dof_samples=requested).dof_samples == effective

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            RenderConfig().seed = 3


class TestProfiling:
    """Tests for the Python-side profiling counters."""

    def test_scene_construction_counts_objects_and_light_samples(self):
        from whitted.core.colour import Colour
        from whitted.core.vector import Vector
        from whitted.geometry.sphere import Sphere
        from whitted.lights.point import PointLight
        from whitted.lights.soft import SoftLight
        from whitted.materials.material import Material
        from whitted.scene.scene import Scene

        material = Material(Colour(1.0, 1.0, 1.0), diffuse=1.0)
        Scene(
            [Sphere(Vector(0.0, 0.0, 0.0), 1.0, material), Sphere(Vector(3.0, 0.0, 0.0), 1.0, material)],
            [PointLight(Vector(0.0, 5.0, 0.0), Colour(1.0, 1.0, 1.0)),
             SoftLight(Vector(0.0, 5.0, 0.0), Colour(1.0, 1.0, 1.0), radius=12.0)],
        )
        assert profiling.get_objects_count() == 2
        assert profiling.get_lights_count() == 1 + 28

    def test_reset_counters(self):
        profiling.inc_objects_count(3)
        profiling.inc_lights_count(2)
        profiling.reset_counters()
        assert profiling.get_objects_count() == 0
        assert profiling.get_lights_count() == 0
        assert profiling.get_trace_count() == 0
        assert profiling.get_ray_count() == 0

    def test_timer(self):
        timer = profiling.Timer()
        assert timer.elapsed() >= 0.0
        timer.reset()
        assert timer.elapsed() >= 0.0

    def test_render_stats_rates(self):
        stats = profiling.RenderStats(width=10, height=10, elapsed=2.0, traces=400, rays=50)
        assert stats.traces_per_pixel == 4.0
        assert stats.traces_per_second == 200.0
        assert profiling.RenderStats(1, 1, 0.0, 5, 0).traces_per_second == 0.0

    def test_render_stats_summary(self):
        stats = profiling.RenderStats(
            width=4, height=3, elapsed=0.25, traces=12, rays=7, supersampled_pixels=2
        )
        assert stats.summary() == "4x3 in 0.250s: 12 traces, 7 rays, 2 supersampled pixels"
