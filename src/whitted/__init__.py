"""Whitted-style offline ray tracer built on Taichi.

This package renders scenes of spheres, planes and checkerboards lit by point
and soft lights, with:
- Recursive mirror reflection bounded by a maximum ray depth
- Adaptive (edge-driven) or stochastic supersampling
- Thin-lens depth of field
- Plain-text PPM output

Subpackages:
    core: Math value types, sampling, image buffer, configuration and renderer
    geometry: Sphere, plane and checkerboard primitives
    materials: Phong material model and its device registry
    lights: Point and soft light sources
    camera: Lens/camera model and primary ray generation
    scene: Scene aggregate, device upload and demo scenes
    preview: PPM/PNG export and display helpers

Modules that declare Taichi fields (``scene.intersection``,
``materials.registry``, ``lights.shading``, ``camera.rays``,
``core.counters``, ``core.renderer``) are not imported here; call
:func:`init` before importing them.
"""

from whitted.core.types import init

__version__ = "0.1.0"

__all__ = ["init", "__version__"]
