"""Point and soft light sources.

Device-side light storage (:mod:`whitted.lights.shading`) declares Taichi
fields and must be imported after :func:`whitted.init`.
"""

from whitted.lights.base import Light, LightKind, occluded
from whitted.lights.point import PointLight
from whitted.lights.soft import SoftLight, soft_light_samples

__all__ = [
    "Light",
    "LightKind",
    "occluded",
    "PointLight",
    "SoftLight",
    "soft_light_samples",
]
