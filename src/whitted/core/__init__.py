"""Core value types, sampling, image buffer and render configuration.

The device counter and renderer modules declare Taichi fields and are
imported directly once the runtime is initialized.
"""

from whitted.core.colour import BLACK, WHITE, Colour, Pixel
from whitted.core.config import RenderConfig
from whitted.core.image import Image
from whitted.core.matrix import (
    Matrix,
    RotationX,
    RotationY,
    RotationZ,
    Scale,
    Translation,
    rotation,
)
from whitted.core.ray import Ray
from whitted.core.sampler import UniformDiskDistribution, UniformDistribution
from whitted.core.types import PRECISION
from whitted.core.vector import Vector

__all__ = [
    "BLACK",
    "WHITE",
    "Colour",
    "Pixel",
    "RenderConfig",
    "Image",
    "Matrix",
    "RotationX",
    "RotationY",
    "RotationZ",
    "Scale",
    "Translation",
    "rotation",
    "Ray",
    "UniformDiskDistribution",
    "UniformDistribution",
    "PRECISION",
    "Vector",
]
