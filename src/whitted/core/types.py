"""Scalar and vector types shared by the Taichi backend.

All device-side geometry runs in double precision: the intersection
precision band (``PRECISION``) is far below what f32 can resolve at the
scene scales the demo scenes use.
"""

from typing import Any

import taichi as ti

# Device scalar type
Scalar = ti.f64

# Device 3-vector type
vec3 = ti.types.vector(3, ti.f64)

# The rounding error tolerated when approximating real numbers.
PRECISION = 1e-6


def init(arch: Any = None, **kwargs: Any) -> None:
    """Initialize the Taichi runtime for rendering.

    Forces ``default_fp=ti.f64`` so float literals inside kernels match the
    device field types.

    Args:
        arch: Taichi architecture (default: ``ti.cpu``).
        **kwargs: Extra keyword arguments forwarded to ``ti.init``.
    """
    kwargs.setdefault("default_fp", ti.f64)
    ti.init(arch=ti.cpu if arch is None else arch, **kwargs)
