"""Seeded random sampling.

Two flavours of sampler live here:

- Python-side distributions (:class:`UniformDistribution`,
  :class:`UniformDiskDistribution`) backed by a seeded
  ``numpy.random.Generator``. Each light or lens owns its own instance.
- Device-side stateless sampling for Taichi kernels. A stream is seeded by
  hashing the render seed together with the image-space sample position, and
  then advanced with xorshift32. Because no state is shared between kernel
  iterations, results do not depend on how Taichi schedules threads.

Example:
    >>> jitter = UniformDistribution(-0.5, 0.5, seed=7)
    >>> -0.5 <= jitter() < 0.5
    True
"""

import math

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from whitted.core.types import Scalar, vec3
from whitted.core.vector import Vector

# Resolution used to turn image-space sample positions into integer keys.
# Supersample positions are multiples of 1/2^k, so 4096 keys per pixel
# keep distinct positions distinct down to 10 subdivision levels.
SAMPLE_KEY_RESOLUTION = 4096.0


class UniformDistribution:
    """Uniform distribution of scalars over ``[lower, upper)``.

    Attributes:
        lower: Inclusive lower bound.
        upper: Exclusive upper bound.
    """

    def __init__(self, lower: float, upper: float, seed: int | None = 0) -> None:
        self.lower = float(lower)
        self.upper = float(upper)
        self._rng = np.random.default_rng(seed)

    def __call__(self) -> float:
        if self.lower == self.upper:
            return self.lower
        return float(self._rng.uniform(self.lower, self.upper))

    def sample(self, n: int) -> npt.NDArray[np.float64]:
        """Draw ``n`` values at once."""
        if self.lower == self.upper:
            return np.full(n, self.lower, dtype=np.float64)
        return self._rng.uniform(self.lower, self.upper, size=n)

    def __repr__(self) -> str:
        return f"UniformDistribution({self.lower}, {self.upper})"


class UniformDiskDistribution:
    """Uniform distribution of points on a disk of ``radius`` in the xy-plane."""

    def __init__(self, radius: float, seed: int | None = 0) -> None:
        self.radius = float(radius)
        self._rng = np.random.default_rng(seed)

    def __call__(self) -> Vector:
        if self.radius == 0.0:
            return Vector(0.0, 0.0, 0.0)
        r = self.radius * math.sqrt(self._rng.random())
        theta = 2.0 * math.pi * self._rng.random()
        return Vector(r * math.cos(theta), r * math.sin(theta), 0.0)

    def __repr__(self) -> str:
        return f"UniformDiskDistribution({self.radius})"


# =============================================================================
# Device-side stateless sampling
# =============================================================================


@ti.func
def wang_hash(value: ti.u32) -> ti.u32:
    """Thomas Wang's 32-bit integer hash.

    Args:
        value: The integer to hash.

    Returns:
        A well-mixed 32-bit value.
    """
    h = (value ^ ti.u32(61)) ^ ti.bit_shr(value, ti.u32(16))
    h = h * ti.u32(9)
    h = h ^ ti.bit_shr(h, ti.u32(4))
    h = h * ti.u32(668265261)
    h = h ^ ti.bit_shr(h, ti.u32(15))
    return h


@ti.func
def seed_stream(x: Scalar, y: Scalar, seed: ti.u32) -> ti.u32:
    """Create a random stream for an image-space sample position.

    Args:
        x: Image-space x coordinate of the sample.
        y: Image-space y coordinate of the sample.
        seed: The render seed.

    Returns:
        A non-zero xorshift32 state.
    """
    kx = ti.cast(ti.cast(ti.floor(x * SAMPLE_KEY_RESOLUTION), ti.i32), ti.u32)
    ky = ti.cast(ti.cast(ti.floor(y * SAMPLE_KEY_RESOLUTION), ti.i32), ti.u32)
    state = wang_hash(seed ^ wang_hash(kx ^ wang_hash(ky)))
    if state == ti.u32(0):
        state = ti.u32(1)
    return state


@ti.func
def next_uniform(state: ti.u32):
    """Draw a uniform value in [0, 1) and advance the stream.

    Args:
        state: The current xorshift32 state (non-zero).

    Returns:
        A tuple of (value, new_state).
    """
    s = state
    s ^= s << ti.u32(13)
    s ^= ti.bit_shr(s, ti.u32(17))
    s ^= s << ti.u32(5)
    # Top 24 bits give an exact f64 in [0, 1).
    value = ti.cast(ti.bit_shr(s, ti.u32(8)), Scalar) / 16777216.0
    return value, s


@ti.func
def sample_disk(state: ti.u32, radius: Scalar):
    """Sample a point uniformly on a disk of ``radius`` in the xy-plane.

    A zero radius consumes no random numbers and returns the origin, so a
    pinhole lens stays fully deterministic.

    Args:
        state: The current stream state.
        radius: The disk radius.

    Returns:
        A tuple of (point, new_state).
    """
    point = vec3(0.0, 0.0, 0.0)
    s = state
    if radius > 0.0:
        u1, s = next_uniform(s)
        u2, s = next_uniform(s)
        r = radius * ti.sqrt(u1)
        theta = 2.0 * tm.pi * u2
        point = vec3(r * ti.cos(theta), r * ti.sin(theta), 0.0)
    return point, s


@ti.func
def sample_box(state: ti.u32, half_width: Scalar):
    """Sample an offset uniformly in ``[-half_width, half_width]`` per axis.

    Args:
        state: The current stream state.
        half_width: Half the side of the sampling cube.

    Returns:
        A tuple of (offset, new_state).
    """
    u1, s = next_uniform(state)
    u2, s = next_uniform(s)
    u3, s = next_uniform(s)
    offset = vec3(2.0 * u1 - 1.0, 2.0 * u2 - 1.0, 2.0 * u3 - 1.0) * half_width
    return offset, s
