"""Profiling counters and timers.

Four monotonically increasing counters are kept:

- objects and lights registered, bumped on the Python side whenever a
  :class:`~whitted.scene.scene.Scene` is constructed;
- traces performed and unblocked shadow rays, bumped atomically on the device by
  the render kernels (see :mod:`whitted.core.counters`).

Nothing here prints; callers format :class:`RenderStats` themselves.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass

_lock = threading.Lock()
_objects_count = 0
_lights_count = 0


def inc_objects_count(n: int = 1) -> None:
    """Record ``n`` newly registered objects."""
    global _objects_count
    with _lock:
        _objects_count += n


def inc_lights_count(n: int = 1) -> None:
    """Record ``n`` newly registered light samples."""
    global _lights_count
    with _lock:
        _lights_count += n


def get_objects_count() -> int:
    return _objects_count


def get_lights_count() -> int:
    return _lights_count


def get_trace_count() -> int:
    """Number of trace evaluations since the last reset."""
    from whitted.core.counters import get_trace_count as _device_trace_count

    return _device_trace_count()


def get_ray_count() -> int:
    """Number of unblocked shadow rays since the last reset."""
    from whitted.core.counters import get_ray_count as _device_ray_count

    return _device_ray_count()


def reset_counters(device: bool = True) -> None:
    """Zero every counter.

    Args:
        device: Also reset the device-side trace and ray counters. Requires
            an initialized Taichi runtime.
    """
    global _objects_count, _lights_count
    with _lock:
        _objects_count = 0
        _lights_count = 0
    if device:
        from whitted.core.counters import reset_device_counters

        reset_device_counters()


class Timer:
    """Wall-clock timer started at construction.

    Example:
        >>> timer = Timer()
        >>> timer.elapsed() >= 0.0
        True
    """

    def __init__(self) -> None:
        self._start = time.perf_counter()

    def elapsed(self) -> float:
        """Seconds since the timer was started."""
        return time.perf_counter() - self._start

    def reset(self) -> None:
        self._start = time.perf_counter()


@dataclass(frozen=True)
class RenderStats:
    """Summary of a finished render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        elapsed: Render time in seconds.
        traces: Trace evaluations performed.
        rays: Shadow rays that reached their light unblocked.
        supersampled_pixels: Pixels refined by adaptive supersampling.
    """

    width: int
    height: int
    elapsed: float
    traces: int
    rays: int
    supersampled_pixels: int = 0

    @property
    def traces_per_pixel(self) -> float:
        return self.traces / (self.width * self.height)

    @property
    def traces_per_second(self) -> float:
        return self.traces / self.elapsed if self.elapsed > 0 else 0.0

    def summary(self) -> str:
        """One-line description used in render log messages."""
        return (
            f"{self.width}x{self.height} in {self.elapsed:.3f}s: {self.traces} traces, "
            f"{self.rays} rays, {self.supersampled_pixels} supersampled pixels"
        )
