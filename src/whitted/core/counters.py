"""Device-side trace and shadow-ray counters.

The counters are updated with ``ti.atomic_add`` from inside render kernels
and read from Python once the kernel has returned.
"""

import taichi as ti

# Number of trace evaluations (one per primary ray plus one per reflection)
trace_count = ti.field(dtype=ti.i64, shape=())

# Number of shadow rays that reached their light unblocked
ray_count = ti.field(dtype=ti.i64, shape=())


def reset_device_counters() -> None:
    """Zero both device counters."""
    trace_count[None] = 0
    ray_count[None] = 0


def get_trace_count() -> int:
    return int(trace_count[None])


def get_ray_count() -> int:
    return int(ray_count[None])


@ti.func
def inc_trace_count():
    ti.atomic_add(trace_count[None], 1)


@ti.func
def inc_ray_count():
    ti.atomic_add(ray_count[None], 1)
