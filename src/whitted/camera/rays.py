"""Primary ray generation on the device.

The camera basis, film back, focus distance and the image-to-world
transform are uploaded once per render into Taichi fields. Kernels then map
image-space sample positions to rays fired from the lens disk towards each
sample's focus point.

Example:
    >>> import whitted
    >>> whitted.init()
    >>> from whitted.camera.rays import setup_camera
    >>> camera = Camera(Vector(0, 0, -250), Vector(0, 0, 0), 50, 50, Lens(50))
    >>> setup_camera(camera, 512, 512)
"""

import taichi as ti
import taichi.math as tm

from whitted.camera.camera import Camera, image_transform
from whitted.core.types import Scalar, vec3

# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_position = ti.Vector.field(3, dtype=ti.f64, shape=())
_camera_right = ti.Vector.field(3, dtype=ti.f64, shape=())
_camera_up = ti.Vector.field(3, dtype=ti.f64, shape=())
_film_back = ti.Vector.field(3, dtype=ti.f64, shape=())
_focus_distance = ti.field(dtype=ti.f64, shape=())
_aperture = ti.field(dtype=ti.f64, shape=())

# Image space to world space
_image_transform = ti.Matrix.field(4, 4, dtype=ti.f64, shape=())


# =============================================================================
# Camera Setup (Python-side, called once per render)
# =============================================================================


def setup_camera(camera: Camera, width: int, height: int) -> None:
    """Upload camera state for an image of ``width x height`` pixels.

    Args:
        camera: The camera to render from.
        width: Image width in pixels.
        height: Image height in pixels.
    """
    _camera_position[None] = list(camera.position.to_tuple())
    _camera_right[None] = list(camera.right.to_tuple())
    _camera_up[None] = list(camera.up.to_tuple())
    _film_back[None] = list(camera.film_back.to_tuple())
    _focus_distance[None] = camera.focus_distance
    _aperture[None] = camera.lens.aperture
    _image_transform[None] = image_transform(camera, width, height).to_numpy().tolist()


def get_camera_info() -> dict[str, object]:
    """Get current camera state for debugging."""
    return {
        "position": tuple(float(v) for v in _camera_position[None]),
        "right": tuple(float(v) for v in _camera_right[None]),
        "up": tuple(float(v) for v in _camera_up[None]),
        "film_back": tuple(float(v) for v in _film_back[None]),
        "focus_distance": float(_focus_distance[None]),
        "aperture": float(_aperture[None]),
    }


# =============================================================================
# Ray Generation (Taichi-compatible)
# =============================================================================


@ti.func
def image_to_world(x: Scalar, y: Scalar) -> vec3:
    """Map an image-space position onto the camera's film plane."""
    p = _image_transform[None] @ ti.Vector([x, y, 0.0, 1.0], dt=ti.f64)
    return vec3(p[0], p[1], p[2])


@ti.func
def focal_point(image_origin: vec3) -> vec3:
    """Point in focus for a film-plane position.

    Args:
        image_origin: World-space point on the film plane.

    Returns:
        The point ``focus_distance`` from the film back through
        ``image_origin``.
    """
    focal_direction = tm.normalize(image_origin - _film_back[None])
    return _film_back[None] + focal_direction * _focus_distance[None]


@ti.func
def lens_ray(image_origin: vec3, focus: vec3, lens_offset: vec3):
    """Build a ray from a point on the lens disk towards a focus point.

    Args:
        image_origin: World-space point on the film plane.
        focus: The point in focus for ``image_origin``.
        lens_offset: Offset on the lens disk in camera space (x, y).

    Returns:
        A tuple of (origin, direction).
    """
    origin = image_origin + _camera_right[None] * lens_offset.x + _camera_up[None] * lens_offset.y
    direction = tm.normalize(focus - origin)
    return origin, direction


@ti.func
def get_aperture() -> Scalar:
    return _aperture[None]
