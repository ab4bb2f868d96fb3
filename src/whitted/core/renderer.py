"""Whitted-style ray tracing renderer.

This module implements the render pipeline on the Taichi backend:

- ``render_point``: fires depth-of-field rays from the lens disk through an
  image-space sample position and averages their traces
- ``trace``: nearest intersection, ambient plus per-light shading, and
  mirror reflection up to ``max_ray_depth`` bounces
- :class:`Renderer`: uploads the scene and camera, runs the configured
  sampling strategy and writes the image

Reflection is evaluated as a bounded loop carrying the product of the
reflectivities seen so far, which is equivalent to the recursion
``colour + reflectivity * trace(reflection, depth + 1)``.

Random decisions (lens and soft light samples) draw from a stream keyed by
the render seed and the sample position, so repeated renders are identical
regardless of thread scheduling.

Example:
    >>> import whitted
    >>> whitted.init()
    >>> from whitted.core.renderer import Renderer
    >>> scene, camera = create_three_spheres_scene()
    >>> renderer = Renderer(scene, camera, RenderConfig(max_ray_depth=3))
    >>> image = Image(128, 128)
    >>> renderer.render(image)
"""

import itertools
import logging

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from whitted.camera.camera import Camera
from whitted.camera.rays import focal_point, get_aperture, image_to_world, lens_ray, setup_camera
from whitted.core import profiling
from whitted.core.antialiasing import SamplingResult, render_adaptive, render_stochastic
from whitted.core.colour import Colour
from whitted.core.config import RenderConfig
from whitted.core.counters import inc_trace_count
from whitted.core.image import Image
from whitted.core.ray import Ray, ray_at, reflect_direction
from whitted.core.sampler import sample_disk, seed_stream
from whitted.core.types import Scalar, vec3
from whitted.lights.shading import shade_lights
from whitted.materials.registry import (
    get_material_ambient,
    get_material_colour,
    get_material_reflectivity,
)
from whitted.scene.intersection import closest_intersect, object_material, object_normal
from whitted.scene.manager import SceneManager
from whitted.scene.scene import Scene

logger = logging.getLogger(__name__)

# Maximum supported image dimensions
MAX_IMAGE_WIDTH = 8192
MAX_IMAGE_HEIGHT = 8192


# =============================================================================
# Tracing
# =============================================================================


@ti.func
def trace(origin: vec3, direction: vec3, max_depth: ti.i32, background: vec3, state: ti.u32):
    """Trace a ray through the scene.

    Args:
        origin: The ray origin.
        direction: The unit ray direction.
        max_depth: Maximum number of reflection bounces.
        background: Colour of rays that hit nothing.
        state: Random stream state.

    Returns:
        A tuple of (colour, new_state).
    """
    colour = vec3(0.0, 0.0, 0.0)
    weight = 1.0
    o = origin
    d = direction
    s = state

    # Active flag for reflection continuation (no break in ti.func loops)
    active = 1

    for depth in range(max_depth + 1):
        if active == 1:
            inc_trace_count()
            index, t = closest_intersect(o, d)

            if index < 0:
                colour += background * weight
                active = 0
            else:
                point = ray_at(o, d, t)
                normal = object_normal(index, point)
                to_ray = tm.normalize(o - point)
                material_id = object_material(index, point)

                local = get_material_colour(material_id) * get_material_ambient(material_id)
                lit, s = shade_lights(point, normal, to_ray, material_id, s)
                colour += (local + lit) * weight

                reflectivity = get_material_reflectivity(material_id)
                if depth < max_depth and reflectivity > 0.0:
                    d = reflect_direction(to_ray, normal)
                    o = point
                    weight *= reflectivity
                else:
                    active = 0

    return colour, s


@ti.func
def render_point(x: Scalar, y: Scalar, max_depth: ti.i32, dof_samples: ti.i32, seed: ti.u32, background: vec3) -> vec3:
    """Evaluate the colour at an image-space sample position.

    Args:
        x: Image-space x coordinate.
        y: Image-space y coordinate.
        max_depth: Maximum number of reflection bounces.
        dof_samples: Number of lens rays to average (at least 1).
        seed: The render seed.
        background: Colour of rays that hit nothing.

    Returns:
        The averaged colour of the lens rays.
    """
    s = seed_stream(x, y, seed)
    image_origin = image_to_world(x, y)
    focus = focal_point(image_origin)

    output = vec3(0.0, 0.0, 0.0)
    for _ in range(dof_samples):
        offset, s = sample_disk(s, get_aperture())
        origin, direction = lens_ray(image_origin, focus, offset)
        colour, s = trace(origin, direction, max_depth, background, s)
        output += colour / ti.cast(dof_samples, Scalar)
    return output


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_points(
    xs: ti.types.ndarray(dtype=ti.f64, ndim=1),
    ys: ti.types.ndarray(dtype=ti.f64, ndim=1),
    out: ti.types.ndarray(dtype=ti.f64, ndim=2),
    max_depth: ti.i32,
    dof_samples: ti.i32,
    seed: ti.u32,
    background: vec3,
):
    """Evaluate a batch of sample positions in parallel.

    Each iteration writes only its own output row.
    """
    for i in range(xs.shape[0]):
        colour = render_point(xs[i], ys[i], max_depth, dof_samples, seed, background)
        for c in ti.static(range(3)):
            out[i, c] = colour[c]


@ti.kernel
def _trace_one(origin: vec3, direction: vec3, max_depth: ti.i32, seed: ti.u32, background: vec3) -> vec3:
    """Trace a single ray. Used for testing and debugging."""
    colour, _ = trace(origin, direction, max_depth, background, seed_stream(0.0, 0.0, seed))
    return colour


# =============================================================================
# Public Rendering API
# =============================================================================

# Tokens identify which renderer's scene and camera are in device storage
_tokens = itertools.count()
_active_state: tuple[int, int, int] | None = None


def reset_active_renderer() -> None:
    """Forget which renderer owns device storage.

    Call after clearing device storage by other means, so the next render
    uploads its scene again.
    """
    global _active_state
    _active_state = None


class Renderer:
    """Renders a scene through a camera into images.

    The renderer only reads the scene and camera: both are copied into
    device storage before rendering.

    Attributes:
        scene: The scene to render.
        camera: The camera to render through.
        config: Render settings.
        stats: Summary of the most recent :meth:`render`, if any.
    """

    def __init__(self, scene: Scene, camera: Camera, config: RenderConfig | None = None) -> None:
        self.scene = scene
        self.camera = camera
        self.config = config if config is not None else RenderConfig()
        self.stats: profiling.RenderStats | None = None
        self._token = next(_tokens)
        self._manager: SceneManager | None = None
        self._size: tuple[int, int] | None = None

    def prepare(self, width: int, height: int) -> None:
        """Upload the scene and camera for a ``width x height`` image.

        Called by :meth:`render`; call it directly before using
        :meth:`render_point` or :meth:`render_points`.

        Raises:
            ValueError: If the dimensions are not supported.
            RuntimeError: If the scene exceeds a device capacity.
        """
        global _active_state
        if width <= 0 or height <= 0 or width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
            raise ValueError(
                f"Image dimensions ({width}x{height}) outside supported range "
                f"(1x1 to {MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
            )
        if _active_state == (self._token, width, height):
            return
        # No renderer owns device storage while it is rewritten
        _active_state = None
        if self._manager is None:
            self._manager = SceneManager()
        self._manager.upload(self.scene)
        setup_camera(self.camera, width, height)
        self._size = (width, height)
        _active_state = (self._token, width, height)

    def _check_prepared(self) -> None:
        if self._size is None:
            raise RuntimeError("Renderer not prepared. Call prepare() or render() first.")
        self.prepare(*self._size)

    def render_points(
        self, xs: npt.NDArray[np.float64], ys: npt.NDArray[np.float64]
    ) -> npt.NDArray[np.float64]:
        """Evaluate many image-space sample positions in one kernel launch.

        Args:
            xs: Sample x coordinates.
            ys: Sample y coordinates, same length as ``xs``.

        Returns:
            Array of shape (n, 3) with one colour per sample.

        Raises:
            RuntimeError: If the renderer has not been prepared.
        """
        self._check_prepared()
        xs = np.ascontiguousarray(xs, dtype=np.float64)
        ys = np.ascontiguousarray(ys, dtype=np.float64)
        out = np.zeros((xs.size, 3), dtype=np.float64)
        if xs.size == 0:
            return out
        _render_points(
            xs,
            ys,
            out,
            self.config.max_ray_depth,
            self.config.dof_samples,
            self.config.seed,
            vec3(*self.config.background.to_tuple()),
        )
        return out

    def render_point(self, x: float, y: float) -> Colour:
        """Evaluate a single image-space sample position."""
        r, g, b = self.render_points(np.array([x]), np.array([y]))[0]
        return Colour(float(r), float(g), float(b))

    def trace(self, ray: Ray) -> Colour:
        """Trace a single ray through the scene.

        Raises:
            RuntimeError: If the renderer has not been prepared.
        """
        self._check_prepared()
        colour = _trace_one(
            vec3(*ray.position.to_tuple()),
            vec3(*ray.direction.to_tuple()),
            self.config.max_ray_depth,
            self.config.seed,
            vec3(*self.config.background.to_tuple()),
        )
        return Colour(float(colour[0]), float(colour[1]), float(colour[2]))

    def render(self, image: Image) -> None:
        """Render the scene into ``image``.

        Args:
            image: The image to fill. Every pixel is overwritten.

        Raises:
            ValueError: If the image dimensions are not supported.
            RuntimeError: If the scene exceeds a device capacity.
        """
        timer = profiling.Timer()
        traces_before = profiling.get_trace_count()
        rays_before = profiling.get_ray_count()

        self.prepare(image.width, image.height)
        logger.debug(
            "Rendering %dx%d with %s sampling, max depth %d, %d DoF samples",
            image.width,
            image.height,
            self.config.strategy,
            self.config.max_ray_depth,
            self.config.dof_samples,
        )

        result = self._sample(image.width, image.height)
        image.set_all(result.colours)

        self.stats = profiling.RenderStats(
            width=image.width,
            height=image.height,
            elapsed=timer.elapsed(),
            traces=profiling.get_trace_count() - traces_before,
            rays=profiling.get_ray_count() - rays_before,
            supersampled_pixels=result.supersampled,
        )
        logger.info("Rendered %s", self.stats.summary())

    def _sample(self, width: int, height: int) -> SamplingResult:
        if self.config.strategy == "stochastic":
            return render_stochastic(self.render_points, width, height, self.config)
        return render_adaptive(self.render_points, width, height, self.config)

    def __repr__(self) -> str:
        return f"Renderer({self.scene!r}, {self.camera!r}, {self.config!r})"
