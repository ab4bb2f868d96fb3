"""Device-side light storage and shading.

Uploaded lights live in Structure-of-Arrays Taichi fields tagged with their
:class:`~whitted.lights.base.LightKind`. :func:`shade_light` evaluates the
lighting model of :mod:`whitted.lights.base` inside kernels, drawing soft
light sample offsets from the caller's random stream.
"""

import taichi as ti
import taichi.math as tm

from whitted.core.counters import inc_ray_count
from whitted.core.sampler import sample_box
from whitted.core.types import Scalar, vec3
from whitted.lights.base import Light, LightKind
from whitted.materials.registry import get_material_colour, get_material_phong
from whitted.scene.intersection import occluded

# Maximum number of lights in the scene
MAX_LIGHTS = 1024

_SOFT = int(LightKind.SOFT)

light_kinds = ti.field(dtype=ti.i32, shape=MAX_LIGHTS)
light_positions = ti.Vector.field(3, dtype=ti.f64, shape=MAX_LIGHTS)
light_colours = ti.Vector.field(3, dtype=ti.f64, shape=MAX_LIGHTS)
light_radii = ti.field(dtype=ti.f64, shape=MAX_LIGHTS)
light_samples = ti.field(dtype=ti.i32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())


def clear_lights() -> None:
    """Clear all lights.

    Resets the light count to zero. Existing data in the fields will be
    overwritten when new lights are added.
    """
    num_lights[None] = 0


def add_light(light: Light) -> int:
    """Add a light to the scene.

    Args:
        light: The light to upload.

    Returns:
        The index of the added light.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
    """
    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    light_kinds[idx] = int(light.kind)
    light_positions[idx] = list(light.position.to_tuple())
    light_colours[idx] = list(light.colour.to_tuple())
    light_radii[idx] = light.radius
    light_samples[idx] = light.samples
    num_lights[None] = idx + 1
    return idx


def get_light_count() -> int:
    """Get the number of lights in the scene."""
    return int(num_lights[None])


@ti.func
def _shade_sample(
    sample: vec3,
    illumination: vec3,
    point: vec3,
    normal: vec3,
    to_ray: vec3,
    diffuse: Scalar,
    specular: Scalar,
    shininess: Scalar,
) -> vec3:
    """Diffuse plus specular contribution of one light sample, or black if occluded."""
    to_light = sample - point
    distance = tm.length(to_light)
    direction = to_light / distance

    output = vec3(0.0, 0.0, 0.0)
    if occluded(point, direction, distance) == 0:
        # Only samples with line of sight count as shadow rays
        inc_ray_count()
        lambert = ti.max(tm.dot(normal, direction), 0.0)
        output += illumination * diffuse * lambert

        half = tm.normalize(to_ray + direction)
        phong = ti.pow(ti.max(tm.dot(normal, half), 0.0), shininess)
        output += illumination * specular * phong
    return output


@ti.func
def shade_light(
    i: ti.i32,
    point: vec3,
    normal: vec3,
    to_ray: vec3,
    material_id: ti.i32,
    state: ti.u32,
):
    """Shading contribution of light ``i`` at a surface point.

    Args:
        i: The light index.
        point: The surface point being shaded.
        normal: Unit surface normal at ``point``.
        to_ray: Unit direction from ``point`` back towards the viewer.
        material_id: Material ID at ``point``.
        state: Random stream state for soft light sample offsets.

    Returns:
        A tuple of (colour, new_state).
    """
    samples = light_samples[i]
    illumination = light_colours[i] * get_material_colour(material_id) / ti.cast(samples, Scalar)
    diffuse, specular, shininess = get_material_phong(material_id)

    output = vec3(0.0, 0.0, 0.0)
    s = state
    for _ in range(samples):
        sample = light_positions[i]
        if light_kinds[i] == _SOFT:
            offset, s = sample_box(s, light_radii[i])
            sample += offset
        output += _shade_sample(sample, illumination, point, normal, to_ray, diffuse, specular, shininess)
    return output, s


@ti.func
def shade_lights(point: vec3, normal: vec3, to_ray: vec3, material_id: ti.i32, state: ti.u32):
    """Sum the contributions of every light at a surface point.

    Returns:
        A tuple of (colour, new_state).
    """
    output = vec3(0.0, 0.0, 0.0)
    s = state
    for i in range(num_lights[None]):
        colour, s = shade_light(i, point, normal, to_ray, material_id, s)
        output += colour
    return output, s
