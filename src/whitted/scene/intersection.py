"""Scene-level object storage and intersection testing.

Uploaded objects live in Structure-of-Arrays Taichi fields tagged with their
:class:`~whitted.geometry.base.ObjectKind`. Kernels scan every object
linearly; the nearest positive intersection wins and ties go to the object
uploaded first.

Example:
    >>> import whitted
    >>> whitted.init()
    >>> from whitted.scene.intersection import add_sphere, clear_scene
    >>> clear_scene()
    >>> add_sphere((0.0, 0.0, 0.0), 1.0, material_id=0)
    0
"""

import taichi as ti
import taichi.math as tm

from whitted.core.types import Scalar, vec3
from whitted.geometry.base import ObjectKind
from whitted.geometry.plane import checker_tile_parity, intersect_plane
from whitted.geometry.sphere import intersect_sphere, sphere_normal

# Maximum number of objects in the scene
MAX_OBJECTS = 1024

_SPHERE = int(ObjectKind.SPHERE)
_PLANE = int(ObjectKind.PLANE)
_CHECKERBOARD = int(ObjectKind.CHECKERBOARD)

# Object storage: Structure of Arrays layout
object_kinds = ti.field(dtype=ti.i32, shape=MAX_OBJECTS)
object_positions = ti.Vector.field(3, dtype=ti.f64, shape=MAX_OBJECTS)
# Unit normal of planes and checkerboards
object_normals = ti.Vector.field(3, dtype=ti.f64, shape=MAX_OBJECTS)
# Sphere radius, or checkerboard tile size
object_extents = ti.field(dtype=ti.f64, shape=MAX_OBJECTS)
object_material_ids = ti.field(dtype=ti.i32, shape=MAX_OBJECTS)
# Second checkerboard material
object_alt_material_ids = ti.field(dtype=ti.i32, shape=MAX_OBJECTS)
num_objects = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Clear all objects from the scene.

    Resets the object count to zero. The actual field data is not cleared
    but will be overwritten when new objects are added.
    """
    num_objects[None] = 0


def _add_object(
    kind: ObjectKind,
    position: tuple[float, float, float],
    normal: tuple[float, float, float],
    extent: float,
    material_id: int,
    alt_material_id: int,
) -> int:
    idx = num_objects[None]
    if idx >= MAX_OBJECTS:
        raise RuntimeError(f"Maximum number of objects ({MAX_OBJECTS}) exceeded")
    object_kinds[idx] = int(kind)
    object_positions[idx] = list(position)
    object_normals[idx] = list(normal)
    object_extents[idx] = extent
    object_material_ids[idx] = material_id
    object_alt_material_ids[idx] = alt_material_id
    num_objects[None] = idx + 1
    return idx


def add_sphere(position: tuple[float, float, float], radius: float, material_id: int = 0) -> int:
    """Add a sphere to the scene.

    Args:
        position: The centre of the sphere.
        radius: The radius of the sphere.
        material_id: The material ID of the sphere surface.

    Returns:
        The index of the added object.

    Raises:
        RuntimeError: If the maximum number of objects is exceeded.
    """
    return _add_object(ObjectKind.SPHERE, position, (0.0, 0.0, 0.0), radius, material_id, material_id)


def add_plane(
    position: tuple[float, float, float],
    normal: tuple[float, float, float],
    material_id: int = 0,
) -> int:
    """Add an infinite plane to the scene.

    Args:
        position: A point on the plane.
        normal: The unit normal of the plane.
        material_id: The material ID of the plane surface.

    Returns:
        The index of the added object.

    Raises:
        RuntimeError: If the maximum number of objects is exceeded.
    """
    return _add_object(ObjectKind.PLANE, position, normal, 0.0, material_id, material_id)


def add_checkerboard(
    position: tuple[float, float, float],
    normal: tuple[float, float, float],
    size: float,
    material_id: int,
    alt_material_id: int,
) -> int:
    """Add a checkerboard plane to the scene.

    Args:
        position: A point on the plane, at a corner of an even tile.
        normal: The unit normal of the plane.
        size: Tile side length.
        material_id: Material ID of even tiles.
        alt_material_id: Material ID of odd tiles.

    Returns:
        The index of the added object.

    Raises:
        RuntimeError: If the maximum number of objects is exceeded.
    """
    return _add_object(ObjectKind.CHECKERBOARD, position, normal, size, material_id, alt_material_id)


def get_object_count() -> int:
    """Get the number of objects in the scene."""
    return int(num_objects[None])


@ti.func
def intersect_object(i: ti.i32, origin: vec3, direction: vec3) -> Scalar:
    """Intersect a ray with object ``i``.

    Returns:
        Distance to the nearest intersection beyond the precision band, or 0.
    """
    t = 0.0
    if object_kinds[i] == _SPHERE:
        t = intersect_sphere(origin, direction, object_positions[i], object_extents[i])
    else:
        t = intersect_plane(origin, direction, object_positions[i], object_normals[i])
    return t


@ti.func
def object_normal(i: ti.i32, point: vec3) -> vec3:
    """Unit surface normal of object ``i`` at ``point``."""
    normal = object_normals[i]
    if object_kinds[i] == _SPHERE:
        normal = sphere_normal(point, object_positions[i])
    return normal


@ti.func
def object_material(i: ti.i32, point: vec3) -> ti.i32:
    """Material ID of object ``i`` at ``point``."""
    material_id = object_material_ids[i]
    if object_kinds[i] == _CHECKERBOARD:
        if checker_tile_parity(point, object_positions[i], object_extents[i]) == 1:
            material_id = object_alt_material_ids[i]
    return material_id


@ti.func
def closest_intersect(origin: vec3, direction: vec3):
    """Find the nearest object along a ray.

    Args:
        origin: The ray origin.
        direction: The unit ray direction.

    Returns:
        A tuple of (index, t). ``index`` is -1 if nothing was hit.
    """
    index = -1
    closest = tm.inf
    for i in range(num_objects[None]):
        t = intersect_object(i, origin, direction)
        if t > 0.0 and t < closest:
            closest = t
            index = i
    return index, closest


@ti.func
def occluded(origin: vec3, direction: vec3, distance: Scalar) -> ti.i32:
    """Test whether any object lies along a ray closer than ``distance``.

    Returns:
        1 if the ray is blocked, 0 otherwise.
    """
    blocked = 0
    for i in range(num_objects[None]):
        if blocked == 0:
            t = intersect_object(i, origin, direction)
            if t > 0.0 and t < distance:
                blocked = 1
    return blocked
