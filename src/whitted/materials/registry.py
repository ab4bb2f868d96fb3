"""Device-side material registry.

Materials uploaded for rendering live in Structure-of-Arrays Taichi fields
indexed by material ID. Objects refer to materials by ID.

Example:
    >>> import whitted
    >>> whitted.init()
    >>> from whitted.materials.registry import add_material, clear_materials
    >>> clear_materials()
    >>> from whitted.core.colour import Colour
    >>> mat_id = add_material(Material(Colour(1.0, 0.0, 0.0), diffuse=1.0))
"""

import taichi as ti

from whitted.core.types import Scalar, vec3
from whitted.materials.material import Material

# Maximum number of materials in the scene
MAX_MATERIALS = 1024

# Storage for material properties
material_colours = ti.Vector.field(3, dtype=ti.f64, shape=MAX_MATERIALS)
material_ambient = ti.field(dtype=ti.f64, shape=MAX_MATERIALS)
material_diffuse = ti.field(dtype=ti.f64, shape=MAX_MATERIALS)
material_specular = ti.field(dtype=ti.f64, shape=MAX_MATERIALS)
material_shininess = ti.field(dtype=ti.f64, shape=MAX_MATERIALS)
material_reflectivity = ti.field(dtype=ti.f64, shape=MAX_MATERIALS)
num_materials = ti.field(dtype=ti.i32, shape=())


def clear_materials() -> None:
    """Clear all materials.

    Resets the material count to zero. Existing data in the fields will be
    overwritten when new materials are added.
    """
    num_materials[None] = 0


def add_material(material: Material) -> int:
    """Add a material to the registry.

    Args:
        material: The material to upload.

    Returns:
        The material ID.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
    """
    idx = num_materials[None]
    if idx >= MAX_MATERIALS:
        raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")
    material_colours[idx] = list(material.colour.to_tuple())
    material_ambient[idx] = material.ambient
    material_diffuse[idx] = material.diffuse
    material_specular[idx] = material.specular
    material_shininess[idx] = material.shininess
    material_reflectivity[idx] = material.reflectivity
    num_materials[None] = idx + 1
    return idx


def get_material_count() -> int:
    """Get the number of materials in the registry."""
    return int(num_materials[None])


@ti.func
def get_material_colour(material_id: ti.i32) -> vec3:
    return material_colours[material_id]


@ti.func
def get_material_ambient(material_id: ti.i32) -> Scalar:
    return material_ambient[material_id]


@ti.func
def get_material_reflectivity(material_id: ti.i32) -> Scalar:
    return material_reflectivity[material_id]


@ti.func
def get_material_phong(material_id: ti.i32):
    """Get the lighting coefficients of a material.

    Args:
        material_id: The material ID.

    Returns:
        A tuple of (diffuse, specular, shininess).
    """
    return (
        material_diffuse[material_id],
        material_specular[material_id],
        material_shininess[material_id],
    )
