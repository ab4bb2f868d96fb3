"""Scene upload into device storage.

The SceneManager copies a :class:`~whitted.scene.scene.Scene` into the
Taichi fields read by the render kernels. Materials are uploaded once each,
keyed by identity, so objects sharing a material share a material ID.

Example:
    >>> import whitted
    >>> whitted.init()
    >>> from whitted.scene.manager import SceneManager
    >>> manager = SceneManager()
    >>> manager.upload(scene)
    >>> manager.material_ids[id(red)]
    0
"""

from __future__ import annotations

import logging

from whitted.geometry.base import SceneObject
from whitted.geometry.plane import CheckerBoard, Plane
from whitted.geometry.sphere import Sphere
from whitted.lights.shading import add_light, clear_lights, get_light_count
from whitted.materials.material import Material
from whitted.materials.registry import add_material, clear_materials, get_material_count
from whitted.scene.intersection import (
    add_checkerboard,
    add_plane,
    add_sphere,
    clear_scene,
    get_object_count,
)
from whitted.scene.scene import Scene

logger = logging.getLogger(__name__)


class SceneManager:
    """Uploads scenes into device storage.

    Attributes:
        material_ids: Mapping from ``id(material)`` to uploaded material ID.
        scene: The most recently uploaded scene, if any.
    """

    def __init__(self) -> None:
        """Initialize with empty device storage."""
        self.material_ids: dict[int, int] = {}
        self.scene: Scene | None = None
        self.clear()

    def clear(self) -> None:
        """Clear all uploaded objects, lights and materials."""
        clear_scene()
        clear_lights()
        clear_materials()
        self.material_ids.clear()
        self.scene = None

    def upload(self, scene: Scene) -> None:
        """Replace device storage with the contents of ``scene``.

        Args:
            scene: The scene to upload.

        Raises:
            RuntimeError: If the scene exceeds a device capacity.
        """
        self.clear()
        for material in scene.materials():
            self._material_id(material)
        for obj in scene.objects:
            self._add_object(obj)
        for light in scene.lights:
            add_light(light)
        self.scene = scene
        logger.debug(
            "Uploaded %d objects, %d lights, %d materials",
            get_object_count(),
            get_light_count(),
            get_material_count(),
        )

    def _material_id(self, material: Material) -> int:
        key = id(material)
        if key not in self.material_ids:
            self.material_ids[key] = add_material(material)
        return self.material_ids[key]

    def _add_object(self, obj: SceneObject) -> int:
        if isinstance(obj, Sphere):
            return add_sphere(
                obj.position.to_tuple(), obj.radius, self._material_id(obj.material)
            )
        if isinstance(obj, CheckerBoard):
            return add_checkerboard(
                obj.position.to_tuple(),
                obj.direction.to_tuple(),
                obj.size,
                self._material_id(obj.material1),
                self._material_id(obj.material2),
            )
        if isinstance(obj, Plane):
            return add_plane(
                obj.position.to_tuple(), obj.direction.to_tuple(), self._material_id(obj.material)
            )
        raise ValueError(f"Unsupported object type: {type(obj).__name__}")

    def get_stats(self) -> dict[str, int]:
        """Counts of uploaded objects, lights and materials."""
        return {
            "objects": get_object_count(),
            "lights": get_light_count(),
            "materials": get_material_count(),
        }
