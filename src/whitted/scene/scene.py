"""Scene aggregate.

A scene is an immutable collection of objects and lights. Constructing one
registers its objects and light samples with the profiling counters.
"""

from __future__ import annotations

from collections.abc import Iterable

from whitted.core import profiling
from whitted.geometry.base import SceneObject
from whitted.lights.base import Light
from whitted.materials.material import Material


class Scene:
    """Objects and lights to render.

    Attributes:
        objects: The scene objects, in intersection tie-break order.
        lights: The light sources.

    Example:
        >>> scene = Scene([], [])
        >>> len(scene.objects)
        0
    """

    __slots__ = ("objects", "lights")

    objects: tuple[SceneObject, ...]
    lights: tuple[Light, ...]

    def __init__(self, objects: Iterable[SceneObject], lights: Iterable[Light]) -> None:
        object.__setattr__(self, "objects", tuple(objects))
        object.__setattr__(self, "lights", tuple(lights))
        profiling.inc_objects_count(len(self.objects))
        profiling.inc_lights_count(sum(light.samples for light in self.lights))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Scene is immutable")

    def materials(self) -> list[Material]:
        """Every distinct material used by the scene, in first-use order."""
        seen: dict[int, Material] = {}
        for obj in self.objects:
            for material in obj.materials():
                seen.setdefault(id(material), material)
        return list(seen.values())

    def __repr__(self) -> str:
        return f"Scene({len(self.objects)} objects, {len(self.lights)} lights)"
