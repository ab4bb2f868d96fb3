"""Scene aggregate, device upload and demo scenes.

Device storage (:mod:`whitted.scene.intersection`) and the
:class:`~whitted.scene.manager.SceneManager` declare or use Taichi fields and
must be imported after :func:`whitted.init`.
"""

from whitted.scene.demo import SCENES, create_mirror_scene, create_three_spheres_scene
from whitted.scene.scene import Scene

__all__ = ["SCENES", "create_mirror_scene", "create_three_spheres_scene", "Scene"]
