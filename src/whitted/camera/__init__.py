"""Camera and lens model.

Device-side ray generation (:mod:`whitted.camera.rays`) declares Taichi
fields and must be imported after :func:`whitted.init`.
"""

from whitted.camera.camera import Camera, image_transform
from whitted.camera.lens import Lens

__all__ = ["Camera", "image_transform", "Lens"]
