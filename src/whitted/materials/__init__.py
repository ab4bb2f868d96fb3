"""Surface materials.

The device-side registry (:mod:`whitted.materials.registry`) declares Taichi
fields and must be imported after :func:`whitted.init`.
"""

from whitted.materials.material import Material

__all__ = ["Material"]
