"""Geometric primitives: spheres, planes and checkerboards."""

from whitted.geometry.base import ObjectKind, SceneObject, select_root
from whitted.geometry.plane import CheckerBoard, Plane
from whitted.geometry.sphere import Sphere

__all__ = [
    "ObjectKind",
    "SceneObject",
    "select_root",
    "CheckerBoard",
    "Plane",
    "Sphere",
]
