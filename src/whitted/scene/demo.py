"""Ready-made demo scenes.

Each builder returns a ``(scene, camera)`` pair:

- :func:`create_three_spheres_scene`: red, green and blue spheres lit by two
  lights, framed by a 50 x 50 film.
- :func:`create_mirror_scene`: mirrored and coloured spheres standing on a
  reflective checkerboard under a soft light, with a wide-aperture lens for
  depth of field.

Example:
    >>> scene, camera = create_three_spheres_scene()
    >>> len(scene.objects), len(scene.lights)
    (3, 2)
"""

from __future__ import annotations

from collections.abc import Callable

from whitted.camera.camera import Camera
from whitted.camera.lens import Lens
from whitted.core.colour import Colour
from whitted.core.vector import Vector
from whitted.geometry.plane import CheckerBoard
from whitted.geometry.sphere import Sphere
from whitted.lights.soft import SoftLight
from whitted.materials.material import Material
from whitted.scene.scene import Scene


def create_three_spheres_scene() -> tuple[Scene, Camera]:
    """Three touching spheres seen head-on.

    Returns:
        Tuple of (scene, camera).
    """
    red = Material(Colour.from_hex(0xFF0000), ambient=0.0, diffuse=1.0, specular=0.2, shininess=10.0)
    green = Material(Colour.from_hex(0x00FF00), ambient=0.0, diffuse=1.0, specular=0.2, shininess=10.0)
    blue = Material(Colour.from_hex(0x0000FF), ambient=0.0, diffuse=1.0, specular=0.2, shininess=10.0)

    objects = [
        Sphere(Vector(0.0, 50.0, 0.0), 50.0, red),
        Sphere(Vector(50.0, -50.0, 0.0), 50.0, green),
        Sphere(Vector(-50.0, -50.0, 0.0), 50.0, blue),
    ]
    lights = [
        SoftLight(Vector(-300.0, 400.0, -400.0), Colour.from_hex(0xFFFFFF)),
        SoftLight(Vector(300.0, -200.0, 100.0), Colour.from_hex(0x505050)),
    ]
    camera = Camera(
        Vector(0.0, 0.0, -250.0),  # position
        Vector(0.0, 0.0, 0.0),  # look at
        50.0,  # film width
        50.0,  # film height
        Lens(50.0),  # focal length
    )
    return Scene(objects, lights), camera


def create_mirror_scene(aperture: float = 3.0, light_radius: float = 12.0) -> tuple[Scene, Camera]:
    """Reflective spheres on a checkerboard under a soft light.

    Args:
        aperture: Lens aperture radius. Zero gives a pinhole camera.
        light_radius: Radius of the soft light.

    Returns:
        Tuple of (scene, camera).
    """
    mirror = Material(
        Colour.from_hex(0xFFFFFF), ambient=0.0, diffuse=0.1, specular=0.9, shininess=60.0,
        reflectivity=0.8,
    )
    red = Material(
        Colour.from_hex(0xC81E14), ambient=0.05, diffuse=0.9, specular=0.5, shininess=40.0,
        reflectivity=0.1,
    )
    green = Material(
        Colour.from_hex(0x28B43C), ambient=0.05, diffuse=0.9, specular=0.3, shininess=20.0,
    )
    white_tile = Material(
        Colour.from_hex(0xF0F0F0), ambient=0.1, diffuse=0.8, specular=0.0, reflectivity=0.3,
    )
    black_tile = Material(
        Colour.from_hex(0x202020), ambient=0.1, diffuse=0.8, specular=0.0, reflectivity=0.3,
    )

    objects = [
        CheckerBoard(Vector(0.0, -100.0, 0.0), Vector(0.0, 1.0, 0.0), 75.0, white_tile, black_tile),
        Sphere(Vector(0.0, 0.0, 0.0), 100.0, mirror),
        Sphere(Vector(-220.0, -40.0, -120.0), 60.0, red),
        Sphere(Vector(200.0, -50.0, 250.0), 50.0, green),
    ]
    lights = [
        SoftLight(Vector(-500.0, 800.0, -800.0), Colour.from_hex(0xFFFFFF), radius=light_radius),
        SoftLight(Vector(600.0, 400.0, -300.0), Colour.from_hex(0x404040)),
    ]
    camera = Camera(
        Vector(0.0, 150.0, -800.0),
        Vector(0.0, 0.0, 0.0),
        50.0,
        50.0,
        Lens(60.0, aperture=aperture, focus=1.0),
    )
    return Scene(objects, lights), camera


# Scene builders by name
SCENES: dict[str, Callable[[], tuple[Scene, Camera]]] = {
    "spheres": create_three_spheres_scene,
    "mirrors": create_mirror_scene,
}
