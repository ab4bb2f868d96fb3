"""Camera geometry and the image-to-world transform.

The camera builds its basis from the view direction and the world up axis:

- direction: unit vector from the position towards the look-at point
- right: ``normalise(direction x (0, 1, 0))``
- up: ``right x direction``

A camera looking straight up or down has no well-defined right vector; the
basis degenerates to NaN and the render comes out black rather than raising.

The film back sits ``focal_length`` behind the position, and the plane in
focus lies ``|position - look_at| * lens.focus`` from the film back along
each pixel's focal direction.

Example:
    >>> camera = Camera(Vector(0, 0, -250), Vector(0, 0, 0), 50, 50, Lens(50))
    >>> camera.right
    Vector(x=-1.0, y=0.0, z=0.0, w=0.0)
"""

from __future__ import annotations

from whitted.camera.lens import Lens
from whitted.core.matrix import Matrix, Scale, Translation
from whitted.core.ray import Ray
from whitted.core.vector import WORLD_UP, Vector


class Camera:
    """A camera with a position, a target, a film size and a lens.

    Attributes:
        position: Camera position in world space.
        look_at: The point the camera is aimed at.
        direction: Unit view direction.
        right: Unit right vector of the film plane.
        up: Up vector of the film plane.
        width: Film width in world units.
        height: Film height in world units.
        lens: The camera lens.
        film_back: Point behind the position that primary rays diverge from.
        focus_distance: Distance from the film back to the plane in focus.
    """

    def __init__(
        self,
        position: Vector,
        look_at: Vector,
        width: float,
        height: float,
        lens: Lens,
    ) -> None:
        self.position = position
        self.look_at = look_at
        self.width = float(width)
        self.height = float(height)
        self.lens = lens

        self.direction = (look_at - position).normalise()
        self.right = self.direction.cross(WORLD_UP).normalise()
        self.up = self.right.cross(self.direction)
        self.film_back = position - self.direction * lens.focal_length
        self.focus_distance = (position - look_at).magnitude() * lens.focus

    def __setattr__(self, name: str, value: object) -> None:
        if name in self.__dict__:
            raise AttributeError("Camera is immutable")
        super().__setattr__(name, value)

    def to_world(self, x: float, y: float) -> Vector:
        """Map camera-space film coordinates to a world-space point."""
        return self.right * x + self.up * y + self.position

    def basis(self) -> Matrix:
        """The camera-space to world-space transform."""
        r, u, p = self.right, self.up, self.position
        return Matrix(
            Vector(r.x, u.x, 0.0, p.x),
            Vector(r.y, u.y, 0.0, p.y),
            Vector(r.z, u.z, 0.0, p.z),
            Vector(0.0, 0.0, 0.0, 1.0),
        )

    def pinhole_ray(self, point: Vector) -> Ray:
        """A primary ray through a world-space point on the film plane.

        The ray starts at ``point`` and travels away from the film back.
        """
        return Ray(point, (point - self.film_back).normalise())

    def __repr__(self) -> str:
        return f"Camera({self.position!r}, {self.look_at!r}, {self.width}, {self.height}, {self.lens!r})"


def image_transform(camera: Camera, width: int, height: int) -> Matrix:
    """Transform from image space to world space.

    Image coordinates span ``[0, width] x [0, height]``. They are centred,
    scaled to the film size, and then placed on the camera's film plane.

    Args:
        camera: The camera.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        The combined transform; apply it to ``Vector(x, y, 0)``.
    """
    scale = Scale(camera.width / width, camera.height / height, 1.0)
    offset = Translation(-width * 0.5, -height * 0.5, 0.0)
    return camera.basis() * scale * offset
