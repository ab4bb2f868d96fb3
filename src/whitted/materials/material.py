"""Phong surface material.

A material combines a base colour with ambient, diffuse and specular
coefficients, a specular shininess exponent, and a mirror reflectivity.
Materials are immutable and shared by reference between objects; equality
is identity.

Example:
    >>> red = Material(Colour.from_hex(0xff0000), diffuse=1.0, specular=0.2,
    ...                shininess=10.0)
    >>> red.reflectivity
    0.0
"""

from __future__ import annotations

from dataclasses import dataclass

from whitted.core.colour import Colour


@dataclass(frozen=True, eq=False)
class Material:
    """Surface properties used by shading.

    Attributes:
        colour: Base surface colour.
        ambient: Ambient coefficient in [0, 1].
        diffuse: Lambertian coefficient in [0, 1].
        specular: Blinn-Phong specular coefficient in [0, 1].
        shininess: Specular exponent (>= 0).
        reflectivity: Fraction of light mirrored, in [0, 1).
    """

    colour: Colour
    ambient: float = 0.0
    diffuse: float = 0.0
    specular: float = 0.0
    shininess: float = 0.0
    reflectivity: float = 0.0

    def __post_init__(self) -> None:
        """Validate coefficient ranges.

        Raises:
            ValueError: If a coefficient is outside its legal range.
        """
        for name in ("ambient", "diffuse", "specular"):
            value = getattr(self, name)
            if value < 0.0 or value > 1.0:
                raise ValueError(f"Material {name} = {value} is outside [0, 1]")
        if self.shininess < 0.0:
            raise ValueError(f"Material shininess must be non-negative, got {self.shininess}")
        if self.reflectivity < 0.0 or self.reflectivity >= 1.0:
            raise ValueError(
                f"Material reflectivity = {self.reflectivity} is outside [0, 1). "
                "A perfect mirror would never lose energy."
            )
