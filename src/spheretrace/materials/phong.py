"""Phong surface material.

A material holds the coefficients the Phong illumination model needs: a base
color and the weights of the ambient, diffuse and specular terms, plus the
shininess exponent that controls how tight the specular highlight is.

Materials are immutable values. A sphere keeps the material it was created
with, and shading reads a copy of it.

Example:
    >>> from spheretrace.core.color import Color
    >>> from spheretrace.materials.phong import Material
    >>> matte_green = Material(color=Color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from spheretrace.core.color import Color


@dataclass(frozen=True)
class Material:
    """Phong coefficients for a surface.

    Attributes:
        color: Base surface color.
        ambient: Weight of the ambient term, in [0, 1].
        diffuse: Weight of the diffuse term, in [0, 1].
        specular: Weight of the specular term, in [0, 1].
        shininess: Specular exponent, strictly positive. Larger values give
            smaller, sharper highlights.

    Raises:
        ValueError: If a coefficient is outside its valid range.
    """

    color: Color = field(default_factory=Color.white)
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0

    # Color equality is tolerant, so no hash can agree with it
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        for name in ("ambient", "diffuse", "specular"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Material {name} = {value} is outside [0, 1].")
        if not self.shininess > 0.0:
            raise ValueError(f"Material shininess = {self.shininess} must be positive.")

    def with_color(self, color: Color) -> Material:
        """Copy of this material with a different base color."""
        return replace(self, color=color)

    def to_dict(self) -> dict[str, Any]:
        """Export the material to a dictionary (for JSON serialization)."""
        return {
            "color": list(self.color.to_tuple()),
            "ambient": self.ambient,
            "diffuse": self.diffuse,
            "specular": self.specular,
            "shininess": self.shininess,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Material:
        """Load a material from a dictionary, filling gaps with defaults.

        Raises:
            ValueError: If a value is not numeric or is out of range.
        """
        default = cls()
        try:
            color = Color.from_sequence(data.get("color", list(default.color.to_tuple())))
            coefficients = {
                name: float(data.get(name, getattr(default, name)))
                for name in ("ambient", "diffuse", "specular", "shininess")
            }
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid material data {data!r}: {e}") from e
        return cls(color=color, **coefficients)
