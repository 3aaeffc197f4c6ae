"""Light sources and the Phong illumination model.

The Phong model approximates the light leaving a surface point as the sum of
three terms:

    ambient  = effective_color * ambient
    diffuse  = effective_color * diffuse * (light_dir . normal)
    specular = intensity * specular * (reflect_dir . eye) ^ shininess

where ``effective_color`` is the surface color filtered by the light color.
When the light is behind the surface only the ambient term remains. The sum
is returned unclamped.

Light kinds form a closed set (see :class:`LightKind`); ``lighting``
dispatches on the kind rather than on an open class hierarchy. Only point
lights exist today.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Any, ClassVar

from spheretrace.core.color import Color
from spheretrace.core.linalg import Tuple4, dot, frozen_copy, normalize, point
from spheretrace.core.ray import reflect
from spheretrace.materials.phong import Material

if TYPE_CHECKING:
    from spheretrace.scene.intersection import Precomputation
    from spheretrace.scene.world import World


class LightKind(IntEnum):
    """Enumeration of supported light source kinds."""

    POINT = 0


@dataclass(frozen=True, eq=False)
class PointLight:
    """A light with no size that shines equally in every direction.

    Attributes:
        position: World-space homogeneous point.
        intensity: Color and brightness of the light.
    """

    position: Tuple4
    intensity: Color

    kind: ClassVar[LightKind] = LightKind.POINT

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", frozen_copy(self.position))

    def illuminate(
        self,
        material: Material,
        surface_point: Tuple4,
        eyev: Tuple4,
        normalv: Tuple4,
    ) -> Color:
        """Phong shading of a surface point lit by this light.

        Args:
            material: Material of the surface.
            surface_point: World-space point being shaded.
            eyev: Unit vector from the point toward the eye.
            normalv: Unit surface normal facing the eye.

        Returns:
            The unclamped sum of ambient, diffuse and specular terms.
        """
        effective_color = material.color * self.intensity
        lightv = normalize(self.position - surface_point)

        ambient = effective_color * material.ambient

        light_dot_normal = dot(lightv, normalv)
        if light_dot_normal < 0.0:
            # Light is on the other side of the surface
            return ambient

        diffuse = effective_color * (material.diffuse * light_dot_normal)

        specular = Color.black()
        reflectv = reflect(-lightv, normalv)
        reflect_dot_eye = dot(reflectv, eyev)
        if reflect_dot_eye > 0.0:
            factor = reflect_dot_eye**material.shininess
            specular = self.intensity * (material.specular * factor)

        return ambient + diffuse + specular

    def to_dict(self) -> dict[str, Any]:
        """Export the light to a dictionary (for JSON serialization)."""
        return {
            "type": self.kind.name.lower(),
            "position": self.position[:3].tolist(),
            "intensity": list(self.intensity.to_tuple()),
        }


# Every concrete light kind; extend together with LightKind
Light = PointLight


def lighting(
    material: Material,
    light: Light,
    surface_point: Tuple4,
    eyev: Tuple4,
    normalv: Tuple4,
) -> Color:
    """Illuminate a surface point with any supported light.

    Raises:
        ValueError: If the light's kind is not supported.
    """
    if light.kind == LightKind.POINT:
        return light.illuminate(material, surface_point, eyev, normalv)
    raise ValueError(f"Unknown light kind: {light.kind}")


def light_from_dict(data: dict[str, Any]) -> Light:
    """Build a light from its dictionary form.

    Raises:
        ValueError: If the light type is not recognised or a value is malformed.
    """
    light_type = str(data.get("type", "point")).lower()
    if light_type == LightKind.POINT.name.lower():
        try:
            x, y, z = data.get("position", [0.0, 0.0, 0.0])
            return PointLight(
                position=point(float(x), float(y), float(z)),
                intensity=Color.from_sequence(data.get("intensity", [1.0, 1.0, 1.0])),
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid light data {data!r}: {e}") from e
    raise ValueError(f"Unknown light type: {light_type}")


def shade_hit(world: World, comps: Precomputation) -> Color:
    """Color at a precomputed hit, lit by the world's light.

    Args:
        world: The world supplying the light source.
        comps: Precomputation for the hit being shaded.

    Returns:
        The unclamped shaded color.
    """
    return lighting(comps.obj.material, world.light, comps.point, comps.eyev, comps.normalv)
