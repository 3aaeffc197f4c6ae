"""World: the spheres of a scene and its single light.

A world is built once and then treated as read-only while rays are cast. Its
spheres live in a list in insertion order; intersections refer to them but
never own them. Casting a ray against the world merges every sphere's
intersections into one collection sorted by ``t``, with ties kept in sphere
order.

The top-level query is :meth:`World.color_at`, which runs the whole pipeline
(intersect, select hit, precompute, shade) and returns ``None`` when nothing
is hit so that callers can paint their own background.

Example:
    >>> from spheretrace.core.linalg import point, vector
    >>> from spheretrace.core.ray import Ray
    >>> from spheretrace.scene.world import default_world
    >>> world = default_world()
    >>> ray = Ray(point(0.0, 0.0, -5.0), vector(0.0, 0.0, 1.0))
    >>> [i.t for i in world.ray_intersect(ray)]
    [4.0, 4.5, 5.5, 6.0]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from spheretrace.core.color import Color
from spheretrace.core.linalg import point, scaling
from spheretrace.core.ray import Ray
from spheretrace.geometry.sphere import Sphere, SphereConfig, create_sphere
from spheretrace.materials.phong import Material
from spheretrace.scene.intersection import (
    Intersections,
    hit,
    intersect,
    prepare_computations,
)
from spheretrace.scene.light import Light, PointLight, light_from_dict, shade_hit

logger = logging.getLogger(__name__)


@dataclass
class WorldConfig:
    """Configuration for world serialization.

    Attributes:
        light: Light configuration, or None for a world without a light.
        spheres: List of sphere configurations, each with a ``transform``
            (nested 4x4 list) and a ``material`` dictionary.
    """

    light: dict[str, Any] | None = None
    spheres: list[dict[str, Any]] = field(default_factory=list)


class World:
    """A collection of spheres lit by one light source.

    Attributes:
        objects: The spheres, in insertion order.
        light: The light source.
    """

    def __init__(
        self,
        objects: list[Sphere] | None = None,
        light: Light | None = None,
    ) -> None:
        self._objects: list[Sphere] = list(objects) if objects else []
        self._light = light

    # =========================================================================
    # Building
    # =========================================================================

    def add(self, *spheres: Sphere) -> None:
        """Append spheres to the world. Only valid before rendering starts."""
        self._objects.extend(spheres)
        logger.debug("World now holds %d spheres", len(self._objects))

    @property
    def objects(self) -> tuple[Sphere, ...]:
        return tuple(self._objects)

    @property
    def light(self) -> Light:
        """The world's light source.

        Raises:
            RuntimeError: If no light has been set.
        """
        if self._light is None:
            raise RuntimeError("World has no light source. Set world.light first.")
        return self._light

    @light.setter
    def light(self, light: Light) -> None:
        self._light = light

    def has_light(self) -> bool:
        return self._light is not None

    def __len__(self) -> int:
        return len(self._objects)

    def __contains__(self, sphere: object) -> bool:
        return any(sphere is obj for obj in self._objects)

    # =========================================================================
    # Ray Queries
    # =========================================================================

    def ray_intersect(self, ray: Ray) -> Intersections:
        """All intersections of ``ray`` with the world, sorted by ``t``.

        Args:
            ray: The world-space ray.

        Returns:
            Every sphere's intersections merged into one ascending
            collection. Empty if the ray misses everything.
        """
        per_object = [intersect(ray, obj) for obj in self._objects]
        return Intersections.merge(*(xs for xs in per_object if xs is not None))

    def color_at(self, ray: Ray) -> Color | None:
        """Shade the nearest visible hit along ``ray``.

        Returns:
            The unclamped color at the hit, or ``None`` if no surface lies in
            front of the ray origin.

        Raises:
            RuntimeError: If a surface is hit and the world has no light.
        """
        visible = hit(self.ray_intersect(ray))
        if visible is None:
            return None
        comps = prepare_computations(visible, ray)
        return shade_hit(self, comps)

    def shade_ray(self, ray: Ray, background: Color | None = None) -> Color:
        """Like :meth:`color_at`, but returns ``background`` on a miss.

        ``background`` defaults to black.
        """
        color = self.color_at(ray)
        if color is not None:
            return color
        return background if background is not None else Color.black()

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_config(self) -> WorldConfig:
        """Export the world to a configuration object."""
        config = WorldConfig()
        if self._light is not None:
            config.light = self._light.to_dict()
        for sphere in self._objects:
            config.spheres.append(
                {
                    "transform": sphere.transform.tolist(),
                    "material": sphere.material.to_dict(),
                }
            )
        return config

    @classmethod
    def from_config(cls, config: WorldConfig) -> World:
        """Build a new world from a configuration object.

        Spheres receive fresh identities.

        Raises:
            ValueError: If the configuration contains invalid data.
            SingularMatrixError: If a sphere transform is not invertible.
        """
        world = cls()
        if config.light is not None:
            world.light = light_from_dict(config.light)

        for sphere_config in config.spheres:
            try:
                transform = np.asarray(
                    sphere_config.get("transform", np.eye(4).tolist()), dtype=np.float64
                )
            except (TypeError, ValueError) as e:
                raise ValueError(f"Sphere transform is not numeric: {e}") from e
            if transform.shape != (4, 4):
                raise ValueError(f"Sphere transform must be 4x4, got shape {transform.shape}")
            material = Material.from_dict(sphere_config.get("material", {}))
            world.add(create_sphere(SphereConfig(transform=transform, material=material)))

        return world

    def to_dict(self) -> dict[str, Any]:
        """Export the world to a dictionary (for JSON serialization)."""
        config = self.to_config()
        return {
            "light": config.light,
            "spheres": config.spheres,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> World:
        """Build a world from a dictionary with 'light' and 'spheres' keys."""
        config = WorldConfig(
            light=data.get("light"),
            spheres=data.get("spheres", []),
        )
        return cls.from_config(config)


# =============================================================================
# Stock Scenes
# =============================================================================


def default_world() -> World:
    """The standard two-sphere test scene.

    An outer unit sphere with a pale green material, an inner sphere of
    radius 0.5 with the default material, and a white point light at
    (-10, 10, -10).
    """
    outer = create_sphere(
        SphereConfig(
            material=Material(
                color=Color(0.8, 1.0, 0.6),
                diffuse=0.7,
                specular=0.2,
            )
        )
    )
    inner = create_sphere(SphereConfig(transform=scaling(0.5, 0.5, 0.5)))
    light = PointLight(point(-10.0, 10.0, -10.0), Color(1.0, 1.0, 1.0))
    return World([outer, inner], light)


def single_sphere_world() -> World:
    """One green sphere of radius 1.1 lit from the upper left."""
    sphere = create_sphere(
        SphereConfig(
            transform=scaling(1.1, 1.1, 1.1),
            material=Material().with_color(Color(0.0, 0.9, 0.0)),
        )
    )
    light = PointLight(point(-10.0, 15.0, -5.0), Color(1.0, 1.0, 1.0))
    return World([sphere], light)
