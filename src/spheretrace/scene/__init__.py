"""Scene module for intersection, lighting and world queries.

This module handles everything between a ray and a color:

Components:
    intersection: Ray-sphere intersection, sorted intersection collections,
        hit selection and shading precomputation
    light: Point light, the Phong illumination model and shade_hit
    world: Sphere collection with one light, stock scenes and serialization

Control flow for one ray:
    World.ray_intersect -> hit -> prepare_computations -> shade_hit -> Color

A miss is reported as None rather than an error; the caller decides what
background to paint.
"""

from .intersection import (
    Intersection,
    Intersections,
    Precomputation,
    hit,
    intersect,
    prepare_computations,
)
from .light import (
    Light,
    LightKind,
    PointLight,
    light_from_dict,
    lighting,
    shade_hit,
)
from .world import (
    World,
    WorldConfig,
    default_world,
    single_sphere_world,
)

__all__ = [
    # Intersection module
    "Intersection",
    "Intersections",
    "Precomputation",
    "intersect",
    "hit",
    "prepare_computations",
    # Light module
    "Light",
    "LightKind",
    "PointLight",
    "lighting",
    "light_from_dict",
    "shade_hit",
    # World module
    "World",
    "WorldConfig",
    "default_world",
    "single_sphere_world",
]
