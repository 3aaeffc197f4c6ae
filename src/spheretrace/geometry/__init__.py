"""Geometry module for shape primitives.

Components:
    sphere: Transformable unit sphere, its configuration and builder,
        and the world-space surface normal

Only spheres are supported. Ray-sphere intersection lives in
spheretrace.scene.intersection, which works on the sphere's inverse
transform rather than on its world-space shape.
"""

from .sphere import (
    ORIGIN,
    Sphere,
    SphereConfig,
    SphereFactory,
    create_sphere,
    normal_at,
)

__all__ = [
    "ORIGIN",
    "Sphere",
    "SphereConfig",
    "SphereFactory",
    "create_sphere",
    "normal_at",
]
