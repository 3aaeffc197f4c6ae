"""Unit sphere primitive with an object-to-world transform.

Every sphere is geometrically the same shape: radius 1, centered at the
object-space origin. Where it sits in the world, how large it is and how it is
squashed or rotated is carried entirely by its transform. Intersection and
normal computation work by moving world-space data into object space with the
inverse transform, which is computed once when the transform is set.

Spheres are built from an immutable :class:`SphereConfig` by the pure
constructor :func:`create_sphere`, which hands out a fresh identity each call.
:class:`SphereFactory` offers the fluent builder style on top of it and resets
its pending configuration after every ``create()``.

Example:
    >>> from spheretrace.core.linalg import scaling, translation
    >>> from spheretrace.geometry.sphere import SphereConfig, create_sphere
    >>> config = SphereConfig().with_transform(translation(0.0, 1.0, 0.0))
    >>> sphere = create_sphere(config.with_transform(scaling(0.5, 0.5, 0.5)))
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field, replace

import numpy as np

from spheretrace.core.linalg import (
    Matrix4,
    Tuple4,
    identity,
    inverse,
    normalize,
    point,
    transpose,
)
from spheretrace.materials.phong import Material

logger = logging.getLogger(__name__)

# Object-space center shared by every sphere
ORIGIN = point(0.0, 0.0, 0.0)

# Process-wide identity source; identities increase monotonically
_sphere_ids = itertools.count()


class Sphere:
    """A unit sphere placed in the world by a transform.

    Attributes:
        sphere_id: Unique identity of this sphere.
        material: Phong material used when shading hits on this sphere.
    """

    def __init__(
        self,
        sphere_id: int,
        transform: Matrix4 | None = None,
        material: Material | None = None,
    ) -> None:
        self.sphere_id = sphere_id
        self.material = material if material is not None else Material()
        self._transform = identity()
        self._inverse = identity()
        self._inverse_transpose = identity()
        if transform is not None:
            self._set_transform(np.array(transform, dtype=np.float64))

    def _set_transform(self, m: Matrix4) -> None:
        # Inverting here surfaces a singular transform when the sphere is placed
        inv = inverse(m)
        self._transform = m
        self._inverse = inv
        self._inverse_transpose = transpose(inv)

    @property
    def transform(self) -> Matrix4:
        """Object-to-world transform (read-only view)."""
        view = self._transform.view()
        view.flags.writeable = False
        return view

    @property
    def inverse_transform(self) -> Matrix4:
        """World-to-object transform."""
        view = self._inverse.view()
        view.flags.writeable = False
        return view

    @property
    def inverse_transpose(self) -> Matrix4:
        """Transpose of the inverse, used to carry normals to world space."""
        view = self._inverse_transpose.view()
        view.flags.writeable = False
        return view

    def apply_transform(self, m: Matrix4) -> None:
        """Post-multiply the current transform by ``m``.

        The new transform is ``current @ m``, so ``m`` acts in object space
        before the existing transform. Only valid while the scene is being
        built; spheres must not change while rays are cast against them.

        Raises:
            SingularMatrixError: If the resulting transform is not invertible.
        """
        self._set_transform(self._transform @ m)

    def __repr__(self) -> str:
        return f"Sphere(id={self.sphere_id}, material={self.material!r})"


@dataclass(frozen=True, eq=False)
class SphereConfig:
    """Immutable description of a sphere to create.

    Attributes:
        transform: Object-to-world transform. Default is the identity.
        material: Surface material. Default is ``Material()``.
    """

    transform: Matrix4 = field(default_factory=identity)
    material: Material = field(default_factory=Material)

    def with_transform(self, m: Matrix4) -> SphereConfig:
        """Copy with ``m`` post-multiplied onto the transform."""
        return replace(self, transform=self.transform @ m)

    def with_material(self, material: Material) -> SphereConfig:
        """Copy with a different material."""
        return replace(self, material=material)


def create_sphere(config: SphereConfig | None = None) -> Sphere:
    """Create a sphere with a fresh identity.

    Args:
        config: What to create. Defaults to an identity-transformed sphere
            with the default material.

    Returns:
        A new Sphere.

    Raises:
        SingularMatrixError: If the configured transform is not invertible.
    """
    if config is None:
        config = SphereConfig()
    sphere = Sphere(next(_sphere_ids), config.transform.copy(), config.material)
    logger.debug("Created sphere %d", sphere.sphere_id)
    return sphere


class SphereFactory:
    """Fluent builder over :func:`create_sphere`.

    Pending settings apply only to the next ``create()`` call and are then
    cleared, so one factory can mint many unrelated spheres. A factory holds
    mutable state and must not be shared between threads.

    Example:
        >>> factory = SphereFactory()
        >>> small = factory.with_transform(scaling(0.5, 0.5, 0.5)).create()
        >>> plain = factory.create()  # identity transform, default material
    """

    def __init__(self) -> None:
        self._pending = SphereConfig()

    def with_transform(self, m: Matrix4) -> SphereFactory:
        self._pending = self._pending.with_transform(m)
        return self

    def with_material(self, material: Material) -> SphereFactory:
        self._pending = self._pending.with_material(material)
        return self

    def create(self) -> Sphere:
        config = self._pending
        self._pending = SphereConfig()
        return create_sphere(config)


def normal_at(sphere: Sphere, world_point: Tuple4) -> Tuple4:
    """Surface normal of ``sphere`` at a world-space point.

    The point is moved into object space, where the normal of the unit sphere
    is simply the point minus the origin. That normal is carried back with the
    inverse-transpose of the transform, which keeps it perpendicular to the
    surface under non-uniform scaling.

    Args:
        sphere: The sphere the point lies on.
        world_point: A homogeneous point on the sphere's surface.

    Returns:
        The unit outward normal as a homogeneous vector.
    """
    object_point = sphere.inverse_transform @ world_point
    object_normal = object_point - ORIGIN
    world_normal = sphere.inverse_transpose @ object_normal
    # The translation row of the inverse-transpose leaks into w
    world_normal[3] = 0.0
    return normalize(world_normal)
