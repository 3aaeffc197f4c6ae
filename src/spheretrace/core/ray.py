"""Ray data structure and reflection helper.

A ray is a full parametric line ``origin + t * direction``. Nothing here
restricts ``t`` to positive values; discarding surfaces behind the origin is
the job of hit selection in :mod:`spheretrace.scene.intersection`.

Example:
    >>> from spheretrace.core.linalg import point, vector, translation
    >>> ray = Ray(point(2.0, 3.0, 4.0), vector(1.0, 0.0, 0.0))
    >>> ray.position(-1.0)
    array([1., 3., 4., 1.])
    >>> moved = ray.transform(translation(3.0, 4.0, 5.0))
"""

from __future__ import annotations

from dataclasses import dataclass

from spheretrace.core.linalg import Matrix4, Tuple4, dot, frozen_copy, magnitude


@dataclass(frozen=True, eq=False)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: Homogeneous point the ray starts from.
        direction: Homogeneous vector the ray travels along. It need not be
            normalized, but it must have non-zero length.

    Raises:
        ValueError: If ``direction`` has zero length.
    """

    origin: Tuple4
    direction: Tuple4

    def __post_init__(self) -> None:
        origin = frozen_copy(self.origin)
        direction = frozen_copy(self.direction)
        if origin.shape != (4,) or direction.shape != (4,):
            raise ValueError(
                f"Ray origin and direction must be homogeneous 4-tuples, "
                f"got shapes {origin.shape} and {direction.shape}"
            )
        if magnitude(direction) == 0.0:
            raise ValueError("Ray direction must have non-zero length")
        object.__setattr__(self, "origin", origin)
        object.__setattr__(self, "direction", direction)

    def position(self, t: float) -> Tuple4:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. Negative values lie behind the origin.

        Returns:
            The point ``origin + direction * t``.
        """
        return self.origin + self.direction * t

    def transform(self, m: Matrix4) -> Ray:
        """Return a new ray with ``m`` applied to origin and direction.

        The direction's zero w component means only the linear part of ``m``
        affects it.
        """
        return Ray(m @ self.origin, m @ self.direction)

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin.tolist()}, direction={self.direction.tolist()})"


def reflect(v: Tuple4, n: Tuple4) -> Tuple4:
    """Reflect ``v`` about the normal ``n``.

    Args:
        v: The incoming vector.
        n: The surface normal (should be normalized).

    Returns:
        ``v - n * 2 * (v . n)``
    """
    return v - n * (2.0 * dot(v, n))
