"""Ray-sphere intersection, hit selection and shading precomputation.

The pipeline for one sphere is:

1. ``intersect`` moves the ray into the sphere's object space and solves the
   unit-sphere quadratic, returning both roots as sorted intersections.
2. ``hit`` picks the nearest intersection in front of the ray origin.
3. ``prepare_computations`` derives the values shading needs at that hit:
   the world-space point, the eye vector and a normal facing the eye.

Intersection collections are always in ascending ``t`` order. Equal ``t``
values keep the order in which they were added.

Example:
    >>> from spheretrace.core.linalg import point, vector
    >>> from spheretrace.core.ray import Ray
    >>> from spheretrace.geometry.sphere import create_sphere
    >>> ray = Ray(point(0.0, 0.0, -5.0), vector(0.0, 0.0, 1.0))
    >>> xs = intersect(ray, create_sphere())
    >>> [i.t for i in xs]
    [4.0, 6.0]
    >>> hit(xs).t
    4.0
"""

from __future__ import annotations

import bisect
import math
from collections.abc import Iterable
from dataclasses import dataclass

from spheretrace.core.linalg import Tuple4, dot
from spheretrace.core.ray import Ray
from spheretrace.geometry.sphere import ORIGIN, Sphere, normal_at


@dataclass(frozen=True)
class Intersection:
    """A point where a ray crosses a sphere's surface.

    Ordering compares ``t`` only; equality also requires the same sphere.

    Attributes:
        t: Parametric distance along the ray. Always finite.
        obj: The sphere that was hit.

    Raises:
        ValueError: If ``t`` is NaN or infinite.
    """

    t: float
    obj: Sphere

    def __post_init__(self) -> None:
        if not math.isfinite(self.t):
            raise ValueError(f"Intersection distance must be finite, got {self.t}")
        object.__setattr__(self, "t", float(self.t))

    def __lt__(self, other: Intersection) -> bool:
        return self.t < other.t

    def __le__(self, other: Intersection) -> bool:
        return self.t <= other.t

    def __gt__(self, other: Intersection) -> bool:
        return self.t > other.t

    def __ge__(self, other: Intersection) -> bool:
        return self.t >= other.t


class Intersections(list[Intersection]):
    """A list of intersections kept in ascending ``t`` order."""

    def __init__(self, items: Iterable[Intersection] = ()) -> None:
        # sorted() is stable, so ties keep their input order
        super().__init__(sorted(items, key=_by_t))

    def add(self, intersection: Intersection) -> None:
        """Insert one intersection at its sorted position.

        Inserted after any existing entries with the same ``t``.
        """
        bisect.insort_right(self, intersection, key=_by_t)

    def extend_sorted(self, items: Iterable[Intersection]) -> None:
        """Append many intersections, then restore order with one stable sort."""
        self.extend(items)
        self.sort(key=_by_t)

    @classmethod
    def merge(cls, *collections: Iterable[Intersection]) -> Intersections:
        """Concatenate collections in the order given and sort once."""
        merged = cls()
        for items in collections:
            merged.extend(items)
        merged.sort(key=_by_t)
        return merged

    def __repr__(self) -> str:
        return f"Intersections({[i.t for i in self]})"


def _by_t(intersection: Intersection) -> float:
    return intersection.t


# =============================================================================
# Intersection and Hit Selection
# =============================================================================


def intersect(ray: Ray, sphere: Sphere) -> Intersections | None:
    """Intersect a world-space ray with a sphere.

    The ray is moved into object space, where the sphere is the unit sphere
    at the origin, and the quadratic

        a*t^2 + b*t + c = 0

    is solved with

        a = d . d
        b = 2 * (d . o)
        c = o . o - 1
        d = object-space direction
        o = object-space origin - sphere center

    Intersection distances are invariant under the transform, so the roots
    are valid world-space ``t`` values for the original ray.

    Args:
        ray: The ray in world space.
        sphere: The sphere to test.

    Returns:
        Both intersections in ascending order, bound to ``sphere``. A tangent
        ray yields two equal intersections. ``None`` if the ray misses, or if
        its object-space direction has zero length.

    Raises:
        SingularMatrixError: If the sphere's transform is not invertible.
    """
    local_ray = ray.transform(sphere.inverse_transform)

    sphere_to_ray = local_ray.origin - ORIGIN
    a = dot(local_ray.direction, local_ray.direction)
    if a == 0.0:
        return None
    b = 2.0 * dot(local_ray.direction, sphere_to_ray)
    c = dot(sphere_to_ray, sphere_to_ray) - 1.0

    discriminant = b * b - 4.0 * a * c
    if discriminant < 0.0:
        return None

    sqrt_d = math.sqrt(discriminant)
    t1 = (-b - sqrt_d) / (2.0 * a)
    t2 = (-b + sqrt_d) / (2.0 * a)

    return Intersections([Intersection(t1, sphere), Intersection(t2, sphere)])


def hit(intersections: Iterable[Intersection] | None) -> Intersection | None:
    """Select the visible hit from sorted intersections.

    Args:
        intersections: Intersections in ascending ``t`` order, or ``None``.

    Returns:
        The first intersection with ``t > 0``, or ``None`` if every
        intersection lies at or behind the ray origin.
    """
    if intersections is None:
        return None
    for intersection in intersections:
        if intersection.t > 0.0:
            return intersection
    return None


# =============================================================================
# Shading Precomputation
# =============================================================================


@dataclass(frozen=True, eq=False)
class Precomputation:
    """Values derived once per shaded hit.

    Attributes:
        t: Parametric distance of the hit.
        obj: The sphere that was hit.
        point: World-space hit point.
        eyev: Vector from the hit point toward the eye (the negated ray
            direction).
        normalv: Unit surface normal, flipped to face the eye when the hit
            is on the inside of the sphere.
        inside: True if the ray origin is inside the sphere at the hit.
    """

    t: float
    obj: Sphere
    point: Tuple4
    eyev: Tuple4
    normalv: Tuple4
    inside: bool

    @classmethod
    def compute(cls, intersection: Intersection, ray: Ray) -> Precomputation:
        return prepare_computations(intersection, ray)


def prepare_computations(intersection: Intersection, ray: Ray) -> Precomputation:
    """Derive the shading inputs for a hit.

    Args:
        intersection: The selected hit.
        ray: The ray that produced it.

    Returns:
        The precomputed hit point, eye vector, eye-facing normal and inside
        flag.
    """
    world_point = ray.position(intersection.t)
    normalv = normal_at(intersection.obj, world_point)
    eyev = -ray.direction

    inside = dot(normalv, eyev) < 0.0
    if inside:
        normalv = -normalv

    return Precomputation(
        t=intersection.t,
        obj=intersection.obj,
        point=world_point,
        eyev=eyev,
        normalv=normalv,
        inside=inside,
    )
