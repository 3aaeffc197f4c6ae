"""Homogeneous points, vectors and 4x4 affine transforms.

Points and vectors are both stored as 4-component float64 NumPy arrays. The
fourth (w) component tells them apart: 1.0 for a point, 0.0 for a vector. This
lets one matrix type transform both correctly, since the translation column of
a matrix is multiplied by w and therefore never moves a vector.

Matrices are plain (4, 4) NumPy arrays. Composition is the ``@`` operator and
applies right to left, so ``translation(...) @ rotation(...) @ scaling(...) @ p``
scales first, then rotates, then translates.

Example:
    >>> from spheretrace.core.linalg import point, scaling, translation
    >>> transform = translation(10.0, 5.0, 7.0) @ scaling(5.0, 5.0, 5.0)
    >>> transform @ point(1.0, 0.0, 1.0)
    array([15.,  5., 12.,  1.])
"""

from __future__ import annotations

import math

import numpy as np
import numpy.typing as npt

# Type aliases for homogeneous values
Tuple4 = npt.NDArray[np.float64]
Matrix4 = npt.NDArray[np.float64]

# Tolerance used for all approximate float comparisons in the package
EPSILON = 1e-5


class SingularMatrixError(ValueError):
    """Raised when a transform that must be inverted has no inverse."""


# =============================================================================
# Points and Vectors
# =============================================================================


def point(x: float, y: float, z: float) -> Tuple4:
    """Create a homogeneous point (w = 1)."""
    return np.array([x, y, z, 1.0], dtype=np.float64)


def vector(x: float, y: float, z: float) -> Tuple4:
    """Create a homogeneous vector (w = 0)."""
    return np.array([x, y, z, 0.0], dtype=np.float64)


def is_point(value: Tuple4) -> bool:
    """Return True if the homogeneous component marks a point."""
    return bool(value[3] == 1.0)


def is_vector(value: Tuple4) -> bool:
    """Return True if the homogeneous component marks a vector."""
    return bool(value[3] == 0.0)


def dot(a: Tuple4, b: Tuple4) -> float:
    """Dot product over all four components.

    For two vectors (w = 0) this is the ordinary 3-D dot product.
    """
    return float(np.dot(a, b))


def cross(a: Tuple4, b: Tuple4) -> Tuple4:
    """Cross product of the xyz parts, returned as a vector."""
    x, y, z = np.cross(a[:3], b[:3])
    return vector(x, y, z)


def magnitude(v: Tuple4) -> float:
    """Euclidean length of the xyz part."""
    return float(np.linalg.norm(v[:3]))


def normalize(v: Tuple4) -> Tuple4:
    """Return a unit-length copy of ``v``.

    Args:
        v: A homogeneous vector.

    Returns:
        The vector scaled to length 1. The w component is carried through
        unchanged.

    Raises:
        ValueError: If ``v`` has zero length.
    """
    length = magnitude(v)
    if length == 0.0:
        raise ValueError("Cannot normalize a zero-length vector")
    result = v / length
    result[3] = v[3]
    return result


def frozen_copy(a: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """Float64 copy of `a` that cannot be written to.

    Used for values that must not change after construction, such as ray
    origins and light positions.
    """
    result = np.array(a, dtype=np.float64)
    result.flags.writeable = False
    return result


def approx_equal(a: npt.ArrayLike, b: npt.ArrayLike, eps: float = EPSILON) -> bool:
    """Componentwise comparison of two arrays within ``eps``."""
    return bool(np.all(np.abs(np.asarray(a) - np.asarray(b)) < eps))


# =============================================================================
# Transform Constructors
# =============================================================================


def identity() -> Matrix4:
    """The 4x4 identity transform."""
    return np.eye(4, dtype=np.float64)


def translation(x: float, y: float, z: float) -> Matrix4:
    """Translation by (x, y, z). Leaves vectors unchanged."""
    m = identity()
    m[0, 3] = x
    m[1, 3] = y
    m[2, 3] = z
    return m


def scaling(x: float, y: float, z: float) -> Matrix4:
    """Non-uniform scaling. A negative factor reflects across that axis."""
    return np.diag([x, y, z, 1.0]).astype(np.float64)


def rotation(x: float, y: float, z: float) -> Matrix4:
    """Single rotation built from a rotation vector.

    The vector (x, y, z) is read in scaled-axis form: its direction is the
    rotation axis and its length is the angle in radians (right-handed). A
    vector along one coordinate axis gives the classic per-axis rotation,
    e.g. ``rotation(a, 0, 0) == rotation_x(a)``.

    Args:
        x: X component of the rotation vector.
        y: Y component of the rotation vector.
        z: Z component of the rotation vector.

    Returns:
        The homogeneous rotation matrix. A zero vector yields the identity.
    """
    angle = math.sqrt(x * x + y * y + z * z)
    if angle == 0.0:
        return identity()

    kx, ky, kz = x / angle, y / angle, z / angle
    # Rodrigues: R = I + sin(a) K + (1 - cos(a)) K^2
    k = np.array(
        [
            [0.0, -kz, ky],
            [kz, 0.0, -kx],
            [-ky, kx, 0.0],
        ]
    )
    r = np.eye(3) + math.sin(angle) * k + (1.0 - math.cos(angle)) * (k @ k)

    m = identity()
    m[:3, :3] = r
    return m


def rotation_x(angle: float) -> Matrix4:
    """Rotation about the x axis by ``angle`` radians."""
    return rotation(angle, 0.0, 0.0)


def rotation_y(angle: float) -> Matrix4:
    """Rotation about the y axis by ``angle`` radians."""
    return rotation(0.0, angle, 0.0)


def rotation_z(angle: float) -> Matrix4:
    """Rotation about the z axis by ``angle`` radians."""
    return rotation(0.0, 0.0, angle)


def shear(
    xy: float,
    xz: float,
    yx: float,
    yz: float,
    zx: float,
    zy: float,
) -> Matrix4:
    """Shearing transform.

    Each argument moves one coordinate in proportion to another, e.g. ``xy``
    moves x in proportion to y.
    """
    return np.array(
        [
            [1.0, xy, xz, 0.0],
            [yx, 1.0, yz, 0.0],
            [zx, zy, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype=np.float64,
    )


def chain(*matrices: Matrix4) -> Matrix4:
    """Compose transforms in the order written: ``chain(A, B) == A @ B``.

    The rightmost transform is applied to a point first.
    """
    result = identity()
    for m in matrices:
        result = result @ m
    return result


# =============================================================================
# Inversion
# =============================================================================


def inverse(m: Matrix4) -> Matrix4:
    """Invert a 4x4 transform.

    Args:
        m: The matrix to invert.

    Returns:
        The inverse matrix. The homogeneous row is not renormalised.

    Raises:
        SingularMatrixError: If the matrix is not invertible.
    """
    try:
        return np.linalg.inv(m)
    except np.linalg.LinAlgError as e:
        raise SingularMatrixError(f"Transform is not invertible:\n{m}") from e


def transpose(m: Matrix4) -> Matrix4:
    """Transpose of a 4x4 matrix, as a new array."""
    return np.ascontiguousarray(m.T)
