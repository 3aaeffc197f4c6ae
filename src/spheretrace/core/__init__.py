"""Core math module.

This module contains the fundamental building blocks for ray casting:

Components:
    linalg: Homogeneous points/vectors, 4x4 transforms and inversion
    color: Unclamped RGB color used as the shading accumulator
    ray: Ray data structure and the reflection helper

Everything here is plain NumPy on the CPU. All values are treated as
immutable once built: transforms return new arrays, rays return new rays.
"""

from .color import Color
from .linalg import (
    EPSILON,
    Matrix4,
    SingularMatrixError,
    Tuple4,
    approx_equal,
    chain,
    cross,
    dot,
    frozen_copy,
    identity,
    inverse,
    is_point,
    is_vector,
    magnitude,
    normalize,
    point,
    rotation,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shear,
    translation,
    transpose,
    vector,
)
from .ray import Ray, reflect

__all__ = [
    "Color",
    "Ray",
    "reflect",
    "EPSILON",
    "Matrix4",
    "Tuple4",
    "SingularMatrixError",
    "point",
    "vector",
    "is_point",
    "is_vector",
    "dot",
    "cross",
    "magnitude",
    "normalize",
    "approx_equal",
    "frozen_copy",
    "identity",
    "translation",
    "scaling",
    "rotation",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "shear",
    "chain",
    "inverse",
    "transpose",
]
