"""Pytest configuration for spheretrace tests.

This module provides shared fixtures for all test modules: stock worlds,
a default unit sphere and the canonical ray aimed down +z at the origin.
"""

import numpy as np
import pytest

from spheretrace.core.linalg import point, vector
from spheretrace.core.ray import Ray
from spheretrace.geometry.sphere import create_sphere
from spheretrace.scene.world import default_world


@pytest.fixture
def unit_sphere():
    """A fresh sphere with the identity transform and default material."""
    return create_sphere()


@pytest.fixture
def canonical_ray():
    """Ray from (0, 0, -5) travelling along +z."""
    return Ray(point(0.0, 0.0, -5.0), vector(0.0, 0.0, 1.0))


@pytest.fixture
def world():
    """The standard two-sphere world."""
    return default_world()


@pytest.fixture
def rng():
    """Seeded random generator for property-style tests."""
    return np.random.default_rng(42)
