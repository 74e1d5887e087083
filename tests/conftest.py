"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sphere_rt.common import Sphere  # noqa: E402


@pytest.fixture
def sphere_ahead():
    """Sphere of radius 2 five units down the +z axis."""
    return Sphere(
        center=np.array([0.0, 0.0, 5.0], dtype=np.float32),
        radius=2.0,
        color=np.array([0.75, 0.66, 0.45], dtype=np.float32),
    )


@pytest.fixture
def sphere_behind():
    """Unit sphere behind the origin, facing the back of ``sphere_ahead``."""
    return Sphere(
        center=np.array([0.0, 0.0, -5.0], dtype=np.float32),
        radius=1.0,
        color=np.array([0.2, 0.4, 0.6], dtype=np.float32),
    )


@pytest.fixture
def origin():
    return np.zeros(3, dtype=np.float32)
