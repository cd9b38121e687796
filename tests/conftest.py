"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from nbody.Body import Body  # noqa: E402
from nbody.Vec2 import Vec2  # noqa: E402
from nbody.simulation import Simulation  # noqa: E402


@pytest.fixture
def sim():
    """A small deterministic single-threaded simulation."""
    s = Simulation(800, 600, G=1.0, friction=0.9, max_velocity=500.0, substeps=4,
                   mass_range=(100.0, 1000.0), workers=1, seed=1234)
    yield s
    s.close()


@pytest.fixture
def make_body():
    """Factory for bodies with explicit state."""
    def _make(x, y, vx=0.0, vy=0.0, mass=1000.0, radius=0.0, frozen=False):
        return Body(Vec2(x, y), vel=Vec2(vx, vy), mass=mass, radius=radius, frozen=frozen)
    return _make
