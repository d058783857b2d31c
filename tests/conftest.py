"""Shared test fixtures for planet tests."""

import pytest

from planetgen.config import PlanetConfig
from planetgen.terrain.noise import Point, sphere_point
from planetgen.world import World, WorldBuilder

# Normalized (longitude, latitude) probes spread over the globe
PROBE_COORDS: list[tuple[float, float]] = [
    (x, y)
    for y in (-0.6, -0.2, 0.2, 0.6)
    for x in (-0.9, -0.45, 0.0, 0.45, 0.9)
]


@pytest.fixture(scope="session")
def world() -> World:
    """World built from the defaults with seed 42, shared across tests."""
    return WorldBuilder(PlanetConfig()).set_seed(42).build()


@pytest.fixture
def probe_coords() -> list[tuple[float, float]]:
    """Normalized coordinates spread over the globe."""
    return list(PROBE_COORDS)


@pytest.fixture
def probe_points() -> list[Point]:
    """Unit-sphere points spread over the globe."""
    return [sphere_point(x, y) for x, y in PROBE_COORDS]
