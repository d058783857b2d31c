"""Procedural planet elevation generation."""

from .config import PlanetConfig, load_config, validate_config
from .exceptions import ConfigError, InvalidInvariantError, PlanetError
from .sampling import ElevationStats, compute_elevation_stats, elevation_grid
from .world import ElevationSample, World, WorldBuilder

__all__ = [
    # Config
    "PlanetConfig",
    "load_config",
    "validate_config",
    # World
    "World",
    "WorldBuilder",
    "ElevationSample",
    # Sampling
    "ElevationStats",
    "compute_elevation_stats",
    "elevation_grid",
    # Exceptions
    "PlanetError",
    "ConfigError",
    "InvalidInvariantError",
]
