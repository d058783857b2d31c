"""Grid sampling and statistics over a built World."""

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .config import PlanetConfig
from .world import World

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ElevationStats:
    """Summary statistics of an elevation grid."""

    minimum: float
    maximum: float
    mean: float
    land_fraction: float
    shelf_fraction: float


def grid_coordinates(width: int, height: int) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Cell-centred normalized coordinates of an equirectangular grid.

    Args:
        width: Number of columns (longitude samples).
        height: Number of rows (latitude samples).

    Returns:
        Tuple of (longitudes, latitudes); latitudes run north to south.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
    xs = -1.0 + (np.arange(width, dtype=np.float64) + 0.5) * (2.0 / width)
    ys = 1.0 - (np.arange(height, dtype=np.float64) + 0.5) * (2.0 / height)
    return xs, ys


def elevation_grid(world: World, width: int, height: int) -> NDArray[np.float64]:
    """Sample a world over an equirectangular grid.

    Args:
        world: World to sample.
        width: Number of columns.
        height: Number of rows.

    Returns:
        Array of shape (height, width); row 0 is the northernmost.
    """
    xs, ys = grid_coordinates(width, height)
    logger.info(f"Sampling {width}x{height} elevation grid with seed {world.seed}")

    grid = np.empty((height, width), dtype=np.float64)
    for row, y in enumerate(ys):
        for col, x in enumerate(xs):
            grid[row, col] = world.elevation_at(float(x), float(y))
        logger.debug(f"  row {row + 1}/{height} done")

    return grid


def compute_elevation_stats(
    grid: NDArray[np.float64],
    config: PlanetConfig,
) -> ElevationStats:
    """Compute and log summary statistics of an elevation grid.

    Args:
        grid: Elevation samples.
        config: Configuration the grid was generated with.

    Returns:
        ElevationStats for the finite samples of the grid.
    """
    finite = grid[np.isfinite(grid)]
    if finite.size == 0:
        raise ValueError("Elevation grid has no finite samples")

    land = finite > config.sea_level
    shelf = (finite > config.shelf_level) & ~land

    stats = ElevationStats(
        minimum=float(finite.min()),
        maximum=float(finite.max()),
        mean=float(finite.mean()),
        land_fraction=float(land.mean()),
        shelf_fraction=float(shelf.mean()),
    )

    logger.info(f"Elevation stats ({finite.size:,} samples):")
    logger.info(f"  range: {stats.minimum:.3f} to {stats.maximum:.3f}, mean {stats.mean:.3f}")
    logger.info(f"  land: {stats.land_fraction:.1%}, shelf: {stats.shelf_fraction:.1%}")

    return stats
