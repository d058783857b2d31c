"""River carving along the continent drainage network.

Rivers run along the zero crossings of the continent's drainage basis.
The carve strength fades with the local slope of the blended field, so
rivers settle into flat valley floors rather than climbing ridges. It is
scaled by the land fraction, so open ocean is never carved, and fades out
towards the continental shelf.

    channel   = max(0, 1 - |basis| / CHANNEL_WIDTH) ** 2
    intensity = channel * exp(-slope / REFERENCE_SLOPE)
    fade      = smoothstep(shelf, shelf + 2 * river_depth, elevation)
    depth     = min(intensity, 1) * land * fade * river_depth
"""

import math
from dataclasses import dataclass
from typing import Callable

from ..config import PlanetConfig
from .continent import ContinentLayer
from .noise import Point, smoothstep

CHANNEL_WIDTH = 0.025
REFERENCE_SLOPE = 4.0

# Finite difference step along the sphere, in radians
GRADIENT_STEP = 1e-3

SEAFLOOR = -1.0


@dataclass(frozen=True)
class RiverCut:
    """Result of carving one point."""

    elevation: float
    depth: float


def tangent_basis(point: Point) -> tuple[Point, Point]:
    """Two orthonormal tangent vectors at a unit-sphere point."""
    px, py, pz = point
    hx, hy, hz = (0.0, 0.0, 1.0) if abs(pz) < 0.9 else (1.0, 0.0, 0.0)

    # t1 = helper x p, normalized
    t1x = hy * pz - hz * py
    t1y = hz * px - hx * pz
    t1z = hx * py - hy * px
    norm = math.sqrt(t1x * t1x + t1y * t1y + t1z * t1z)
    t1 = (t1x / norm, t1y / norm, t1z / norm)

    # t2 = p x t1
    t2 = (
        py * t1[2] - pz * t1[1],
        pz * t1[0] - px * t1[2],
        px * t1[1] - py * t1[0],
    )
    return t1, t2


def channel_strength(basis: float) -> float:
    """Channel profile across a river: 1 on the centreline, 0 beyond the banks."""
    t = 1.0 - abs(basis) / CHANNEL_WIDTH
    if t <= 0.0:
        return 0.0
    return t * t


class RiverCarver:
    """Subtracts bounded river channels from a blended elevation field."""

    def __init__(
        self,
        config: PlanetConfig,
        continent: ContinentLayer,
        blended: Callable[[Point], float],
    ):
        self.river_depth = config.river_depth
        self.shelf_level = config.shelf_level
        self.continent = continent
        self.blended = blended

    def slope(self, point: Point, elevation: float) -> float:
        """Gradient magnitude of the blended field by forward differences."""
        h = GRADIENT_STEP
        px, py, pz = point
        total = 0.0
        for tx, ty, tz in tangent_basis(point):
            shifted = self.blended((px + h * tx, py + h * ty, pz + h * tz))
            derivative = (shifted - elevation) / h
            total += derivative * derivative
        return math.sqrt(total)

    def carve(self, point: Point, elevation: float, land: float) -> RiverCut:
        """Carve a river channel at a point.

        Args:
            point: Point on the unit sphere.
            elevation: Blended elevation at that point.
            land: Land fraction at that point; nothing is carved where it is 0.

        Returns:
            RiverCut with the carved elevation and the depth removed.
        """
        if self.river_depth == 0.0 or land <= 0.0:
            return RiverCut(elevation=elevation, depth=0.0)

        fade = smoothstep(
            self.shelf_level, self.shelf_level + 2.0 * self.river_depth, elevation
        )
        if fade == 0.0:
            return RiverCut(elevation=elevation, depth=0.0)

        channel = channel_strength(self.continent.drainage_basis(point))
        if channel == 0.0:
            return RiverCut(elevation=elevation, depth=0.0)

        intensity = channel * math.exp(-self.slope(point, elevation) / REFERENCE_SLOPE)
        depth = min(intensity, 1.0) * min(land, 1.0) * fade * self.river_depth
        carved = max(elevation - depth, SEAFLOOR)
        return RiverCut(elevation=carved, depth=elevation - carved)
