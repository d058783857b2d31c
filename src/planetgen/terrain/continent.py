"""Continent layer: the large-scale land/ocean shape of the planet."""

from ..config import PlanetConfig
from .noise import Curve, NoiseSource, Point, Twist, clamp, derive_seed, lerp, smoothstep

# Seed offsets, one block per field
BASE_SEED_OFFSET = 0
CARVE_SEED_OFFSET = 1
COAST_TWIST_SEED_OFFSET = 10

BASE_OCTAVES = 8
CARVE_OCTAVES = 4
CARVE_FREQUENCY_FACTOR = 4.34375
COAST_TWIST_FREQUENCY_FACTOR = 15.25
COAST_TWIST_POWER = 0.0625
DRAINAGE_FREQUENCY_FACTOR = 18.75
DRAINAGE_OCTAVES = 2

# Coastline twist fades in from just below sea level
COAST_BAND_OFFSET = 0.0375
COAST_BAND_FALLOFF = 0.0625


def continent_curve(sea_level: float) -> Curve:
    """Remap raw continent noise into continent shapes around sea level.

    Pulls the deep ocean down, raises a steep continental rise just above
    sea level, and flattens the interior into broad plateaus.
    """
    points = [
        (-2.0000, -1.625),
        (-1.0000, -1.375),
        (0.0000, -0.375),
        (0.0625, 0.125),
        (0.1250, 0.250),
        (0.2500, 1.000),
        (0.5000, 0.250),
        (0.7500, 0.250),
        (1.0000, 0.500),
        (2.0000, 0.500),
    ]
    return Curve([(x + sea_level, y + sea_level) for x, y in points])


class ContinentLayer:
    """Continentalness field in [-1, 1].

    Positive values lie on land once compared with sea level; the same
    field is the base elevation of every other terrain type.
    """

    def __init__(self, config: PlanetConfig, seed: int):
        self.frequency = config.continent_frequency
        self.lacunarity = config.continent_lacunarity
        self.sea_level = config.sea_level

        self._base = NoiseSource(derive_seed(seed, BASE_SEED_OFFSET))
        self._carve = NoiseSource(derive_seed(seed, CARVE_SEED_OFFSET))
        self._curve = continent_curve(config.sea_level)
        self._coast_twist = Twist.from_seed(
            derive_seed(seed, COAST_TWIST_SEED_OFFSET),
            frequency=self.frequency * COAST_TWIST_FREQUENCY_FACTOR,
            power=COAST_TWIST_POWER / self.frequency,
            roughness=4,
        )

    def base_shape(self, point: Point) -> float:
        """Untwisted continent shape, clamped to [-1, 1]."""
        raw = self._base.sample(
            point, self.frequency, self.lacunarity, octaves=BASE_OCTAVES
        )
        shaped = self._curve(raw)

        # Carve out large basins so continents get ragged interiors
        carve = self._carve.sample(
            point,
            self.frequency * CARVE_FREQUENCY_FACTOR,
            self.lacunarity,
            octaves=CARVE_OCTAVES,
        )
        carved = min(shaped, 0.375 * carve + 0.625)

        return clamp(carved, -1.0, 1.0)

    def __call__(self, point: Point) -> float:
        base = self.base_shape(point)

        # Twist only near and above the coastline
        lower = self.sea_level - COAST_BAND_OFFSET
        weight = smoothstep(
            lower - COAST_BAND_FALLOFF, lower + COAST_BAND_FALLOFF, base
        )
        if weight == 0.0:
            return base

        twisted = self.base_shape(self._coast_twist.displace(point))
        return clamp(lerp(base, twisted, weight), -1.0, 1.0)

    def drainage_basis(self, point: Point) -> float:
        """Low-octave field whose zero crossings trace the river network."""
        return self._base.sample(
            point,
            self.frequency * DRAINAGE_FREQUENCY_FACTOR,
            self.lacunarity,
            octaves=DRAINAGE_OCTAVES,
        )
