"""Badlands layer: terraced cliffs over rippled sand.

Badlands override whatever terrain lies beneath them, so the layer
returns absolute elevations rather than a relief added to the continent.
"""

from ..config import PlanetConfig
from .noise import Curve, NoiseSource, Point, Terrace, Twist, clamp, derive_seed

SAND_SEED_OFFSET = 80
DUNE_SEED_OFFSET = 81
CLIFF_SEED_OFFSET = 90
TWIST_SEED_OFFSET = 91

SAND_FREQUENCY_FACTOR = 40.0
DUNE_FREQUENCY_FACTOR = 2.625
CLIFF_FREQUENCY_FACTOR = 12.0
TWIST_FREQUENCY_FACTOR = 4.0
TWIST_STRENGTH = 0.2

# Plateau heights in planetary units
BADLANDS_FLOOR = 0.125
BADLANDS_RELIEF = 0.1875

CLIFF_CURVE = Curve(
    [
        (-2.000, -2.000),
        (-1.000, -1.250),
        (-0.000, -0.750),
        (0.500, -0.250),
        (0.625, 0.875),
        (0.750, 1.000),
        (2.000, 1.250),
    ]
)
CLIFF_TERRACE = Terrace([-1.0, -0.875, -0.75, -0.5, 0.0, 1.0])


class BadlandLayer:
    """Badlands elevation in planetary height units."""

    def __init__(self, config: PlanetConfig, seed: int):
        self.sand_frequency = config.continent_frequency * SAND_FREQUENCY_FACTOR
        self.cliff_frequency = config.continent_frequency * CLIFF_FREQUENCY_FACTOR
        self.lacunarity = config.badlands_lacunarity

        self._sand = NoiseSource(derive_seed(seed, SAND_SEED_OFFSET))
        self._dunes = NoiseSource(derive_seed(seed, DUNE_SEED_OFFSET))
        self._cliffs = NoiseSource(derive_seed(seed, CLIFF_SEED_OFFSET))
        self.twist = Twist.from_seed(
            derive_seed(seed, TWIST_SEED_OFFSET),
            frequency=self.cliff_frequency * TWIST_FREQUENCY_FACTOR,
            power=config.badlands_twist * TWIST_STRENGTH / self.cliff_frequency,
            roughness=3,
        )

    def sand(self, point: Point) -> float:
        """Wind-rippled sand floor between the cliffs."""
        ridges = self._sand.ridged(point, self.sand_frequency, self.lacunarity, octaves=1)
        dunes = self._dunes.billow(
            point, self.sand_frequency * DUNE_FREQUENCY_FACTOR, self.lacunarity, octaves=2
        )
        return 0.875 * ridges + 0.25 * dunes + 0.25

    def cliffs(self, point: Point) -> float:
        """Terraced mesas, sampled at the twisted point."""
        q = self.twist.displace(point)
        raw = self._cliffs.sample(q, self.cliff_frequency, self.lacunarity, octaves=4)

        # Stretch to the full curve range; fBm rarely leaves [-0.5, 0.5]
        shaped = min(CLIFF_CURVE(2.0 * raw), 0.875)
        return CLIFF_TERRACE(shaped)

    def shape(self, point: Point) -> float:
        """Normalized badlands terrain at a point."""
        sand = 0.25 * self.sand(point) - 0.75
        return clamp(max(self.cliffs(point), sand), -1.0, 1.0)

    def __call__(self, point: Point) -> float:
        return BADLANDS_FLOOR + BADLANDS_RELIEF * (self.shape(point) + 1.0)
