"""Plains layer: nearly flat terrain with low swells."""

from ..config import PlanetConfig
from .noise import NoiseSource, Point, Twist, clamp, derive_seed

BILLOW_SEED_OFFSETS = (70, 71)
TWIST_SEED_OFFSET = 72

PLAINS_FREQUENCY_FACTOR = 15.0
TWIST_FREQUENCY_FACTOR = 0.8
TWIST_STRENGTH = 0.2


class PlainLayer:
    """Plains contribution in planetary height units."""

    def __init__(self, config: PlanetConfig, seed: int):
        self.frequency = config.continent_frequency * PLAINS_FREQUENCY_FACTOR
        self.lacunarity = config.plains_lacunarity

        self._billows = tuple(
            NoiseSource(derive_seed(seed, offset)) for offset in BILLOW_SEED_OFFSETS
        )
        self.twist = Twist.from_seed(
            derive_seed(seed, TWIST_SEED_OFFSET),
            frequency=self.frequency * TWIST_FREQUENCY_FACTOR,
            power=config.plains_twist * TWIST_STRENGTH / self.frequency,
            roughness=2,
        )

    def shape(self, point: Point) -> float:
        """Normalized plains terrain at a point."""
        q = self.twist.displace(point)

        # Product of two billow fields keeps most of the area low
        product = 1.0
        for source in self._billows:
            value = source.billow(q, self.frequency, self.lacunarity, octaves=4)
            product *= 0.5 * value + 0.5

        return clamp(2.0 * product - 1.0, -1.0, 1.0)

    def __call__(self, point: Point) -> float:
        return 0.03125 * self.shape(point) + 0.03125
