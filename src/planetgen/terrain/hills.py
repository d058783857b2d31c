"""Hill layer: rolling billowed hills cut by ridge-guided valleys."""

from ..config import PlanetConfig
from .noise import NoiseSource, Point, Twist, clamp, derive_seed, exponent_curve, lerp

BILLOW_SEED_OFFSET = 60
VALLEY_SEED_OFFSET = 61
TWIST_SEED_OFFSET = 62
VARIATION_SEED_OFFSET = 120

HILLS_FREQUENCY_FACTOR = 20.0
VALLEY_FREQUENCY_FACTOR = 0.221
TWIST_FREQUENCY_FACTOR = 0.92
VARIATION_FREQUENCY_FACTOR = 13.5
TWIST_STRENGTH = 0.2


class HillLayer:
    """Hilly terrain contribution in planetary height units."""

    def __init__(self, config: PlanetConfig, seed: int):
        self.frequency = config.continent_frequency * HILLS_FREQUENCY_FACTOR
        self.lacunarity = config.hills_lacunarity

        self._billow = NoiseSource(derive_seed(seed, BILLOW_SEED_OFFSET))
        self._valleys = NoiseSource(derive_seed(seed, VALLEY_SEED_OFFSET))
        self._variation = NoiseSource(derive_seed(seed, VARIATION_SEED_OFFSET))
        self._variation_frequency = (
            config.continent_frequency * VARIATION_FREQUENCY_FACTOR
        )
        self.twist = Twist.from_seed(
            derive_seed(seed, TWIST_SEED_OFFSET),
            frequency=self.frequency * TWIST_FREQUENCY_FACTOR,
            power=config.hills_twist * TWIST_STRENGTH / self.frequency,
            roughness=3,
        )

    def shape(self, point: Point) -> float:
        """Normalized hill terrain at a point."""
        q = self.twist.displace(point)

        hills = 0.5 * self._billow.billow(q, self.frequency, self.lacunarity, octaves=4) + 0.5

        # Ridged noise marks river valleys where hills flatten out
        valleys = self._valleys.ridged(
            q, self.frequency * VALLEY_FREQUENCY_FACTOR, self.lacunarity, octaves=1
        )
        blended = lerp(-1.0, hills, clamp(-valleys, 0.0, 1.0))

        return clamp(exponent_curve(0.75 * blended - 0.25, 1.375), -1.0, 1.0)

    def __call__(self, point: Point) -> float:
        variation = self._variation.sample(
            point, self._variation_frequency, self.lacunarity, octaves=3
        )
        scale = 0.5 * exponent_curve(variation, 1.25) + 1.5
        return (0.0625 * self.shape(point) + 0.0625) * scale
