"""Mountain layer: twisted ridged ranges with glaciated peaks."""

from ..config import PlanetConfig
from .noise import (
    NoiseSource,
    Point,
    Twist,
    clamp,
    derive_seed,
    exponent_curve,
    lerp,
    smoothstep,
)

RIDGE_SEED_OFFSET = 30
RANGE_SEED_OFFSET = 31
TWIST_SEED_OFFSET = 32
PEAK_SEED_OFFSETS = (40, 41)
LOWLAND_SEED_OFFSETS = (50, 51)
VARIATION_SEED_OFFSET = 110

MOUNTAIN_FREQUENCY_FACTOR = 24.0
RANGE_FREQUENCY_FACTOR = 0.213
PEAK_FREQUENCY_FACTORS = (1.376, 1.359)
LOWLAND_FREQUENCY_FACTORS = (0.802, 0.828)
TWIST_FREQUENCY_FACTOR = 0.776
VARIATION_FREQUENCY_FACTOR = 14.5

# Warp displacement as a fraction of the ridge wavelength per unit twist
TWIST_STRENGTH = 0.2

GLACIATION_THRESHOLD = 0.25


def glaciate(value: float, glaciation: float, threshold: float = GLACIATION_THRESHOLD) -> float:
    """Reshape values above ``threshold`` by raising them to ``glaciation``.

    Exponents below 1.0 lift and broaden the peaks into ice caps, above
    1.0 sharpen them. Continuous at the threshold and fixed at 1.0.

    Args:
        value: Mountain value in [-1, 1].
        glaciation: Positive exponent.
        threshold: Elevation above which glaciation applies.

    Returns:
        Reshaped value in [-1, 1].
    """
    if value <= threshold:
        return value
    span = 1.0 - threshold
    u = clamp((value - threshold) / span, 0.0, 1.0)
    return threshold + (u**glaciation) * span


class MountainLayer:
    """Mountainous terrain contribution in planetary height units.

    ``shape`` gives the normalized [-1, 1] terrain; calling the layer
    scales it into a non-negative relief modulated by a slow regional
    height variation.
    """

    def __init__(self, config: PlanetConfig, seed: int):
        self.frequency = config.continent_frequency * MOUNTAIN_FREQUENCY_FACTOR
        self.lacunarity = config.mountain_lacunarity
        self.glaciation = config.mountain_glaciation

        self._ridges = NoiseSource(derive_seed(seed, RIDGE_SEED_OFFSET))
        self._ranges = NoiseSource(derive_seed(seed, RANGE_SEED_OFFSET))
        self._peaks = tuple(
            NoiseSource(derive_seed(seed, offset)) for offset in PEAK_SEED_OFFSETS
        )
        self._lowlands = tuple(
            NoiseSource(derive_seed(seed, offset)) for offset in LOWLAND_SEED_OFFSETS
        )
        self._variation = NoiseSource(derive_seed(seed, VARIATION_SEED_OFFSET))
        self._variation_frequency = (
            config.continent_frequency * VARIATION_FREQUENCY_FACTOR
        )
        self.twist = Twist.from_seed(
            derive_seed(seed, TWIST_SEED_OFFSET),
            frequency=self.frequency * TWIST_FREQUENCY_FACTOR,
            power=config.mountains_twist * TWIST_STRENGTH / self.frequency,
            roughness=3,
        )

    def shape(self, point: Point) -> float:
        """Normalized mountain terrain at a point."""
        q = self.twist.displace(point)
        freq = self.frequency
        lac = self.lacunarity

        # Ridgelines, masked so they only rise inside mountain ranges
        ridges = self._ridges.ridged(q, freq, lac, octaves=4)
        ranges = self._ranges.ridged(q, freq * RANGE_FREQUENCY_FACTOR, lac, octaves=1)
        range_mask = clamp(0.25 - ranges, 0.0, 1.0)
        base = lerp(-1.0, 0.5 * ridges + 0.375, range_mask)

        peaks = max(
            source.ridged(q, freq * factor, lac, octaves=2)
            for source, factor in zip(self._peaks, PEAK_FREQUENCY_FACTORS)
        )
        rugged = 0.25 * peaks + 0.25 + base

        a, b = (
            source.ridged(q, freq * factor, lac, octaves=2)
            for source, factor in zip(self._lowlands, LOWLAND_FREQUENCY_FACTORS)
        )
        lowland = 0.03125 * (a * b) - 0.96875

        mountain = 0.8 * lerp(lowland, rugged, smoothstep(-1.0, 0.0, base))
        return glaciate(clamp(mountain, -1.0, 1.0), self.glaciation)

    def __call__(self, point: Point) -> float:
        variation = self._variation.sample(
            point, self._variation_frequency, self.lacunarity, octaves=3
        )
        scale = 0.25 * exponent_curve(variation, 1.25) + 1.0
        return (0.25 * self.shape(point) + 0.25) * scale
