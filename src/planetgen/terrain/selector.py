"""Terrain selection: blend the terrain layers into one elevation.

Weights are derived per point:

* land fraction: smooth-step of the continent value around sea level,
  half-width a quarter of the sea-to-shelf distance;
* terrain type: a control value mixing continentalness with a dedicated
  noise field by ``terrain_offset``. Mountains take the top
  ``mountains_amount`` of the control range, hills the band of width
  ``hills_amount`` just below, plains the rest;
* badlands: an independent control field thresholded by
  ``badlands_amount``, blended in last so it overrides every other type.

Every threshold is a smooth-step of width :data:`COVERAGE_FALLOFF` so the
blended field stays continuous.
"""

from dataclasses import dataclass

from ..config import PlanetConfig
from .badlands import BadlandLayer
from .continent import ContinentLayer
from .hills import HillLayer
from .mountains import MountainLayer
from .noise import NoiseSource, Point, Terrace, clamp, derive_seed, lerp, smoothstep
from .plains import PlainLayer

TERRAIN_CONTROL_SEED_OFFSET = 20
SHELF_SEED_OFFSET = 130
BADLANDS_CONTROL_SEED_OFFSET = 140

TERRAIN_CONTROL_FREQUENCY_FACTOR = 18.125
SHELF_FREQUENCY_FACTOR = 4.375
BADLANDS_CONTROL_FREQUENCY_FACTOR = 16.5

COVERAGE_FALLOFF = 0.125
SHELF_FALLOFF = 0.125
ABYSS_LEVEL = -0.75


def coverage_weight(control: float, amount: float, falloff: float = COVERAGE_FALLOFF) -> float:
    """Smoothly threshold a [0, 1] control value to cover ``amount`` of its range.

    The transition is centred near ``1 - amount`` and squeezed at the ends
    so that an amount of 1.0 always yields 1.0 and 0.0 always yields 0.0.

    Args:
        control: Control value in [0, 1].
        amount: Coverage amount in [0, 1].
        falloff: Width of the smooth transition.

    Returns:
        Weight in [0, 1].
    """
    upper = (1.0 - amount) * (1.0 + falloff)
    return smoothstep(upper - falloff, upper, control)


def _stretched(value: float) -> float:
    # fBm concentrates around zero; spread it over [-1, 1]
    return clamp(2.0 * value, -1.0, 1.0)


@dataclass(frozen=True)
class TerrainBlend:
    """Intermediate values of one blended elevation lookup.

    Layer values are None when the layer was skipped because its weight
    was zero.
    """

    continent: float
    land: float
    base: float
    mountain_weight: float
    hill_weight: float
    plain_weight: float
    badland_weight: float
    mountain: float | None
    hill: float | None
    plain: float | None
    badland: float | None
    elevation: float


class TerrainSelector:
    """Blends continent, mountain, hill, plain and badland layers."""

    def __init__(
        self,
        config: PlanetConfig,
        seed: int,
        continent: ContinentLayer,
        mountains: MountainLayer,
        hills: HillLayer,
        plains: PlainLayer,
        badlands: BadlandLayer,
    ):
        self.config = config
        self.continent = continent
        self.mountains = mountains
        self.hills = hills
        self.plains = plains
        self.badlands = badlands

        frequency = config.continent_frequency
        self._terrain_control = NoiseSource(derive_seed(seed, TERRAIN_CONTROL_SEED_OFFSET))
        self._terrain_control_frequency = frequency * TERRAIN_CONTROL_FREQUENCY_FACTOR
        self._badlands_control = NoiseSource(
            derive_seed(seed, BADLANDS_CONTROL_SEED_OFFSET)
        )
        self._badlands_control_frequency = frequency * BADLANDS_CONTROL_FREQUENCY_FACTOR
        self._shelf = NoiseSource(derive_seed(seed, SHELF_SEED_OFFSET))
        self._shelf_frequency = frequency * SHELF_FREQUENCY_FACTOR
        self._shelf_terrace = Terrace(
            sorted({-1.0, ABYSS_LEVEL, config.shelf_level, 1.0})
        )

        self._land_half_width = (config.sea_level - config.shelf_level) / 4.0
        # Shelf transition ends before the land band starts
        self._shelf_falloff = min(
            SHELF_FALLOFF, (config.sea_level - config.shelf_level) / 2.0
        )
        self._hills_cover = min(1.0, config.mountains_amount + config.hills_amount)

    def land_fraction(self, continent: float) -> float:
        """How much of a point counts as land, from its continent value."""
        sea_level = self.config.sea_level
        return smoothstep(
            sea_level - self._land_half_width,
            sea_level + self._land_half_width,
            continent,
        )

    def base_elevation(self, point: Point, continent: float) -> float:
        """Continent elevation with a continental shelf dropping to the abyss."""
        config = self.config
        scaled = continent * config.continent_height_scale
        above_shelf = smoothstep(
            config.shelf_level - self._shelf_falloff,
            config.shelf_level + self._shelf_falloff,
            continent,
        )
        if above_shelf == 1.0:
            return scaled

        ridges = self._shelf.ridged(
            point, self._shelf_frequency, config.continent_lacunarity, octaves=4
        )
        floor = clamp(self._shelf_terrace(continent), ABYSS_LEVEL, config.sea_level)
        floor += -0.125 * ridges - 0.125
        return lerp(floor, scaled, above_shelf)

    def terrain_control(self, point: Point, continent: float) -> float:
        """Terrain-type control value in [0, 1].

        Low ``terrain_offset`` makes the value follow continent elevation,
        so rough terrain only appears high up; high offsets let the noise
        dominate and rough terrain appears at any elevation.
        """
        offset = self.config.terrain_offset
        noise = _stretched(
            self._terrain_control.sample(
                point,
                self._terrain_control_frequency,
                self.config.continent_lacunarity,
                octaves=3,
            )
        )
        mixed = (continent + offset * noise) / (1.0 + offset)
        return clamp((mixed + 1.0) / 2.0, 0.0, 1.0)

    def terrain_weights(self, control: float, land: float) -> tuple[float, float, float]:
        """Mountain, hill and plain weights; they sum to ``land``.

        Mountains take precedence over hills, hills over plains.
        """
        mountain = coverage_weight(control, self.config.mountains_amount)
        hill = coverage_weight(control, self._hills_cover)
        return (
            land * mountain,
            land * (1.0 - mountain) * hill,
            land * (1.0 - mountain) * (1.0 - hill),
        )

    def badland_weight(self, point: Point, land: float) -> float:
        """Badlands weight from its own control field, zero offshore."""
        if land == 0.0:
            return 0.0
        noise = _stretched(
            self._badlands_control.sample(
                point,
                self._badlands_control_frequency,
                self.config.continent_lacunarity,
                octaves=2,
            )
        )
        control = (noise + 1.0) / 2.0
        return land * coverage_weight(control, self.config.badlands_amount)

    def blend(self, point: Point, evaluate_all: bool = False) -> TerrainBlend:
        """Blend every layer at a point.

        Args:
            point: Point on the unit sphere.
            evaluate_all: Evaluate layers even where their weight is zero.

        Returns:
            TerrainBlend with the clamped elevation and its components.
        """
        continent = self.continent(point)
        land = self.land_fraction(continent)
        base = self.base_elevation(point, continent)

        control = self.terrain_control(point, continent)
        w_mountain, w_hill, w_plain = self.terrain_weights(control, land)
        w_badland = self.badland_weight(point, land)

        def evaluate(layer, weight: float) -> float | None:
            if evaluate_all or weight > 0.0:
                return layer(point)
            return None

        mountain = evaluate(self.mountains, w_mountain)
        hill = evaluate(self.hills, w_hill)
        plain = evaluate(self.plains, w_plain)
        badland = evaluate(self.badlands, w_badland)

        elevation = base
        for weight, value in ((w_mountain, mountain), (w_hill, hill), (w_plain, plain)):
            if value is not None:
                elevation += weight * value

        # Badlands overlay everything beneath them
        if badland is not None:
            elevation = lerp(elevation, badland, w_badland)

        return TerrainBlend(
            continent=continent,
            land=land,
            base=base,
            mountain_weight=w_mountain,
            hill_weight=w_hill,
            plain_weight=w_plain,
            badland_weight=w_badland,
            mountain=mountain,
            hill=hill,
            plain=plain,
            badland=badland,
            elevation=clamp(elevation, -1.0, 1.0),
        )

    def __call__(self, point: Point) -> float:
        return self.blend(point).elevation
