"""Planet world: build once, then query elevations point by point."""

import math
from dataclasses import dataclass, fields

import numpy as np
import structlog

from .config import MAX_SEED, PlanetConfig, validate_config
from .exceptions import ConfigError
from .terrain.badlands import BadlandLayer
from .terrain.continent import ContinentLayer
from .terrain.hills import HillLayer
from .terrain.mountains import MountainLayer
from .terrain.noise import Point, sphere_point
from .terrain.plains import PlainLayer
from .terrain.rivers import RiverCarver
from .terrain.selector import TerrainSelector

logger = structlog.get_logger()


@dataclass(frozen=True)
class ElevationSample:
    """Every intermediate value behind one elevation lookup."""

    continent: float
    land: float
    mountain_weight: float
    hill_weight: float
    plain_weight: float
    badland_weight: float
    mountain: float
    hill: float
    plain: float
    badland: float
    blended: float
    river_depth: float
    elevation: float

    @classmethod
    def undefined(cls) -> "ElevationSample":
        """Sample for coordinates with no defined elevation (all NaN)."""
        return cls(**{f.name: math.nan for f in fields(cls)})


class World:
    """An immutable planet elevation field.

    Holds a validated configuration and the terrain layers built from its
    seed. Every query is a pure function of the point, so one World can be
    shared across threads without locking.
    """

    def __init__(self, config: PlanetConfig):
        self.config = config
        seed = config.seed

        self.continent = ContinentLayer(config, seed)
        self.selector = TerrainSelector(
            config,
            seed,
            continent=self.continent,
            mountains=MountainLayer(config, seed),
            hills=HillLayer(config, seed),
            plains=PlainLayer(config, seed),
            badlands=BadlandLayer(config, seed),
        )
        self.rivers = RiverCarver(config, self.continent, self.selector)

    @property
    def seed(self) -> int:
        return self.config.seed

    def elevation_at(self, x: float, y: float) -> float:
        """Elevation at normalized planetary coordinates.

        Args:
            x: Normalized longitude, -1.0 to 1.0 spans the full circle.
            y: Normalized latitude, -1.0 is the south pole, 1.0 the north.

        Returns:
            Elevation in planetary height units, within [-1, 1]; NaN for
            non-finite coordinates.
        """
        if not (math.isfinite(x) and math.isfinite(y)):
            return math.nan
        return self._evaluate(sphere_point(x, y))

    def elevation_at_point(self, x: float, y: float, z: float) -> float:
        """Elevation in the direction of a 3-D point.

        The point is projected onto the unit sphere; the zero vector and
        non-finite components yield NaN.
        """
        point = _unit_point(x, y, z)
        if point is None:
            return math.nan
        return self._evaluate(point)

    def sample(self, x: float, y: float) -> ElevationSample:
        """Elevation at normalized coordinates with all of its components.

        Every layer is evaluated, including those with zero weight; the
        resulting elevation equals :meth:`elevation_at`.
        """
        if not (math.isfinite(x) and math.isfinite(y)):
            return ElevationSample.undefined()

        point = sphere_point(x, y)
        blend = self.selector.blend(point, evaluate_all=True)
        cut = self.rivers.carve(point, blend.elevation, blend.land)
        return ElevationSample(
            continent=blend.continent,
            land=blend.land,
            mountain_weight=blend.mountain_weight,
            hill_weight=blend.hill_weight,
            plain_weight=blend.plain_weight,
            badland_weight=blend.badland_weight,
            mountain=blend.mountain,
            hill=blend.hill,
            plain=blend.plain,
            badland=blend.badland,
            blended=blend.elevation,
            river_depth=cut.depth,
            elevation=cut.elevation,
        )

    def _evaluate(self, point: Point) -> float:
        blend = self.selector.blend(point)
        return self.rivers.carve(point, blend.elevation, blend.land).elevation


def _unit_point(x: float, y: float, z: float) -> Point | None:
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
        return None
    norm = math.hypot(x, y, z)
    if norm == 0.0 or not math.isfinite(norm):
        return None
    return (x / norm, y / norm, z / norm)


class WorldBuilder:
    """Fluent builder for :class:`World`.

    Without a configuration the builder starts from the defaults and a
    freshly drawn random seed; with one it starts from that
    configuration's seed.
    """

    def __init__(self, config: PlanetConfig | None = None):
        if config is None:
            config = PlanetConfig()
            seed = int(np.random.default_rng().integers(0, MAX_SEED, endpoint=True))
        else:
            seed = config.seed
        self.config = config
        self.current_seed = seed

    def set_seed(self, seed: int) -> "WorldBuilder":
        """Use a specific seed for generation."""
        self.current_seed = seed
        return self

    def set_config(self, config: PlanetConfig) -> "WorldBuilder":
        """Use a specific configuration; the current seed is kept."""
        self.config = config
        return self

    def build(self) -> World:
        """Validate the configuration and build the World.

        Raises:
            ConfigError: If the configuration violates an invariant.
        """
        config = self.config.model_copy(update={"seed": self.current_seed})
        try:
            validate_config(config)
        except ConfigError as e:
            logger.warning("config_rejected", seed=self.current_seed, reason=str(e))
            raise

        world = World(config)
        logger.info(
            "world_built",
            seed=config.seed,
            sea_level=config.sea_level,
            shelf_level=config.shelf_level,
            mountains_amount=config.mountains_amount,
            hills_amount=config.hills_amount,
            badlands_amount=config.badlands_amount,
        )
        return world
