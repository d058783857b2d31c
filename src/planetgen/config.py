"""Planet generation configuration."""

import math
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, model_validator

from .exceptions import InvalidInvariantError

MAX_SEED = 2**32 - 1


class PlanetConfig(BaseModel, frozen=True):
    """Complete, immutable planet generation configuration.

    Built once and shared read-only by every World built from it.
    Invariants are checked by :func:`validate_config` when a World is
    built, not on construction, so a bad configuration can be inspected.
    """

    seed: int = Field(default=0, description="Root seed for every noise field")

    continent_frequency: float = Field(
        default=1.0,
        description="Continent frequency in radians; higher gives smaller, more numerous continents",
    )
    continent_lacunarity: float = Field(
        default=2.208984375, description="Continent lacunarity, best random but close to 2.0"
    )
    mountain_lacunarity: float = Field(
        default=2.142578125, description="Mountain lacunarity, best random but close to 2.0"
    )
    hills_lacunarity: float = Field(
        default=2.162109375, description="Hill lacunarity, best random but close to 2.0"
    )
    plains_lacunarity: float = Field(
        default=2.314453125, description="Plains lacunarity, best random but close to 2.0"
    )
    badlands_lacunarity: float = Field(
        default=2.212890625, description="Badlands lacunarity, best random but close to 2.0"
    )

    mountains_twist: float = Field(default=1.0, description="Twistiness of mountain ridges")
    hills_twist: float = Field(default=1.0, description="Twistiness of hills")
    plains_twist: float = Field(default=1.0, description="Twistiness of plains")
    badlands_twist: float = Field(default=1.0, description="Twistiness of badland cliffs")

    sea_level: float = Field(
        default=0.0, description="Sea level, between -1.0 and +1.0"
    )
    shelf_level: float = Field(
        default=-0.375,
        description="Level where continental shelves start; must be below sea_level",
    )

    mountains_amount: float = Field(
        default=0.48, description="Fraction of land covered by mountains (0-1)"
    )
    hills_amount: float = Field(
        default=0.24,
        description="Fraction of land covered by hills (0-1); must be below mountains_amount",
    )
    badlands_amount: float = Field(
        default=0.3125, description="Fraction of land covered by badlands (0-1), overlays all types"
    )

    terrain_offset: float = Field(
        default=1.0,
        description="Terrain type offset; < 1.0 keeps rough terrain high, > 2.0 allows it anywhere",
    )
    mountain_glaciation: float = Field(
        default=0.375, description="Glaciation exponent applied to mountain peaks"
    )
    continent_height_scale: float = Field(
        default=0.25,
        description="Scale applied to base continent elevations; (1 - sea_level) / 4 if omitted",
    )
    river_depth: float = Field(
        default=0.0234375, description="Maximum river depth in planetary height units"
    )

    @model_validator(mode="before")
    @classmethod
    def _derive_height_scale(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("continent_height_scale") is None:
            data = dict(data)
            sea_level = data.get("sea_level", 0.0)
            if isinstance(sea_level, (int, float)):
                data["continent_height_scale"] = (1.0 - sea_level) / 4.0
            else:
                # Left to field validation to report
                data.pop("continent_height_scale", None)
        return data


def _require(condition: bool, which: str) -> None:
    if not condition:
        raise InvalidInvariantError(which)


def validate_config(config: PlanetConfig) -> None:
    """Check every invariant of a planet configuration.

    Comparisons are written so that NaN parameters fail them.

    Args:
        config: Configuration to check.

    Raises:
        InvalidInvariantError: Naming the first violated invariant.
    """
    # model_copy skips field validation, so the type is checked here too
    _require(
        isinstance(config.seed, int)
        and not isinstance(config.seed, bool)
        and 0 <= config.seed <= MAX_SEED,
        "seed is a 32-bit unsigned integer",
    )

    _require(-1.0 <= config.sea_level <= 1.0, "sea_level in [-1, 1]")
    _require(-1.0 <= config.shelf_level <= 1.0, "shelf_level in [-1, 1]")
    _require(config.shelf_level < config.sea_level, "shelf_level < sea_level")

    for name in ("mountains_amount", "hills_amount", "badlands_amount"):
        _require(0.0 <= getattr(config, name) <= 1.0, f"{name} in [0, 1]")
    _require(
        config.hills_amount < config.mountains_amount,
        "hills_amount < mountains_amount",
    )

    _require(
        0.0 < config.continent_frequency < math.inf, "continent_frequency > 0"
    )
    for name in (
        "continent_lacunarity",
        "mountain_lacunarity",
        "hills_lacunarity",
        "plains_lacunarity",
        "badlands_lacunarity",
    ):
        _require(0.0 < getattr(config, name) < math.inf, f"{name} > 0")
    for name in ("mountains_twist", "hills_twist", "plains_twist", "badlands_twist"):
        _require(0.0 <= getattr(config, name) < math.inf, f"{name} >= 0")

    _require(0.0 <= config.terrain_offset < math.inf, "terrain_offset >= 0")
    _require(0.0 < config.mountain_glaciation < math.inf, "mountain_glaciation > 0")
    _require(
        0.0 < config.continent_height_scale <= 1.0,
        "continent_height_scale in (0, 1]",
    )
    _require(0.0 <= config.river_depth <= 1.0, "river_depth in [0, 1]")


def load_config(config_path: Path) -> PlanetConfig:
    """Load a planet configuration from a TOML file.

    Parameters may sit at the top level or inside a ``[planet]`` table.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed PlanetConfig (not yet validated against its invariants).

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        pydantic.ValidationError: If a value has the wrong type.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return PlanetConfig.model_validate(data.get("planet", data))
