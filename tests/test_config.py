"""Tests for planet configuration."""

import math

import pydantic
import pytest

from planetgen.config import PlanetConfig, load_config, validate_config
from planetgen.exceptions import ConfigError, InvalidInvariantError


class TestPlanetConfig:
    """Tests for PlanetConfig defaults and immutability."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = PlanetConfig()
        assert config.seed == 0
        assert config.continent_frequency == 1.0
        assert config.continent_lacunarity == 2.208984375
        assert config.mountain_lacunarity == 2.142578125
        assert config.hills_lacunarity == 2.162109375
        assert config.plains_lacunarity == 2.314453125
        assert config.badlands_lacunarity == 2.212890625
        assert config.mountains_twist == 1.0
        assert config.sea_level == 0.0
        assert config.shelf_level == -0.375
        assert config.mountains_amount == 0.48
        assert config.hills_amount == 0.24
        assert config.badlands_amount == 0.3125
        assert config.terrain_offset == 1.0
        assert config.mountain_glaciation == 0.375
        assert config.continent_height_scale == 0.25
        assert config.river_depth == 0.0234375

    def test_defaults_are_valid(self) -> None:
        """Default configuration passes every invariant."""
        validate_config(PlanetConfig())

    def test_height_scale_follows_sea_level(self) -> None:
        """Omitted height scale is derived from sea level."""
        config = PlanetConfig(sea_level=0.2)
        assert config.continent_height_scale == pytest.approx(0.2)

    def test_explicit_height_scale_kept(self) -> None:
        """Explicit height scale overrides the derived default."""
        config = PlanetConfig(sea_level=0.2, continent_height_scale=0.5)
        assert config.continent_height_scale == 0.5

    def test_frozen(self) -> None:
        """Configuration cannot be mutated."""
        config = PlanetConfig()
        with pytest.raises(pydantic.ValidationError):
            config.sea_level = 0.5


class TestValidateConfig:
    """Tests for configuration invariants."""

    @pytest.mark.parametrize(
        "overrides, which",
        [
            ({"shelf_level": 0.0}, "shelf_level < sea_level"),
            ({"shelf_level": 0.5}, "shelf_level < sea_level"),
            ({"sea_level": 1.5}, "sea_level in [-1, 1]"),
            ({"shelf_level": -1.5}, "shelf_level in [-1, 1]"),
            ({"mountains_amount": 1.2}, "mountains_amount in [0, 1]"),
            ({"hills_amount": -0.1}, "hills_amount in [0, 1]"),
            ({"badlands_amount": 1.01}, "badlands_amount in [0, 1]"),
            ({"hills_amount": 0.48}, "hills_amount < mountains_amount"),
            ({"hills_amount": 0.6}, "hills_amount < mountains_amount"),
            ({"continent_frequency": 0.0}, "continent_frequency > 0"),
            ({"plains_lacunarity": -2.0}, "plains_lacunarity > 0"),
            ({"badlands_twist": -1.0}, "badlands_twist >= 0"),
            ({"terrain_offset": -0.5}, "terrain_offset >= 0"),
            ({"mountain_glaciation": 0.0}, "mountain_glaciation > 0"),
            ({"river_depth": -0.01}, "river_depth in [0, 1]"),
            ({"seed": -1}, "seed is a 32-bit unsigned integer"),
            ({"seed": 2**32}, "seed is a 32-bit unsigned integer"),
        ],
    )
    def test_violations_rejected(self, overrides, which) -> None:
        """Each violated invariant is reported by name."""
        config = PlanetConfig(**overrides)
        with pytest.raises(InvalidInvariantError) as exc_info:
            validate_config(config)
        assert exc_info.value.which == which
        assert which in str(exc_info.value)

    def test_nan_rejected(self) -> None:
        """NaN parameters fail validation."""
        config = PlanetConfig(sea_level=math.nan)
        with pytest.raises(ConfigError):
            validate_config(config)

    def test_invariant_error_is_config_error(self) -> None:
        """InvalidInvariantError is caught as ConfigError."""
        with pytest.raises(ConfigError):
            validate_config(PlanetConfig(badlands_amount=2.0))

    @pytest.mark.parametrize("seed", [1.5, 7.0, True])
    def test_non_integer_seed_rejected(self, seed) -> None:
        """Seeds set without field validation must still be integers."""
        config = PlanetConfig().model_copy(update={"seed": seed})
        with pytest.raises(InvalidInvariantError) as exc_info:
            validate_config(config)
        assert exc_info.value.which == "seed is a 32-bit unsigned integer"

    def test_edge_amounts_accepted(self) -> None:
        """Amounts at the ends of [0, 1] are valid."""
        validate_config(
            PlanetConfig(mountains_amount=1.0, hills_amount=0.0, badlands_amount=1.0)
        )


class TestLoadConfig:
    """Tests for TOML configuration loading."""

    def test_load_top_level(self, tmp_path) -> None:
        """Parameters at the top level are loaded."""
        path = tmp_path / "planet.toml"
        path.write_text("seed = 7\nsea_level = 0.1\nshelf_level = -0.2\n")

        config = load_config(path)
        assert config.seed == 7
        assert config.sea_level == 0.1
        assert config.shelf_level == -0.2
        assert config.continent_height_scale == pytest.approx(0.225)

    def test_load_planet_table(self, tmp_path) -> None:
        """Parameters inside a [planet] table are loaded."""
        path = tmp_path / "planet.toml"
        path.write_text("[planet]\nmountains_amount = 0.6\nriver_depth = 0.05\n")

        config = load_config(path)
        assert config.mountains_amount == 0.6
        assert config.river_depth == 0.05
        assert config.hills_amount == 0.24

    def test_load_wrong_type(self, tmp_path) -> None:
        """Non-numeric values are rejected by pydantic."""
        path = tmp_path / "planet.toml"
        path.write_text('sea_level = "deep"\n')

        with pytest.raises(pydantic.ValidationError):
            load_config(path)

    def test_missing_file(self, tmp_path) -> None:
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.toml")
