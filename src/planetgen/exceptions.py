"""Custom exceptions for planet generation."""


class PlanetError(Exception):
    """Base exception for planet generation errors."""

    pass


class ConfigError(PlanetError):
    """Raised when a planet configuration cannot be used."""

    pass


class InvalidInvariantError(ConfigError):
    """Raised when a configuration violates one of its invariants."""

    def __init__(self, which: str, message: str | None = None):
        self.which = which
        super().__init__(message or f"Invalid planet configuration: {which}")
