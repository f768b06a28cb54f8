"""Custom exceptions for terrain generation."""


class TerrainError(Exception):
    """Base exception for terrain errors."""

    pass


class ConfigurationError(TerrainError):
    """Raised when generation settings are invalid."""

    pass


class InvalidDimensionError(ConfigurationError):
    """Raised when a map dimension is below the supported minimum."""

    pass
