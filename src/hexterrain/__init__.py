"""Deterministic procedural terrain generation over hexagon graphs."""

from .config import find_settings, list_settings, load_settings, parse_settings
from .exceptions import ConfigurationError, InvalidDimensionError, TerrainError
from .graph import MIN_DIMENSION, Centers, Corners, HexagonGraph
from .hashing import salted_seed, sdbm_lower
from .types import (
    DIRECTION_DELTAS,
    HexDirection,
    HexPosition,
    axial_to_offset,
    hex_to_world,
    map_bounds,
    offset_to_axial,
)

__all__ = [
    # Types
    "HexDirection",
    "HexPosition",
    "DIRECTION_DELTAS",
    "axial_to_offset",
    "offset_to_axial",
    "hex_to_world",
    "map_bounds",
    # Graph
    "HexagonGraph",
    "Centers",
    "Corners",
    "MIN_DIMENSION",
    # Hashing
    "salted_seed",
    "sdbm_lower",
    # Settings
    "find_settings",
    "list_settings",
    "load_settings",
    "parse_settings",
    # Exceptions
    "TerrainError",
    "ConfigurationError",
    "InvalidDimensionError",
]
