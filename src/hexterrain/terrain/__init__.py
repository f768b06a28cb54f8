"""Procedural terrain generation package.

This package runs the generation passes over a hexagon graph: island shape,
elevation, water classification, rivers, moisture and biomes.
"""

from .biomes import Biome, BiomeTable
from .config import (
    BiomeConfig,
    BiomeTableConfig,
    FalloffConfig,
    NoiseConfig,
    SubBiomeConfig,
    TerrainSettings,
)
from .generator import TerrainData, generate_terrain
from .island import IslandShapeReport, evaluate_falloff
from .noise import evaluate_noise
from .validation import ValidationResult, validate_terrain

__all__ = [
    "Biome",
    "BiomeConfig",
    "BiomeTable",
    "BiomeTableConfig",
    "FalloffConfig",
    "IslandShapeReport",
    "NoiseConfig",
    "SubBiomeConfig",
    "TerrainData",
    "TerrainSettings",
    "ValidationResult",
    "evaluate_falloff",
    "evaluate_noise",
    "generate_terrain",
    "validate_terrain",
]
