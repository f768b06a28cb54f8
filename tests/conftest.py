"""Shared test fixtures for terrain tests."""

import pytest

from hexterrain.graph import HexagonGraph
from hexterrain.hashing import salted_seed
from hexterrain.terrain.config import TerrainSettings
from hexterrain.terrain.elevation import calculate_elevation, redistribute_elevation
from hexterrain.terrain.generator import TerrainData, generate_terrain
from hexterrain.terrain.hydrology import calculate_downslope
from hexterrain.terrain.island import calculate_island_shape
from hexterrain.terrain.water import classify_water


@pytest.fixture
def small_graph() -> HexagonGraph:
    """3x3 graph; center 4 is the only interior cell."""
    return HexagonGraph(3, 3)


@pytest.fixture
def settings() -> TerrainSettings:
    """Default settings on a 16x16 map."""
    return TerrainSettings(width=16, height=16)


@pytest.fixture
def prepared_graph(settings: TerrainSettings) -> HexagonGraph:
    """Mutable graph with the passes up to downslope already applied."""
    graph = HexagonGraph(settings.width, settings.height)
    seed = salted_seed(42, "terrain")
    calculate_island_shape(
        graph, seed, settings.land_ratio, settings.shape_noise, settings.shape_falloff
    )
    calculate_elevation(graph)
    classify_water(graph, settings.lake_threshold)
    redistribute_elevation(graph, settings.peak_multiplier)
    calculate_downslope(graph)
    return graph


@pytest.fixture(scope="module")
def terrain() -> TerrainData:
    """Fully generated (read-only) terrain, shared within a module."""
    return generate_terrain(42, TerrainSettings(width=24, height=20))
