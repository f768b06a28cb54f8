"""Tests for biome assignment."""

import numpy as np

from hexterrain.graph import HexagonGraph
from hexterrain.terrain.biomes import BiomeTable
from hexterrain.terrain.classification import assign_biomes
from hexterrain.terrain.config import BiomeConfig, BiomeTableConfig, NoiseConfig, SubBiomeConfig
from hexterrain.terrain.moisture import calculate_moisture


class TestAssignBiomes:
    """Tests for assign_biomes."""

    def test_single_biome_table(self, prepared_graph: HexagonGraph) -> None:
        """A table without overrides assigns the main biome everywhere."""
        table = BiomeTable(BiomeConfig(name="Steppe"))
        calculate_moisture(prepared_graph, 0.2, False)
        assign_biomes(prepared_graph, 1, table, NoiseConfig())
        assert (prepared_graph.centers.biome_id == table.main_biome.id).all()

    def test_flat_noise_uses_raw_values(self, prepared_graph: HexagonGraph) -> None:
        """With zero noise amplitude lookups use moisture and temperature directly."""
        table = BiomeTable.from_config(BiomeTableConfig())
        calculate_moisture(prepared_graph, 0.2, False)
        assign_biomes(prepared_graph, 1, table, NoiseConfig(amplitude=0.0))
        centers = prepared_graph.centers
        expected = table.evaluate_biome_ids(centers.moisture, centers.temperature)
        np.testing.assert_array_equal(centers.biome_id, expected)

    def test_ids_in_table(self, prepared_graph: HexagonGraph) -> None:
        """Every assigned id belongs to the table."""
        table = BiomeTable.from_config(BiomeTableConfig())
        calculate_moisture(prepared_graph, 0.2, False)
        assign_biomes(prepared_graph, 9, table, NoiseConfig(amplitude=0.5))
        assert set(prepared_graph.centers.biome_id.tolist()) <= set(table.biomes)

    def test_deterministic(self, prepared_graph: HexagonGraph) -> None:
        """Same seed gives the same assignment."""
        table = BiomeTable(
            BiomeConfig(name="Grassland"),
            [SubBiomeConfig(name="Marsh", moisture_range=(5, 10), temperature_range=(0, 10))],
        )
        calculate_moisture(prepared_graph, 0.2, False)
        assign_biomes(prepared_graph, 3, table, NoiseConfig(amplitude=0.3))
        first = prepared_graph.centers.biome_id.copy()
        assign_biomes(prepared_graph, 3, table, NoiseConfig(amplitude=0.3))
        np.testing.assert_array_equal(prepared_graph.centers.biome_id, first)
