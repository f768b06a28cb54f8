"""Main terrain generation orchestration."""

from collections import Counter
from dataclasses import dataclass

import numpy as np
import structlog

from ..graph import Centers, Corners, HexagonGraph
from ..hashing import salted_seed
from .biomes import Biome, BiomeTable
from .classification import assign_biomes
from .config import TerrainSettings
from .elevation import calculate_elevation, redistribute_elevation
from .hydrology import calculate_downslope, calculate_rivers, river_spawn_tries
from .island import IslandShapeReport, calculate_island_shape
from .moisture import calculate_moisture
from .water import classify_water

logger = structlog.get_logger()


@dataclass(frozen=True)
class TerrainData:
    """Finished terrain: the classified graph and its biome table.

    The graph's attribute arrays are read-only once generation completes.
    """

    graph: HexagonGraph
    biome_table: BiomeTable
    island: IslandShapeReport
    settings: TerrainSettings
    seed: int
    river_count: int

    @property
    def size(self) -> tuple[int, int]:
        return self.graph.size

    @property
    def centers(self) -> Centers:
        return self.graph.centers

    @property
    def corners(self) -> Corners:
        return self.graph.corners

    def biome_of(self, center_index: int) -> Biome:
        """Biome assigned to a center."""
        return self.biome_table.get(int(self.graph.centers.biome_id[center_index]))

    def biome_counts(self) -> dict[str, int]:
        """Number of land centers per biome name, most common first."""
        centers = self.graph.centers
        land_ids = centers.biome_id[~centers.is_water].tolist()
        counts = Counter(self.biome_table.get(biome_id).name for biome_id in land_ids)
        return dict(counts.most_common())


def generate_terrain(seed: int, settings: TerrainSettings) -> TerrainData:
    """Generate complete terrain from a seed and settings.

    Passes run strictly in order, each reading what the previous ones wrote:
    island shape, elevation, water classification, elevation redistribution,
    downslope, rivers, moisture, biomes.

    Args:
        seed: Generation seed.
        settings: Terrain generation settings.

    Returns:
        TerrainData with a fully populated, read-only graph.

    Raises:
        ConfigurationError: If the map size or biome table is invalid.
    """
    terrain_seed = salted_seed(seed, "terrain")
    width, height = settings.width, settings.height

    logger.info(
        "terrain_generation_started",
        width=width,
        height=height,
        seed=seed,
    )

    # Validate everything that can fail before touching the graph
    biome_table = BiomeTable.from_config(settings.biome_table)
    graph = HexagonGraph(width, height)

    logger.debug("stage", name="island_shape")
    island = calculate_island_shape(
        graph,
        terrain_seed,
        settings.land_ratio,
        settings.shape_noise,
        settings.shape_falloff,
    )

    logger.debug("stage", name="elevation")
    calculate_elevation(graph)

    logger.debug("stage", name="water")
    classify_water(graph, settings.lake_threshold)

    logger.debug("stage", name="redistribute_elevation")
    redistribute_elevation(graph, settings.peak_multiplier)

    logger.debug("stage", name="downslope")
    calculate_downslope(graph)

    logger.debug("stage", name="rivers")
    spawn_tries = river_spawn_tries(width, height, settings.river_spawn_multiplier)
    river_count = calculate_rivers(
        graph,
        terrain_seed + settings.river_seed,
        spawn_tries,
        settings.river_spawn_range,
    )

    logger.debug("stage", name="moisture")
    calculate_moisture(graph, settings.river_moisture_factor, settings.sea_provides_moisture)

    logger.debug("stage", name="biomes")
    assign_biomes(graph, terrain_seed, biome_table, settings.biome_noise)

    graph.freeze()

    data = TerrainData(
        graph=graph,
        biome_table=biome_table,
        island=island,
        settings=settings,
        seed=seed,
        river_count=river_count,
    )
    _log_terrain_stats(data)
    return data


def _log_terrain_stats(data: TerrainData) -> None:
    """Log terrain generation statistics."""
    centers = data.graph.centers
    total = len(centers)
    sea = int(np.count_nonzero(centers.is_sea))
    lake = int(np.count_nonzero(centers.is_lake))
    coast = int(np.count_nonzero(centers.is_coast))

    logger.info(
        "terrain_generation_finished",
        centers=total,
        corners=len(data.graph.corners),
        sea=sea,
        lake=lake,
        coast=coast,
        land=total - sea - lake,
        rivers=data.river_count,
        biomes=data.biome_counts(),
    )
