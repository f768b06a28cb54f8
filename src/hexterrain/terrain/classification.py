"""Biome classification of centers."""

import numpy as np
import structlog

from ..graph import HexagonGraph
from ..hashing import salted_seed
from .biomes import BiomeTable
from .config import NoiseConfig
from .noise import evaluate_noise

logger = structlog.get_logger()


def assign_biomes(
    graph: HexagonGraph,
    seed: int,
    biome_table: BiomeTable,
    noise_config: NoiseConfig,
) -> None:
    """Look up a biome for every center from perturbed moisture and temperature.

    Two independent noise fields (moisture and temperature streams of the
    seed) perturb each center's values. Both perturbations are centered on
    half the maximum of the moisture noise.

    Reads: centers.position, centers.moisture, centers.elevation.
    Writes: centers.biome_id.
    """
    centers = graph.centers
    positions = centers.position

    moisture_noise = evaluate_noise(positions, salted_seed(seed, "moisture"), noise_config)
    temperature_noise = evaluate_noise(
        positions, salted_seed(seed, "temperature"), noise_config
    )
    # TODO: center temperature on its own field once existing maps can be regenerated
    mid_noise = float(moisture_noise.max()) / 2.0

    moisture = centers.moisture + moisture_noise - mid_noise
    temperature = centers.temperature + temperature_noise - mid_noise

    centers.biome_id[:] = biome_table.evaluate_biome_ids(moisture, temperature)

    logger.debug("biomes_assigned", distinct_biomes=int(len(np.unique(centers.biome_id))))
