"""Island shaping: edge falloff and sea level calibration."""

from dataclasses import dataclass

import numpy as np
import structlog
from numpy.typing import ArrayLike, NDArray

from ..graph import HexagonGraph
from ..hashing import salted_seed
from ..types import map_bounds
from .config import FalloffConfig, NoiseConfig
from .noise import evaluate_noise, smoothstep

logger = structlog.get_logger()

MAX_ITERATIONS = 10
LAND_RATIO_TOLERANCE = 0.01


@dataclass(frozen=True)
class IslandShapeReport:
    """Outcome of the sea level search."""

    sea_level: float
    land_ratio: float
    target_land_ratio: float
    iterations: int
    converged: bool


def evaluate_falloff(
    width: int,
    height: int,
    points: ArrayLike,
    config: FalloffConfig,
) -> NDArray[np.float64]:
    """Compute an edge falloff multiplier for each point.

    Points are normalized into [-1, 1] over the map's world extent. The
    multiplier is 1 near the center and drops smoothly to 0 at the edge.

    Args:
        width: Map width in cells.
        height: Map height in cells.
        points: (n, 2) world (x, z) positions.
        config: Falloff parameters.

    Returns:
        (n,) array of values in [0, 1].
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    min_x, min_z, max_x, max_z = map_bounds(width, height)

    center = np.array([(min_x + max_x) / 2.0, (min_z + max_z) / 2.0])
    half_extent = np.maximum(np.array([(max_x - min_x) / 2.0, (max_z - min_z) / 2.0]), 1e-9)
    normalized = np.abs((pts - center) / half_extent)

    if config.shape == "radial":
        dist = np.minimum(np.sqrt(np.sum(normalized**2, axis=1)), 1.0)
    else:
        dist = np.max(normalized, axis=1)

    return 1.0 - smoothstep(config.falloff_start, config.falloff_end, dist)


def calculate_island_shape(
    graph: HexagonGraph,
    seed: int,
    target_land_ratio: float,
    noise_config: NoiseConfig,
    falloff_config: FalloffConfig,
) -> IslandShapeReport:
    """Mark corners as water so the land fraction approaches a target.

    Binary-searches a sea level in [0, 1] against noise * falloff sampled at
    every corner. Stops when the land fraction is within tolerance or after
    MAX_ITERATIONS; the last tested sea level is kept either way.

    Reads: corners.position. Writes: corners.is_water.

    Args:
        graph: Terrain graph.
        seed: Terrain seed.
        target_land_ratio: Desired fraction of land corners.
        noise_config: Island shape noise.
        falloff_config: Island shape falloff.

    Returns:
        IslandShapeReport describing the final sea level.
    """
    corners = graph.corners
    positions = corners.position
    noise = evaluate_noise(positions, salted_seed(seed, "elevation"), noise_config)
    falloff = evaluate_falloff(graph.width, graph.height, positions, falloff_config)
    shape = noise * falloff

    low, high = 0.0, 1.0
    sea_level = 0.5
    tested_level = sea_level
    land_ratio = 0.0
    iterations = 0
    converged = False

    while iterations < MAX_ITERATIONS:
        iterations += 1
        tested_level = sea_level
        np.less(shape, sea_level, out=corners.is_water)
        land_ratio = 1.0 - np.count_nonzero(corners.is_water) / len(corners)

        if abs(land_ratio - target_land_ratio) <= LAND_RATIO_TOLERANCE:
            converged = True
            break
        elif land_ratio < target_land_ratio:
            high = sea_level
            sea_level = (sea_level + low) / 2.0
        else:
            low = sea_level
            sea_level = (sea_level + high) / 2.0

    report = IslandShapeReport(
        sea_level=tested_level,
        land_ratio=land_ratio,
        target_land_ratio=target_land_ratio,
        iterations=iterations,
        converged=converged,
    )
    logger.info(
        "island_shape_calibrated",
        sea_level=round(tested_level, 4),
        land_ratio=round(land_ratio, 4),
        target=target_land_ratio,
        iterations=iterations,
        converged=converged,
    )
    return report
