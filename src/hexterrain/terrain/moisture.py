"""Moisture: seeding from fresh water, decay flood-fill, redistribution."""

from collections import deque

import numpy as np
import structlog
from numpy.typing import NDArray

from ..graph import HexagonGraph

logger = structlog.get_logger()

# Fraction of moisture kept per corner-to-corner step
MOISTURE_DECAY = 0.9
# Cap on the moisture a river corner can start with
MAX_RIVER_MOISTURE = 3.0


def seed_moisture(graph: HexagonGraph, river_moisture_factor: float) -> NDArray[np.float64]:
    """Initial moisture: fresh water and rivers are wet, everything else dry.

    River corners get min(factor * river, MAX_RIVER_MOISTURE), other
    non-sea water corners get 1, all remaining corners 0.
    """
    corners = graph.corners
    river = corners.river
    fresh = ~corners.is_sea & (corners.is_water | (river > 0))

    moisture = np.zeros(len(corners), dtype=np.float64)
    river_moisture = np.minimum(river_moisture_factor * river, MAX_RIVER_MOISTURE)
    moisture[fresh] = np.where(river[fresh] > 0, river_moisture[fresh], 1.0)
    return moisture


def propagate_moisture(
    neighbors: tuple[tuple[int, ...], ...],
    moisture: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Spread moisture outward, decaying by MOISTURE_DECAY per step.

    Multi-source breadth-first relaxation from every corner with positive
    moisture. A neighbor is raised only if the decayed value exceeds what
    it already has, so no value ever decreases.

    Args:
        neighbors: Corner adjacency.
        moisture: Initial moisture per corner.

    Returns:
        New moisture array.
    """
    values = moisture.tolist()
    queue: deque[int] = deque(int(i) for i in np.flatnonzero(moisture > 0))

    while queue:
        current = queue.popleft()
        decayed = values[current] * MOISTURE_DECAY
        for neighbor in neighbors[current]:
            if decayed > values[neighbor]:
                values[neighbor] = decayed
                queue.append(neighbor)

    return np.array(values, dtype=np.float64)


def redistribute_moisture(graph: HexagonGraph, sea_provides_moisture: bool) -> None:
    """Spread corner moisture linearly over [0, 1] by rank.

    Sea corners are excluded, and so are coast corners when the sea
    provides moisture. With a single eligible corner it gets 1.0.
    """
    corners = graph.corners
    eligible = ~corners.is_sea
    if sea_provides_moisture:
        eligible &= ~corners.is_coast

    indices = np.flatnonzero(eligible)
    count = len(indices)
    if count == 0:
        logger.debug("moisture_redistribution_skipped", reason="no_eligible_corners")
        return
    if count == 1:
        corners.moisture[indices] = 1.0
        return

    order = indices[np.argsort(corners.moisture[indices], kind="stable")]
    corners.moisture[order] = np.arange(count, dtype=np.float64) / (count - 1)


def calculate_moisture(
    graph: HexagonGraph,
    river_moisture_factor: float,
    sea_provides_moisture: bool,
) -> None:
    """Compute corner and center moisture.

    Reads: corners.is_sea/is_water/is_coast/river.
    Writes: corners.moisture, centers.moisture.
    """
    corners = graph.corners
    centers = graph.centers

    initial = seed_moisture(graph, river_moisture_factor)
    corners.moisture[:] = propagate_moisture(corners.neighbors, initial)

    if sea_provides_moisture:
        corners.moisture[corners.is_sea | corners.is_coast] = 1.0

    redistribute_moisture(graph, sea_provides_moisture)

    centers.moisture[:] = corners.moisture[centers.corners].mean(axis=1)

    logger.debug(
        "moisture_calculated",
        wet_sources=int(np.count_nonzero(initial)),
        mean_center_moisture=round(float(centers.moisture.mean()), 4),
    )
