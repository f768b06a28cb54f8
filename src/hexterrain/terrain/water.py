"""Water, sea, lake and coast classification."""

from collections import deque

import numpy as np
import structlog

from ..graph import HexagonGraph
from ..types import CORNERS_PER_HEX

logger = structlog.get_logger()


def classify_water(graph: HexagonGraph, lake_threshold: float) -> None:
    """Classify centers and corners as sea, lake, coast or land.

    1. A center touching a border corner is sea, and that corner is water.
    2. A center is water if it is sea or at least 6 * lake_threshold of its
       corners are water.
    3. Sea floods across adjacent water centers, so water touching the
       border becomes one sea and enclosed water stays lake.
    4. A center is coast if it has both a sea neighbor and a land neighbor.
    5. Corners take their flags from the centers they touch.

    Reads: corners.is_border, corners.is_water, centers.is_border.
    Writes: corners.is_water/is_sea/is_coast, centers.is_water/is_sea/is_coast.
    """
    centers = graph.centers
    corners = graph.corners

    corner_is_water = corners.is_water
    corner_is_border = corners.is_border
    min_water_corners = CORNERS_PER_HEX * lake_threshold

    sea_queue: deque[int] = deque()
    for index in range(len(centers)):
        ring = centers.corners[index]
        if corner_is_border[ring].any():
            corner_is_water[ring[corner_is_border[ring]]] = True
            centers.is_sea[index] = True
            sea_queue.append(index)
        water_corners = int(np.count_nonzero(corner_is_water[ring]))
        centers.is_water[index] = centers.is_sea[index] or water_corners >= min_water_corners

    is_water = centers.is_water
    is_sea = centers.is_sea
    while sea_queue:
        current = sea_queue.popleft()
        for neighbor in centers.neighbors[current].values():
            if is_water[neighbor] and not is_sea[neighbor]:
                is_sea[neighbor] = True
                sea_queue.append(neighbor)

    is_land = ~is_water
    for index in range(len(centers)):
        neighbor_indices = list(centers.neighbors[index].values())
        near_sea = bool(is_sea[neighbor_indices].any())
        near_land = bool(is_land[neighbor_indices].any())
        centers.is_coast[index] = near_sea and near_land

    for index in range(len(corners)):
        touching = list(corners.touches[index])
        sea_count = int(np.count_nonzero(is_sea[touching]))
        land_count = int(np.count_nonzero(is_land[touching]))
        corners.is_sea[index] = sea_count > 0 and land_count == 0
        corners.is_coast[index] = sea_count > 0 and land_count > 0
        corners.is_water[index] = bool(corner_is_border[index]) or (
            land_count != len(touching) and not corners.is_coast[index]
        )

    logger.info(
        "water_classified",
        sea_centers=int(np.count_nonzero(is_sea)),
        lake_centers=int(np.count_nonzero(centers.is_lake)),
        coast_centers=int(np.count_nonzero(centers.is_coast)),
        land_centers=int(np.count_nonzero(is_land)),
    )
