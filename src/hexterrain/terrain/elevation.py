"""Elevation: border flood-fill, redistribution and lake levelling."""

import math
from collections import deque

import numpy as np
import structlog
from numpy.typing import NDArray
from scipy import sparse
from scipy.sparse import csgraph

from ..graph import HexagonGraph

logger = structlog.get_logger()

# Cost of any corner-to-corner step
STEP_COST = 0.01
# Extra cost of a step between two land corners
LAND_STEP_COST = 1.0


def calculate_elevation(graph: HexagonGraph) -> None:
    """Assign each corner its cheapest path cost from the map border.

    Multi-source breadth-first relaxation from every border corner. Steps
    cost STEP_COST, plus LAND_STEP_COST when both ends are land, so the
    interior of large land masses rises fastest.

    Reads: corners.is_border, corners.is_water. Writes: corners.elevation.
    """
    corners = graph.corners
    neighbors = corners.neighbors
    is_water = corners.is_water.tolist()
    elevation = [0.0 if border else math.inf for border in corners.is_border.tolist()]

    queue: deque[int] = deque(int(i) for i in np.flatnonzero(corners.is_border))

    while queue:
        current = queue.popleft()
        current_elevation = elevation[current]
        current_is_land = not is_water[current]
        for neighbor in neighbors[current]:
            candidate = current_elevation + STEP_COST
            if current_is_land and not is_water[neighbor]:
                candidate += LAND_STEP_COST
            if candidate < elevation[neighbor]:
                elevation[neighbor] = candidate
                queue.append(neighbor)

    corners.elevation[:] = elevation


def redistribute_elevation(graph: HexagonGraph, peak_multiplier: float) -> None:
    """Remap land elevations onto a concave curve and level the lakes.

    Non-sea, non-coast corners are ranked by elevation and rank i of N maps
    to min(1, sqrt(s) - sqrt(s * (1 - i / N))) with s = peak_multiplier.
    Sea and coast corners drop to 0. Center elevation is the mean of its
    corners, then each connected lake is set to its lowest center.

    Reads: corners.elevation, corners.is_sea, corners.is_coast,
    centers.is_water, centers.is_sea.
    Writes: corners.elevation, centers.elevation.
    """
    corners = graph.corners
    centers = graph.centers

    land = np.flatnonzero(~corners.is_sea & ~corners.is_coast)
    if len(land) > 0:
        order = land[np.argsort(corners.elevation[land], kind="stable")]
        ranks = np.arange(len(order), dtype=np.float64) / len(order)
        root = math.sqrt(peak_multiplier)
        corners.elevation[order] = np.minimum(
            root - np.sqrt(peak_multiplier * (1.0 - ranks)), 1.0
        )
    else:
        logger.debug("elevation_redistribution_skipped", reason="no_land_corners")

    corners.elevation[corners.is_sea | corners.is_coast] = 0.0

    centers.elevation[:] = corners.elevation[centers.corners].mean(axis=1)
    flatten_lakes(graph)


def find_lakes(graph: HexagonGraph) -> list[NDArray[np.int64]]:
    """Group lake centers into connected components.

    Returns:
        One array of center indices per lake, ordered by lowest member.
    """
    centers = graph.centers
    is_lake = centers.is_lake
    lake_indices = np.flatnonzero(is_lake)
    if len(lake_indices) == 0:
        return []

    rows: list[int] = []
    cols: list[int] = []
    for index in lake_indices.tolist():
        for neighbor in centers.neighbors[index].values():
            if is_lake[neighbor]:
                rows.append(index)
                cols.append(neighbor)

    count = len(centers)
    adjacency = sparse.coo_matrix(
        (np.ones(len(rows), dtype=np.int8), (rows, cols)),
        shape=(count, count),
    ).tocsr()
    _, labels = csgraph.connected_components(adjacency, directed=False)

    groups: dict[int, list[int]] = {}
    for index in lake_indices.tolist():
        groups.setdefault(int(labels[index]), []).append(index)

    return [np.array(members, dtype=np.int64) for members in groups.values()]


def flatten_lakes(graph: HexagonGraph) -> int:
    """Level every lake to the minimum elevation among its centers.

    Returns:
        Number of lakes found.
    """
    elevation = graph.centers.elevation
    lakes = find_lakes(graph)
    for members in lakes:
        elevation[members] = elevation[members].min()

    logger.debug("lakes_flattened", lake_count=len(lakes))
    return len(lakes)
