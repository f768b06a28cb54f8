"""Hydrology: downslope directions and river tracing over corners."""

import numpy as np
import structlog

from ..graph import HexagonGraph

logger = structlog.get_logger()


def calculate_downslope(graph: HexagonGraph) -> None:
    """Point each corner at its lowest neighbor.

    The corner itself is the first candidate and a neighbor replaces the
    current choice only when strictly lower, so among equally low neighbors
    the first in neighbor order wins, and a corner with no lower neighbor
    is a sink (downslope == itself). Every downslope step therefore strictly
    decreases elevation and chains always end at a sink.

    Reads: corners.elevation. Writes: corners.downslope.
    """
    corners = graph.corners
    elevation = corners.elevation.tolist()
    downslope = corners.downslope

    for index, neighbors in enumerate(corners.neighbors):
        lowest = index
        lowest_elevation = elevation[index]
        for neighbor in neighbors:
            if elevation[neighbor] < lowest_elevation:
                lowest = neighbor
                lowest_elevation = elevation[neighbor]
        downslope[index] = lowest


def river_spawn_tries(width: int, height: int, multiplier: float) -> int:
    """Number of river spawn attempts for a map size."""
    return int((width + height) // 2 * multiplier)


def trace_river(graph: HexagonGraph, source: int) -> list[int]:
    """Follow downslope from a source corner.

    The walk ends at a coast corner or a sink, and stops before stepping
    from one water corner directly into another so rivers never cross
    lakes. It is also capped at the corner count.

    Args:
        graph: Terrain graph with downslope computed.
        source: Starting corner index.

    Returns:
        Visited corner indices, starting with the source.
    """
    corners = graph.corners
    is_coast = corners.is_coast
    is_water = corners.is_water
    downslope = corners.downslope

    path = [source]
    current = source
    for _ in range(len(corners)):
        following = int(downslope[current])
        if is_coast[current] or following == current:
            break
        if is_water[current] and is_water[following]:
            break
        path.append(following)
        current = following

    return path


def calculate_rivers(
    graph: HexagonGraph,
    seed: int,
    spawn_tries: int,
    spawn_range: tuple[float, float],
) -> int:
    """Trace rivers from random corners and accumulate flow.

    Each attempt picks a uniformly random corner and skips it if it is sea
    or its elevation is outside spawn_range. Otherwise every step of its
    downslope walk adds one to the river count of both endpoints.

    Reads: corners.is_sea/is_coast/is_water/elevation/downslope.
    Writes: corners.river.

    Args:
        graph: Terrain graph.
        seed: River seed.
        spawn_tries: Number of spawn attempts.
        spawn_range: Inclusive (min, max) spawn elevation.

    Returns:
        Number of rivers that carved at least one step.
    """
    corners = graph.corners
    rng = np.random.default_rng(seed & 0xFFFFFFFF)
    low, high = spawn_range
    river = corners.river
    traced = 0

    for _ in range(spawn_tries):
        source = int(rng.integers(len(corners)))
        elevation = corners.elevation[source]
        if corners.is_sea[source] or elevation < low or elevation > high:
            continue

        path = trace_river(graph, source)
        for a, b in zip(path, path[1:]):
            river[a] += 1
            river[b] += 1
        if len(path) > 1:
            traced += 1

    logger.info(
        "rivers_traced",
        spawn_tries=spawn_tries,
        rivers=traced,
        river_corners=int(np.count_nonzero(river)),
    )
    return traced
