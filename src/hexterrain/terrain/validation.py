"""Post-generation validation of terrain invariants."""

import numpy as np
import structlog

from ..graph import HexagonGraph
from .elevation import find_lakes
from .generator import TerrainData
from .island import LAND_RATIO_TOLERANCE

logger = structlog.get_logger()

# Land ratio drift that is worth a warning
LAND_RATIO_WARNING = 0.08


class ValidationResult:
    """Result of terrain validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_terrain(data: TerrainData) -> ValidationResult:
    """Validate generated terrain against its invariants.

    Args:
        data: Generated terrain.

    Returns:
        ValidationResult with any errors/warnings.
    """
    result = ValidationResult()
    graph = data.graph

    _check_symmetry(graph, result)
    _check_elevation(graph, result)
    _check_moisture(graph, result)
    _check_downslope(graph, result)
    _check_lakes(graph, result)
    _check_biomes(data, result)
    _check_land_ratio(data, result)

    if result.passed:
        logger.info("terrain_validation_passed", warnings=len(result.warnings))
    else:
        logger.warning("terrain_validation_failed", errors=len(result.errors))
        for error in result.errors:
            logger.error("terrain_validation_error", detail=error)

    for warning in result.warnings:
        logger.warning("terrain_validation_warning", detail=warning)

    return result


def _check_symmetry(graph: HexagonGraph, result: ValidationResult) -> None:
    """Check that every neighbor link is mirrored."""
    corners = graph.corners
    broken = 0
    for index, neighbors in enumerate(corners.neighbors):
        for neighbor in neighbors:
            if index not in corners.neighbors[neighbor]:
                broken += 1
    if broken:
        result.add_error(f"{broken} one-way corner links")

    centers = graph.centers
    broken = 0
    for index, neighbors in enumerate(centers.neighbors):
        for neighbor in neighbors.values():
            if index not in centers.neighbors[neighbor].values():
                broken += 1
    if broken:
        result.add_error(f"{broken} one-way center links")


def _check_elevation(graph: HexagonGraph, result: ValidationResult) -> None:
    """Check corner elevations are in [0, 1] and zero at sea and coast."""
    corners = graph.corners
    elevation = corners.elevation
    out_of_range = int(np.count_nonzero((elevation < 0.0) | (elevation > 1.0)))
    if out_of_range:
        result.add_error(f"{out_of_range} corners with elevation outside [0, 1]")

    shore = corners.is_sea | corners.is_coast
    raised = int(np.count_nonzero(elevation[shore] != 0.0))
    if raised:
        result.add_error(f"{raised} sea/coast corners above sea level")


def _check_moisture(graph: HexagonGraph, result: ValidationResult) -> None:
    """Check land corner moisture is in [0, 1]."""
    corners = graph.corners
    land = ~corners.is_sea
    moisture = corners.moisture[land]
    out_of_range = int(np.count_nonzero((moisture < 0.0) | (moisture > 1.0)))
    if out_of_range:
        result.add_error(f"{out_of_range} land corners with moisture outside [0, 1]")


def _check_downslope(graph: HexagonGraph, result: ValidationResult) -> None:
    """Check every downslope chain reaches a sink within N steps."""
    downslope = graph.corners.downslope.tolist()
    limit = len(downslope)
    cycles = 0
    for start in range(limit):
        current = start
        for _ in range(limit):
            following = downslope[current]
            if following == current:
                break
            current = following
        else:
            cycles += 1
    if cycles:
        result.add_error(f"{cycles} corners never reach a downslope sink")


def _check_lakes(graph: HexagonGraph, result: ValidationResult) -> None:
    """Check each lake is level."""
    elevation = graph.centers.elevation
    uneven = sum(1 for members in find_lakes(graph) if np.ptp(elevation[members]) != 0.0)
    if uneven:
        result.add_error(f"{uneven} lakes are not level")


def _check_biomes(data: TerrainData, result: ValidationResult) -> None:
    """Check every center's biome exists in the table."""
    known = set(data.biome_table.biomes)
    unknown = sum(1 for biome_id in data.graph.centers.biome_id.tolist() if biome_id not in known)
    if unknown:
        result.add_error(f"{unknown} centers reference unknown biomes")


def _check_land_ratio(data: TerrainData, result: ValidationResult) -> None:
    """Check the island calibration landed near its target."""
    island = data.island
    drift = abs(island.land_ratio - island.target_land_ratio)
    if not island.converged and drift > LAND_RATIO_TOLERANCE:
        result.add_warning(
            f"Sea level search stopped after {island.iterations} iterations "
            f"at land ratio {island.land_ratio:.1%} (target {island.target_land_ratio:.1%})"
        )
    elif drift > LAND_RATIO_WARNING:
        result.add_warning(
            f"Land ratio {island.land_ratio:.1%} differs from target "
            f"{island.target_land_ratio:.1%}"
        )
