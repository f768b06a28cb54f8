"""Hexagon graph: the dual graph of cell centers and shared corners.

Nodes are addressed by integer index. Topology (positions, adjacency) is
fixed at construction; per-node attributes are numpy arrays that the
generation passes write in place.
"""

import numpy as np
from numpy.typing import NDArray

from .exceptions import InvalidDimensionError
from .types import (
    CORNER_LATTICE_OFFSETS,
    CORNERS_PER_HEX,
    SQRT3,
    HexDirection,
    HexPosition,
    axial_to_offset,
    hex_to_lattice,
)

MIN_DIMENSION = 1


def _read_only(array: NDArray) -> NDArray:
    array.flags.writeable = False
    return array


class Corners:
    """Corner arena: junctions shared by up to three cells.

    Attributes:
        position: (n, 2) world (x, z) positions.
        neighbors: Adjacent corner indices per corner (2 or 3 entries).
        touches: Indices of the centers that share each corner (1 to 3).
        is_border: True for corners on the map edge.
        is_water, is_sea, is_coast: Water classification flags.
        elevation: Elevation, 0 at sea level.
        river: River flow count.
        moisture: Moisture, normalized to [0, 1] after redistribution.
        downslope: Index of the lowest neighbor, or the corner itself at a sink.
    """

    def __init__(
        self,
        position: NDArray[np.float64],
        neighbors: tuple[tuple[int, ...], ...],
        touches: tuple[tuple[int, ...], ...],
    ) -> None:
        count = len(neighbors)
        self.position = _read_only(position)
        self.neighbors = neighbors
        self.touches = touches
        self.is_border = _read_only(
            np.array([len(t) < 3 for t in touches], dtype=bool)
        )

        self.is_water = np.zeros(count, dtype=bool)
        self.is_sea = np.zeros(count, dtype=bool)
        self.is_coast = np.zeros(count, dtype=bool)
        self.elevation = np.zeros(count, dtype=np.float64)
        self.river = np.zeros(count, dtype=np.int64)
        self.moisture = np.zeros(count, dtype=np.float64)
        self.downslope = np.arange(count, dtype=np.int64)

    def __len__(self) -> int:
        return len(self.neighbors)

    def attribute_arrays(self) -> dict[str, NDArray]:
        """Mutable per-corner attributes keyed by name."""
        return {
            "is_water": self.is_water,
            "is_sea": self.is_sea,
            "is_coast": self.is_coast,
            "elevation": self.elevation,
            "river": self.river,
            "moisture": self.moisture,
            "downslope": self.downslope,
        }


class Centers:
    """Center arena: one node per hex cell.

    Attributes:
        hex_position: (n, 2) axial (q, r) coordinates.
        position: (n, 2) world (x, z) positions.
        neighbors: Per center, a mapping of direction to neighbor index.
            Only in-bounds neighbors are present, in direction order.
        corners: (n, 6) corner indices in hex corner order.
        is_border: True for cells touching the map edge.
        is_water, is_sea, is_coast: Water classification flags.
        elevation: Mean corner elevation, levelled per lake.
        moisture: Mean corner moisture.
        biome_id: Biome id from the classifier table.
    """

    def __init__(
        self,
        hex_position: NDArray[np.int64],
        position: NDArray[np.float64],
        neighbors: tuple[dict[HexDirection, int], ...],
        corners: NDArray[np.int64],
        is_border: NDArray[np.bool_],
    ) -> None:
        count = len(neighbors)
        self.hex_position = _read_only(hex_position)
        self.position = _read_only(position)
        self.neighbors = neighbors
        self.corners = _read_only(corners)
        self.is_border = _read_only(is_border)

        self.is_water = np.zeros(count, dtype=bool)
        self.is_sea = np.zeros(count, dtype=bool)
        self.is_coast = np.zeros(count, dtype=bool)
        self.elevation = np.zeros(count, dtype=np.float64)
        self.moisture = np.zeros(count, dtype=np.float64)
        self.biome_id = np.zeros(count, dtype=np.int64)

    def __len__(self) -> int:
        return len(self.neighbors)

    @property
    def is_lake(self) -> NDArray[np.bool_]:
        """Water cells that are not connected to the sea."""
        return self.is_water & ~self.is_sea

    @property
    def temperature(self) -> NDArray[np.float64]:
        """Temperature in [0, 1]; higher ground is colder."""
        return np.clip(1.0 - self.elevation, 0.0, 1.0)

    def attribute_arrays(self) -> dict[str, NDArray]:
        """Mutable per-center attributes keyed by name."""
        return {
            "is_water": self.is_water,
            "is_sea": self.is_sea,
            "is_coast": self.is_coast,
            "elevation": self.elevation,
            "moisture": self.moisture,
            "biome_id": self.biome_id,
        }


class HexagonGraph:
    """Centers and corners of a width x height hex map.

    Center index is x + y * width for array position (x, y). Corner indices
    follow first appearance while scanning centers in index order and each
    center's corners in corner order.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < MIN_DIMENSION or height < MIN_DIMENSION:
            raise InvalidDimensionError(
                f"Map size must be at least {MIN_DIMENSION}x{MIN_DIMENSION}, "
                f"got {width}x{height}"
            )

        self.width = width
        self.height = height
        self.centers, self.corners = self._build()

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def center_index(self, x: int, y: int) -> int | None:
        """Index of the center at array position (x, y), or None if outside."""
        if 0 <= x < self.width and 0 <= y < self.height:
            return x + y * self.width
        return None

    def center_at(self, position: HexPosition) -> int | None:
        """Index of the center at an axial position, or None if outside."""
        x, y = axial_to_offset(position.q, position.r)
        return self.center_index(x, y)

    def freeze(self) -> None:
        """Make every attribute array read-only."""
        for array in self.corners.attribute_arrays().values():
            array.flags.writeable = False
        for array in self.centers.attribute_arrays().values():
            array.flags.writeable = False

    def _build(self) -> tuple[Centers, Corners]:
        width, height = self.width, self.height
        center_count = width * height

        positions: list[HexPosition] = []
        hex_position = np.empty((center_count, 2), dtype=np.int64)
        center_lattice = np.empty((center_count, 2), dtype=np.int64)
        for y in range(height):
            for x in range(width):
                index = x + y * width
                position = HexPosition.from_array_xy(x, y)
                positions.append(position)
                hex_position[index] = (position.q, position.r)
                center_lattice[index] = hex_to_lattice(position.q, position.r)

        center_neighbors: list[dict[HexDirection, int]] = []
        for index in range(center_count):
            origin = positions[index]
            neighbors: dict[HexDirection, int] = {}
            for direction in HexDirection:
                neighbor_index = self.center_at(origin.neighbor(direction))
                if neighbor_index is not None:
                    neighbors[direction] = neighbor_index
            center_neighbors.append(neighbors)

        # Corners are shared by exact lattice position
        lattice_lookup: dict[tuple[int, int], int] = {}
        corner_lattice: list[tuple[int, int]] = []
        corner_touches: list[list[int]] = []
        center_corners = np.empty((center_count, CORNERS_PER_HEX), dtype=np.int64)

        for index in range(center_count):
            cx, cz = int(center_lattice[index, 0]), int(center_lattice[index, 1])
            for slot, (dx, dz) in enumerate(CORNER_LATTICE_OFFSETS):
                key = (cx + dx, cz + dz)
                corner_index = lattice_lookup.get(key)
                if corner_index is None:
                    corner_index = len(corner_lattice)
                    lattice_lookup[key] = corner_index
                    corner_lattice.append(key)
                    corner_touches.append([])
                center_corners[index, slot] = corner_index
                corner_touches[corner_index].append(index)

        corner_neighbors: list[list[int]] = [[] for _ in corner_lattice]
        for index in range(center_count):
            ring = center_corners[index]
            for slot in range(CORNERS_PER_HEX):
                a = int(ring[slot])
                b = int(ring[(slot + 1) % CORNERS_PER_HEX])
                if b not in corner_neighbors[a]:
                    corner_neighbors[a].append(b)
                if a not in corner_neighbors[b]:
                    corner_neighbors[b].append(a)

        lattice_scale = np.array([SQRT3 / 2.0, 0.5])
        corners = Corners(
            position=np.array(corner_lattice, dtype=np.float64) * lattice_scale,
            neighbors=tuple(tuple(n) for n in corner_neighbors),
            touches=tuple(tuple(t) for t in corner_touches),
        )

        center_is_border = corners.is_border[center_corners].any(axis=1)
        centers = Centers(
            hex_position=hex_position,
            position=center_lattice.astype(np.float64) * lattice_scale,
            neighbors=tuple(center_neighbors),
            corners=center_corners,
            is_border=center_is_border,
        )

        return centers, corners
