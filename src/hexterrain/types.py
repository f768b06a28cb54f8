"""Core hex grid types and coordinate conversions.

Cells use a pointy-top layout in odd-row offset order: array position
(x, y) maps to axial (q, r) with r = y. World space is the (x, z) plane
with +z pointing north and a hex size (center to corner) of 1.
"""

import math
from enum import IntEnum

from pydantic import BaseModel

SQRT3 = math.sqrt(3.0)


class HexDirection(IntEnum):
    """Six neighbor directions, counter-clockwise from east."""

    EAST = 0
    NORTHEAST = 1
    NORTHWEST = 2
    WEST = 3
    SOUTHWEST = 4
    SOUTHEAST = 5


# Axial (dq, dr) deltas
DIRECTION_DELTAS: dict[HexDirection, tuple[int, int]] = {
    HexDirection.EAST: (1, 0),
    HexDirection.NORTHEAST: (0, 1),
    HexDirection.NORTHWEST: (-1, 1),
    HexDirection.WEST: (-1, 0),
    HexDirection.SOUTHWEST: (0, -1),
    HexDirection.SOUTHEAST: (1, -1),
}

# Corner offsets on the integer lattice (X, Z) where one X unit is sqrt(3)/2
# and one Z unit is 1/2 in world space. Order follows the corner angles
# 30, 90, 150, 210, 270, 330 degrees.
CORNER_LATTICE_OFFSETS: tuple[tuple[int, int], ...] = (
    (1, 1),
    (0, 2),
    (-1, 1),
    (-1, -1),
    (0, -2),
    (1, -1),
)

CORNERS_PER_HEX = len(CORNER_LATTICE_OFFSETS)


class HexPosition(BaseModel, frozen=True):
    """Immutable axial hex coordinate."""

    q: int
    r: int

    def neighbor(self, direction: HexDirection) -> "HexPosition":
        """Return the adjacent position in the given direction."""
        dq, dr = DIRECTION_DELTAS[direction]
        return HexPosition(q=self.q + dq, r=self.r + dr)

    @classmethod
    def from_array_xy(cls, x: int, y: int) -> "HexPosition":
        q, r = offset_to_axial(x, y)
        return cls(q=q, r=r)

    def __hash__(self) -> int:
        return hash((self.q, self.r))


def offset_to_axial(x: int, y: int) -> tuple[int, int]:
    """Convert odd-row offset (x, y) to axial (q, r)."""
    return x - (y - (y & 1)) // 2, y


def axial_to_offset(q: int, r: int) -> tuple[int, int]:
    """Convert axial (q, r) to odd-row offset (x, y)."""
    return q + (r - (r & 1)) // 2, r


def hex_to_lattice(q: int, r: int) -> tuple[int, int]:
    """Integer lattice coordinates of a hex center."""
    return 2 * q + r, 3 * r


def hex_to_world(q: int, r: int) -> tuple[float, float]:
    """World (x, z) position of a hex center."""
    return SQRT3 * (q + r / 2.0), 1.5 * r


def map_bounds(width: int, height: int) -> tuple[float, float, float, float]:
    """World-space extent (min_x, min_z, max_x, max_z) covered by a map.

    Includes the corners of the outermost cells.
    """
    half_width = SQRT3 / 2.0
    odd_row_shift = half_width if height > 1 else 0.0
    min_x = -half_width
    max_x = SQRT3 * (width - 1) + odd_row_shift + half_width
    min_z = -1.0
    max_z = 1.5 * (height - 1) + 1.0
    return min_x, min_z, max_x, max_z
