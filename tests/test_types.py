"""Tests for hex coordinate types."""

import math

import pytest
from pydantic import ValidationError

from hexterrain.types import (
    CORNER_LATTICE_OFFSETS,
    DIRECTION_DELTAS,
    SQRT3,
    HexDirection,
    HexPosition,
    axial_to_offset,
    hex_to_lattice,
    hex_to_world,
    map_bounds,
    offset_to_axial,
)


class TestOffsetConversion:
    """Tests for odd-row offset <-> axial conversion."""

    @pytest.mark.parametrize(
        "xy,qr",
        [
            ((0, 0), (0, 0)),
            ((3, 0), (3, 0)),
            ((0, 1), (0, 1)),
            ((0, 2), (-1, 2)),
            ((2, 3), (1, 3)),
            ((4, 4), (2, 4)),
        ],
    )
    def test_offset_to_axial(self, xy: tuple[int, int], qr: tuple[int, int]) -> None:
        """Known offset positions map to expected axial coordinates."""
        assert offset_to_axial(*xy) == qr

    def test_round_trip(self) -> None:
        """axial_to_offset inverts offset_to_axial."""
        for y in range(6):
            for x in range(6):
                assert axial_to_offset(*offset_to_axial(x, y)) == (x, y)


class TestHexPosition:
    """Tests for HexPosition."""

    def test_neighbor(self) -> None:
        """Neighbor applies the direction delta."""
        origin = HexPosition(q=2, r=3)
        for direction, (dq, dr) in DIRECTION_DELTAS.items():
            assert origin.neighbor(direction) == HexPosition(q=2 + dq, r=3 + dr)

    def test_opposite_directions_cancel(self) -> None:
        """Moving in a direction and then its opposite returns home."""
        origin = HexPosition(q=0, r=0)
        for direction in HexDirection:
            opposite = HexDirection((direction + 3) % 6)
            assert origin.neighbor(direction).neighbor(opposite) == origin

    def test_from_array_xy(self) -> None:
        """Array positions convert to axial coordinates."""
        assert HexPosition.from_array_xy(3, 5) == HexPosition(q=1, r=5)
        position = HexPosition.from_array_xy(4, 2)
        assert axial_to_offset(position.q, position.r) == (4, 2)

    def test_hashable(self) -> None:
        """Equal positions collapse in a set."""
        assert len({HexPosition(q=1, r=1), HexPosition(q=1, r=1)}) == 1

    def test_frozen(self) -> None:
        """Positions cannot be modified."""
        position = HexPosition(q=1, r=1)
        with pytest.raises(ValidationError):
            position.q = 5  # type: ignore[misc]


class TestGeometry:
    """Tests for lattice and world geometry."""

    def test_lattice_matches_world(self) -> None:
        """Lattice coordinates scale to world positions."""
        for q, r in [(0, 0), (1, 0), (0, 1), (-2, 3)]:
            lx, lz = hex_to_lattice(q, r)
            wx, wz = hex_to_world(q, r)
            assert math.isclose(lx * SQRT3 / 2.0, wx, abs_tol=1e-12)
            assert math.isclose(lz * 0.5, wz, abs_tol=1e-12)

    def test_corners_at_unit_distance(self) -> None:
        """Every corner offset lies one unit from the center."""
        for dx, dz in CORNER_LATTICE_OFFSETS:
            assert math.isclose(math.hypot(dx * SQRT3 / 2.0, dz * 0.5), 1.0)

    def test_single_cell_bounds(self) -> None:
        """A 1x1 map spans one hex."""
        min_x, min_z, max_x, max_z = map_bounds(1, 1)
        assert math.isclose(min_x, -SQRT3 / 2.0)
        assert math.isclose(max_x, SQRT3 / 2.0)
        assert min_z == -1.0
        assert max_z == 1.0

    def test_bounds_include_odd_row_shift(self) -> None:
        """Odd rows widen the map by half a cell."""
        _, _, max_x_one_row, _ = map_bounds(4, 1)
        _, _, max_x_two_rows, max_z = map_bounds(4, 2)
        assert math.isclose(max_x_two_rows - max_x_one_row, SQRT3 / 2.0)
        assert math.isclose(max_z, 2.5)
