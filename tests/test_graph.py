"""Tests for the hexagon graph."""

import numpy as np
import pytest

from hexterrain.exceptions import ConfigurationError, InvalidDimensionError
from hexterrain.graph import HexagonGraph
from hexterrain.types import HexDirection, HexPosition, hex_to_world


class TestConstruction:
    """Tests for graph construction."""

    @pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-1, -1)])
    def test_invalid_dimensions(self, width: int, height: int) -> None:
        """Sizes below the minimum are rejected."""
        with pytest.raises(InvalidDimensionError):
            HexagonGraph(width, height)

    def test_invalid_dimension_is_configuration_error(self) -> None:
        """Dimension errors are configuration errors."""
        with pytest.raises(ConfigurationError):
            HexagonGraph(0, 0)

    def test_single_cell(self) -> None:
        """A 1x1 map has one center and six border corners."""
        graph = HexagonGraph(1, 1)
        assert len(graph.centers) == 1
        assert len(graph.corners) == 6
        assert graph.centers.neighbors[0] == {}
        assert graph.corners.is_border.all()
        assert graph.centers.is_border[0]
        for neighbors in graph.corners.neighbors:
            assert len(neighbors) == 2

    def test_center_count(self) -> None:
        """One center per cell."""
        graph = HexagonGraph(7, 4)
        assert len(graph.centers) == 28
        assert graph.size == (7, 4)

    def test_each_center_has_six_distinct_corners(self, small_graph: HexagonGraph) -> None:
        """Corner rings never repeat a corner."""
        for ring in small_graph.centers.corners:
            assert len(set(ring.tolist())) == 6

    def test_touch_counts(self) -> None:
        """Every center/corner incidence is recorded once."""
        graph = HexagonGraph(5, 6)
        touches = sum(len(t) for t in graph.corners.touches)
        assert touches == 6 * len(graph.centers)
        for index, touching in enumerate(graph.corners.touches):
            assert 1 <= len(touching) <= 3
            for center in touching:
                assert index in graph.centers.corners[center]


class TestTopology:
    """Tests for adjacency."""

    def test_interior_center(self, small_graph: HexagonGraph) -> None:
        """The middle of a 3x3 map has six neighbors and no border corners."""
        centers = small_graph.centers
        assert len(centers.neighbors[4]) == 6
        assert not centers.is_border[4]
        for corner in centers.corners[4]:
            assert len(small_graph.corners.touches[corner]) == 3
        others = [i for i in range(9) if i != 4]
        assert centers.is_border[others].all()

    def test_neighbors_in_direction_order(self, small_graph: HexagonGraph) -> None:
        """Neighbor mappings list directions in ascending order."""
        for neighbors in small_graph.centers.neighbors:
            directions = list(neighbors)
            assert directions == sorted(directions)

    def test_center_links_are_symmetric(self) -> None:
        """A neighbor in one direction sees us in the opposite direction."""
        graph = HexagonGraph(6, 5)
        for index, neighbors in enumerate(graph.centers.neighbors):
            for direction, neighbor in neighbors.items():
                opposite = HexDirection((direction + 3) % 6)
                assert graph.centers.neighbors[neighbor][opposite] == index

    def test_corner_links_are_symmetric(self) -> None:
        """Corner adjacency is mirrored."""
        graph = HexagonGraph(6, 5)
        for index, neighbors in enumerate(graph.corners.neighbors):
            assert 2 <= len(neighbors) <= 3
            for neighbor in neighbors:
                assert index in graph.corners.neighbors[neighbor]

    def test_ring_corners_are_adjacent(self, small_graph: HexagonGraph) -> None:
        """Consecutive ring corners are neighbors."""
        for ring in small_graph.centers.corners.tolist():
            for slot in range(6):
                a, b = ring[slot], ring[(slot + 1) % 6]
                assert b in small_graph.corners.neighbors[a]

    def test_border_corners_touch_fewer_than_three(self) -> None:
        """Border flag follows the touch count."""
        graph = HexagonGraph(4, 4)
        expected = np.array([len(t) < 3 for t in graph.corners.touches])
        np.testing.assert_array_equal(graph.corners.is_border, expected)


class TestPositions:
    """Tests for indexing and world positions."""

    def test_center_index(self) -> None:
        """Index is x + y * width, None outside."""
        graph = HexagonGraph(5, 3)
        assert graph.center_index(0, 0) == 0
        assert graph.center_index(4, 2) == 14
        assert graph.center_index(5, 0) is None
        assert graph.center_index(0, -1) is None

    def test_center_at(self) -> None:
        """Axial lookup agrees with array lookup."""
        graph = HexagonGraph(5, 4)
        for y in range(4):
            for x in range(5):
                position = HexPosition.from_array_xy(x, y)
                assert graph.center_at(position) == graph.center_index(x, y)

    def test_center_positions(self) -> None:
        """Center world positions follow the hex layout."""
        graph = HexagonGraph(4, 3)
        for index, (q, r) in enumerate(graph.centers.hex_position.tolist()):
            np.testing.assert_allclose(graph.centers.position[index], hex_to_world(q, r))

    def test_corners_one_unit_from_center(self, small_graph: HexagonGraph) -> None:
        """Every ring corner is at hex size 1 from its center."""
        centers = small_graph.centers
        corner_positions = small_graph.corners.position[centers.corners]
        offsets = corner_positions - centers.position[:, np.newaxis, :]
        np.testing.assert_allclose(np.linalg.norm(offsets, axis=2), 1.0)

    def test_shared_corner_positions_unique(self) -> None:
        """No two corners share a position."""
        graph = HexagonGraph(6, 6)
        rounded = {tuple(p) for p in np.round(graph.corners.position, 9).tolist()}
        assert len(rounded) == len(graph.corners)


class TestAttributes:
    """Tests for attribute arrays."""

    def test_initial_values(self, small_graph: HexagonGraph) -> None:
        """Fresh graphs start dry, flat and with self downslopes."""
        corners = small_graph.corners
        assert not corners.is_water.any()
        assert (corners.elevation == 0).all()
        np.testing.assert_array_equal(corners.downslope, np.arange(len(corners)))

    def test_topology_is_read_only(self, small_graph: HexagonGraph) -> None:
        """Positions and corner rings cannot be written."""
        with pytest.raises(ValueError):
            small_graph.corners.position[0, 0] = 1.0
        with pytest.raises(ValueError):
            small_graph.centers.corners[0, 0] = 0

    def test_freeze(self, small_graph: HexagonGraph) -> None:
        """Freezing makes attribute arrays read-only."""
        small_graph.corners.elevation[0] = 0.5
        small_graph.freeze()
        for array in small_graph.corners.attribute_arrays().values():
            assert not array.flags.writeable
        for array in small_graph.centers.attribute_arrays().values():
            assert not array.flags.writeable
        with pytest.raises(ValueError):
            small_graph.centers.moisture[0] = 1.0

    def test_temperature_from_elevation(self, small_graph: HexagonGraph) -> None:
        """Temperature is one minus elevation, clamped."""
        small_graph.centers.elevation[:] = np.linspace(-0.5, 1.5, 9)
        temperature = small_graph.centers.temperature
        assert temperature.min() >= 0.0
        assert temperature.max() <= 1.0
        assert temperature[4] == pytest.approx(0.5)
