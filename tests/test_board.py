"""
Tests for board geometry and the vehicle model.
"""

import numpy as np
import pytest

from models.board import Board, Box, Direction, EMPTY_CELL
from models.vehicle import Occupant, VehicleType, OFF_BOARD, find_occupant


def make_occupant(occupant_id, x, y, width=1, height=1, category=VehicleType.RICKSHAW):
    return Occupant(id=occupant_id, category=category, x=x, y=y, width=width, height=height)


class TestBox:
    """Tests for axis-aligned box overlap."""

    def test_overlapping_boxes(self):
        """Boxes sharing a cell overlap."""
        assert Box(0, 0, 2, 2).overlaps(Box(1, 1, 2, 2))

    def test_adjacent_boxes_do_not_overlap(self):
        """Boxes that only share an edge do not overlap."""
        assert not Box(0, 0, 1, 1).overlaps(Box(1, 0, 1, 1))
        assert not Box(0, 0, 1, 2).overlaps(Box(0, 2, 2, 1))

    def test_overlap_is_symmetric(self):
        """Overlap gives the same answer both ways round."""
        a = Box(3, 3, 2, 1)
        b = Box(4, 2, 1, 2)
        assert a.overlaps(b) == b.overlaps(a)

    def test_right_and_bottom(self):
        box = Box(2, 3, 2, 1)
        assert box.right == 4
        assert box.bottom == 4


class TestBoard:
    """Tests for the Board extent."""

    def setup_method(self):
        self.board = Board(12, 12, 40)

    def test_default_is_reference_size(self):
        """Default board is 12x12 cells of 40px."""
        board = Board.from_settings()
        assert (board.width, board.height, board.cell_size) == (12, 12, 40)
        assert board.pixel_size == (480, 480)

    def test_rejects_empty_board(self):
        with pytest.raises(ValueError):
            Board(0, 12)

    def test_contains(self):
        assert self.board.contains(Box(0, 0, 1, 1))
        assert self.board.contains(Box(10, 11, 2, 1))
        assert not self.board.contains(Box(11, 0, 2, 1))
        assert not self.board.contains(Box(-1, 0, 1, 1))

    def test_touches_edge(self):
        """Boxes at any of the four edges touch the edge."""
        assert self.board.touches_edge(Box(0, 5, 1, 1))
        assert self.board.touches_edge(Box(5, 0, 1, 1))
        assert self.board.touches_edge(Box(11, 5, 1, 1))
        assert self.board.touches_edge(Box(5, 10, 1, 2))
        assert not self.board.touches_edge(Box(5, 5, 2, 1))

    def test_clamp_keeps_box_on_board(self):
        assert self.board.clamp(Box(-1, 3, 1, 1)) == Box(0, 3, 1, 1)
        assert self.board.clamp(Box(11, 3, 2, 1)) == Box(10, 3, 2, 1)
        assert self.board.clamp(Box(4, 11, 1, 2)) == Box(4, 10, 1, 2)

    def test_to_pixels(self):
        assert self.board.to_pixels(Box(2, 3, 2, 1)) == (80, 120, 80, 40)

    def test_occupancy_grid(self):
        """Alive occupants are drawn into the grid by id."""
        bus = make_occupant(4, 1, 2, 2, 1, VehicleType.BUS)
        cleared = make_occupant(7, 5, 5)
        cleared.clear()

        grid = self.board.occupancy([bus, cleared])

        assert grid.shape == (12, 12)
        assert grid[2, 1] == 4 and grid[2, 2] == 4
        assert np.count_nonzero(grid != EMPTY_CELL) == 2

    def test_occupancy_rejects_overlap(self):
        with pytest.raises(ValueError):
            self.board.occupancy([make_occupant(0, 3, 3, 1, 2), make_occupant(1, 3, 4)])


class TestDirection:
    """Tests for move directions."""

    def test_deltas(self):
        assert Direction.UP.delta == (0, -1)
        assert Direction.DOWN.delta == (0, 1)
        assert Direction.LEFT.delta == (-1, 0)
        assert Direction.RIGHT.delta == (1, 0)

    def test_parse_accepts_names(self):
        assert Direction.parse("up") is Direction.UP
        assert Direction.parse(" Right ") is Direction.RIGHT
        assert Direction.parse(Direction.DOWN) is Direction.DOWN

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValueError):
            Direction.parse("diagonal")


class TestOccupant:
    """Tests for the vehicle model."""

    def test_clear_parks_off_board(self):
        occupant = make_occupant(1, 4, 4)
        occupant.clear()

        assert not occupant.alive
        assert occupant.position == OFF_BOARD

    def test_find_occupant_skips_cleared(self):
        a = make_occupant(1, 1, 1)
        b = make_occupant(2, 3, 3)
        b.clear()

        assert find_occupant([a, b], 1) is a
        assert find_occupant([a, b], 2) is None
        assert find_occupant([a, b], 99) is None
        assert find_occupant([a, b], None) is None
