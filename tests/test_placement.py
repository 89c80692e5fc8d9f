"""
Tests for the placement generator.
"""

from itertools import combinations
from random import Random

from config import BalanceSettings
from engine.placement import generate_occupants, occupant_count_for_level
from models.board import Board
from models.vehicle import VehicleType


class CountingRandom(Random):
    """Random that counts coordinate draws."""

    def __init__(self, seed):
        super().__init__(seed)
        self.draws = 0

    def randrange(self, *args, **kwargs):
        self.draws += 1
        return super().randrange(*args, **kwargs)


def assert_valid_layout(board, occupants):
    for occupant in occupants:
        assert board.contains(occupant.box)
    for a, b in combinations(occupants, 2):
        assert not a.box.overlaps(b.box), f"{a} overlaps {b}"


class TestOccupantCount:
    """Tests for per-level vehicle counts."""

    def test_count_grows_with_level(self):
        assert occupant_count_for_level(1) == 9
        assert occupant_count_for_level(2) == 10
        assert occupant_count_for_level(6) == 14

    def test_count_is_capped(self):
        assert occupant_count_for_level(7) == 15
        assert occupant_count_for_level(50) == 15


class TestGenerateOccupants:
    """Tests for generate_occupants."""

    def setup_method(self):
        self.board = Board(12, 12)

    def test_reference_layout_is_valid(self):
        """Generated vehicles never overlap and stay on the board."""
        for seed in range(20):
            occupants = generate_occupants(15, self.board, Random(seed))
            assert len(occupants) <= 15
            assert_valid_layout(self.board, occupants)

    def test_footprint_follows_category(self):
        balance = BalanceSettings()
        occupants = generate_occupants(15, self.board, Random(3), balance)
        expected = {
            VehicleType.CAR: (1, 2),
            VehicleType.RICKSHAW: (1, 1),
            VehicleType.BUS: (2, 1),
        }
        for occupant in occupants:
            assert occupant.footprint == expected[occupant.category]
            assert occupant.color in balance.colors
            assert occupant.alive

    def test_ids_are_unique(self):
        occupants = generate_occupants(15, self.board, Random(11))
        ids = [o.id for o in occupants]
        assert len(ids) == len(set(ids))
        assert all(0 <= i < 15 for i in ids)

    def test_same_seed_same_layout(self):
        """Placement is deterministic for a given seed."""
        first = generate_occupants(12, self.board, Random(1234))
        second = generate_occupants(12, self.board, Random(1234))
        assert first == second

    def test_crowded_board_drops_vehicles(self):
        """A board too small for the request yields a smaller valid set."""
        board = Board(3, 3)
        occupants = generate_occupants(15, board, Random(5))

        assert len(occupants) < 15
        assert_valid_layout(board, occupants)

    def test_placement_is_bounded(self):
        """Coordinate draws never exceed attempts x requested vehicles."""
        balance = BalanceSettings(placement_attempts=50)
        rng = CountingRandom(9)

        generate_occupants(15, Board(3, 3), rng, balance)

        # two draws (x and y) per attempt
        assert rng.draws <= 2 * 50 * 15

    def test_footprint_spanning_board_is_placed(self):
        """A bus exactly as wide as the board fits at x=0."""
        balance = BalanceSettings(footprints={"bus": (2, 1)})

        occupants = generate_occupants(1, Board(2, 1), Random(0), balance)

        assert len(occupants) == 1
        assert occupants[0].position == (0, 0)

    def test_footprint_spanning_width_on_taller_board(self):
        balance = BalanceSettings(footprints={"bus": (2, 1)})

        occupants = generate_occupants(1, Board(2, 3), Random(0), balance)

        assert len(occupants) == 1
        assert occupants[0].x == 0

    def test_single_column_board(self):
        """1x1 vehicles on a one-cell-wide board all sit in column 0."""
        board = Board(1, 12)
        balance = BalanceSettings(footprints={"rickshaw": (1, 1)})

        occupants = generate_occupants(3, board, Random(4), balance)

        assert occupants
        assert all(o.x == 0 for o in occupants)
        assert_valid_layout(board, occupants)

    def test_footprint_too_large_for_board(self):
        """Vehicles wider than the board are dropped, not retried forever."""
        balance = BalanceSettings(footprints={"bus": (3, 1)})
        rng = CountingRandom(0)

        occupants = generate_occupants(5, Board(2, 4), rng, balance)

        assert occupants == []
        assert rng.draws == 0

    def test_zero_requested(self):
        assert generate_occupants(0, self.board, Random(0)) == []
