"""
Movement & Collision Validator.

Decides what a one-cell nudge of a vehicle does. Nothing here mutates the
board or the vehicles; the caller applies the returned outcome.
"""

import enum
from dataclasses import dataclass
from typing import Optional

from models.board import Board, Box, Direction
from models.vehicle import Occupant, find_occupant


class MoveResult(enum.Enum):
    """What a requested move turns into."""
    REJECTED = "rejected"   # blocked, unknown vehicle, or nothing selected
    MOVED = "moved"         # vehicle shifts one cell
    CLEARED = "cleared"     # vehicle reached an edge and leaves the board


@dataclass(frozen=True)
class MoveOutcome:
    """Result of validating a move."""
    result: MoveResult
    occupant_id: Optional[int]
    direction: Direction
    position: Optional[tuple[int, int]] = None   # candidate position, MOVED/CLEARED only
    blocked_by: Optional[int] = None

    @property
    def accepted(self) -> bool:
        return self.result != MoveResult.REJECTED


def candidate_box(board: Board, occupant: Occupant, direction: Direction) -> Box:
    """Position one step away, kept inside the board."""
    dx, dy = direction.delta
    return board.clamp(occupant.box_at(occupant.x + dx, occupant.y + dy))


def find_blocker(occupants: list[Occupant], moving: Occupant, box: Box) -> Optional[Occupant]:
    """First other alive vehicle overlapping `box`, if any."""
    for other in occupants:
        if other.id == moving.id or not other.alive:
            continue
        if box.overlaps(other.box):
            return other
    return None


def validate_move(
    board: Board,
    occupants: list[Occupant],
    occupant_id: Optional[int],
    direction: Direction,
) -> MoveOutcome:
    """
    Validate a single-cell move.

    1. The candidate is one cell along `direction`, clamped onto the board.
    2. Any overlap with another alive vehicle rejects the move.
    3. A candidate touching any board edge clears the vehicle.
    4. Otherwise the vehicle moves to the candidate.

    Unknown or already cleared ids are rejected.
    """
    direction = Direction.parse(direction)
    occupant = find_occupant(occupants, occupant_id)
    if occupant is None:
        return MoveOutcome(MoveResult.REJECTED, occupant_id, direction)

    box = candidate_box(board, occupant, direction)

    blocker = find_blocker(occupants, occupant, box)
    if blocker is not None:
        return MoveOutcome(MoveResult.REJECTED, occupant.id, direction,
                           blocked_by=blocker.id)

    if board.touches_edge(box):
        return MoveOutcome(MoveResult.CLEARED, occupant.id, direction,
                           position=(box.x, box.y))

    return MoveOutcome(MoveResult.MOVED, occupant.id, direction,
                       position=(box.x, box.y))
