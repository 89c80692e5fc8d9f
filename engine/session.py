"""
Session state and the pure transitions of the Traffic Tamer state machine.

The Session is a plain dataclass owned by the TamerEngine driver. Functions
here never schedule timers or emit signals; the driver does that at the
boundary.
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from enum import Enum
from random import Random
from typing import Optional

from config import BalanceSettings, BALANCE_SETTINGS
from engine.movement import MoveOutcome, MoveResult, validate_move
from engine.placement import generate_occupants, occupant_count_for_level
from models.board import Board, Direction
from models.vehicle import Occupant, alive_occupants, find_occupant

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State machine states for the puzzle lifecycle."""
    IDLE = "idle"
    PLAYING = "playing"
    LEVEL_ADVANCE = "level_advance"
    GAME_OVER = "game_over"


@dataclass
class Session:
    """All mutable game state for one play-through."""
    level: int = 1
    score: int = 0
    time_left: int = BALANCE_SETTINGS.initial_time_s
    cleared_count: int = 0
    selected_id: Optional[int] = None
    occupants: list[Occupant] = field(default_factory=list)
    state: SessionState = SessionState.IDLE
    experience_reported: bool = False

    # Bumped on every start; ticks armed for another generation are stale
    generation: int = 0

    @property
    def is_playing(self) -> bool:
        return self.state == SessionState.PLAYING

    @property
    def alive_count(self) -> int:
        return len(alive_occupants(self.occupants))

    @property
    def selected(self) -> Optional[Occupant]:
        return find_occupant(self.occupants, self.selected_id)


def new_session(
    board: Board,
    rng: Random,
    balance: BalanceSettings = BALANCE_SETTINGS,
    generation: int = 0,
) -> Session:
    """Fresh session at level 1, already in PLAYING."""
    occupants = generate_occupants(occupant_count_for_level(1, balance), board, rng, balance)
    return Session(
        level=1,
        score=0,
        time_left=balance.initial_time_s,
        cleared_count=0,
        selected_id=None,
        occupants=occupants,
        state=SessionState.PLAYING,
        generation=generation,
    )


def select_occupant(session: Session, occupant_id: Optional[int]) -> Optional[int]:
    """
    Toggle selection of a vehicle.

    Selecting the selected vehicle deselects it; selecting another one
    re-targets. Unknown or cleared ids, and calls outside PLAYING, leave the
    selection alone.

    Returns:
        The selected id after the call
    """
    if not session.is_playing:
        return session.selected_id
    if occupant_id is None:
        session.selected_id = None
        return None
    if find_occupant(session.occupants, occupant_id) is None:
        logger.debug("Ignoring selection of unknown vehicle %s", occupant_id)
        return session.selected_id

    if session.selected_id == occupant_id:
        session.selected_id = None
    else:
        session.selected_id = occupant_id
    return session.selected_id


def apply_move(
    session: Session,
    board: Board,
    direction: Direction,
    balance: BalanceSettings = BALANCE_SETTINGS,
) -> MoveOutcome:
    """Validate a move of the selected vehicle and apply it to the session."""
    direction = Direction.parse(direction)
    if not session.is_playing or session.selected_id is None:
        return MoveOutcome(MoveResult.REJECTED, session.selected_id, direction)

    outcome = validate_move(board, session.occupants, session.selected_id, direction)
    if outcome.result == MoveResult.REJECTED:
        logger.debug("Move %s of vehicle %s rejected (blocked by %s)",
                     direction.value, outcome.occupant_id, outcome.blocked_by)
        return outcome

    occupant = find_occupant(session.occupants, outcome.occupant_id)
    if outcome.result == MoveResult.CLEARED:
        occupant.clear()
        session.score += balance.clear_reward
        session.cleared_count += 1
        session.selected_id = None
    else:
        occupant.x, occupant.y = outcome.position
    return outcome


def is_level_complete(session: Session, balance: BalanceSettings = BALANCE_SETTINGS) -> bool:
    """True when few enough vehicles are left to move on."""
    return session.is_playing and session.alive_count <= balance.level_complete_threshold


def level_time_bonus(new_level: int, balance: BalanceSettings = BALANCE_SETTINGS) -> int:
    """Seconds added when reaching `new_level`. Shrinks by the decay each level."""
    bonus = balance.level_time_bonus_s - balance.level_time_bonus_decay_s * max(0, new_level - 2)
    return max(bonus, min(balance.level_time_bonus_floor_s, balance.level_time_bonus_s))


def advance_level(
    session: Session,
    board: Board,
    rng: Random,
    balance: BalanceSettings = BALANCE_SETTINGS,
) -> Session:
    """
    Build the session for the next level.

    The input session is left untouched. The returned one has the level
    bumped, the time and score bonuses applied, no selection, and a freshly
    generated vehicle set sized for the new level.
    """
    level = session.level + 1
    occupants = generate_occupants(occupant_count_for_level(level, balance), board, rng, balance)
    return dataclasses.replace(
        session,
        level=level,
        time_left=session.time_left + level_time_bonus(level, balance),
        score=session.score + balance.level_bonus,
        selected_id=None,
        occupants=occupants,
        state=SessionState.PLAYING,
    )


def tick(session: Session) -> bool:
    """
    Count one second down.

    Returns:
        True if this tick ran the clock out (session is now GAME_OVER)
    """
    if not session.is_playing:
        return False
    session.time_left = max(0, session.time_left - 1)
    if session.time_left == 0:
        session.state = SessionState.GAME_OVER
        session.selected_id = None
        return True
    return False


def experience_for(score: int, balance: BalanceSettings = BALANCE_SETTINGS) -> int:
    """Experience awarded for a final score."""
    return score * balance.experience_multiplier


def claim_experience(session: Session, balance: BalanceSettings = BALANCE_SETTINGS) -> Optional[int]:
    """
    Experience to report for a finished session, at most once.

    Returns None if the session is not over or was already reported.
    """
    if session.state != SessionState.GAME_OVER or session.experience_reported:
        return None
    session.experience_reported = True
    return experience_for(session.score, balance)
