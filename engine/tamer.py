"""
Tamer Engine - the game-loop driver for Traffic Tamer.

The TamerEngine owns the single Session, the board, the random source and
the game clock. Input (selection, moves) and clock ticks all run on the Qt
event loop thread, so every handler runs to completion before the next one.
"""

import logging
from random import Random
from typing import Optional, Union

from PySide6.QtCore import QObject, Signal

from config import BalanceSettings, BALANCE_SETTINGS
from engine.movement import MoveOutcome, MoveResult
from engine.session import (
    Session,
    SessionState,
    advance_level,
    apply_move,
    claim_experience,
    is_level_complete,
    new_session,
    select_occupant,
    tick,
)
from engine.timer import GameClock
from models.board import Board, Direction
from models.schemas import BoardView, GameResult, OccupantView, SessionSnapshot

logger = logging.getLogger(__name__)


class TamerEngine(QObject):
    """
    Core puzzle driver.
    Emits Qt Signals so GUI layers can react without polling.

    Lifecycle: IDLE --start--> PLAYING --(few vehicles left)--> LEVEL_ADVANCE
    --> PLAYING ... --(clock runs out)--> GAME_OVER. reset() returns to IDLE
    from anywhere and cancels the clock.
    """

    # Signals
    session_updated = Signal(object)        # SessionSnapshot
    state_changed = Signal(str)             # new state name
    selection_changed = Signal(object)      # selected id or None
    occupant_moved = Signal(dict)           # {id, direction, x, y}
    occupant_cleared = Signal(dict)         # {id, direction, score, cleared_count}
    move_rejected = Signal(dict)            # {id, direction, blocked_by}
    level_advanced = Signal(int)            # new level
    timer_tick = Signal(int)                # seconds left
    game_over = Signal(dict)                # final results
    experience_reported = Signal(int)       # experience, once per session

    def __init__(
        self,
        board: Optional[Board] = None,
        balance: BalanceSettings = BALANCE_SETTINGS,
        rng: Optional[Random] = None,
        seed: Optional[int] = None,
        clock: Optional[GameClock] = None,
    ):
        """
        Initialize the engine.

        Args:
            board: Board extent (default: from BOARD_SETTINGS)
            balance: Balance settings
            rng: Random source for vehicle placement
            seed: Seed for a new random source when rng is not given
            clock: Tick source (default: a GameClock at the balance interval)
        """
        super().__init__()
        self.board = board or Board.from_settings()
        self.balance = balance
        self._rng = rng if rng is not None else Random(seed)

        self.clock = clock or GameClock(balance.tick_interval_ms)
        self.clock.tick.connect(self._on_clock_tick)

        self._generation = 0
        self._session = self._idle_session()

    def _idle_session(self) -> Session:
        return Session(time_left=self.balance.initial_time_s, generation=self._generation)

    @property
    def session(self) -> Session:
        """The current session. Treat as read-only outside the engine."""
        return self._session

    @property
    def state(self) -> SessionState:
        """Current state of the session."""
        return self._session.state

    @state.setter
    def state(self, new_state: SessionState) -> None:
        """Set the session state and emit signal."""
        self._session.state = new_state
        self.state_changed.emit(new_state.value)

    # ============ Lifecycle ============

    def start(self) -> None:
        """Start a new session (IDLE -> PLAYING)."""
        if self.state != SessionState.IDLE:
            raise RuntimeError(f"Cannot start game from state: {self.state}")

        self._generation += 1
        self._session = new_session(self.board, self._rng, self.balance, self._generation)
        logger.info("Session %d started with %d vehicles",
                    self._generation, self._session.alive_count)

        self.state_changed.emit(SessionState.PLAYING.value)
        self.clock.start(self._generation)
        self._emit_session_update()

    def reset(self) -> None:
        """Drop the session and return to IDLE. The clock is stopped first."""
        self.clock.stop()
        self._generation += 1
        self._session = self._idle_session()
        logger.info("Session reset")

        self.state_changed.emit(SessionState.IDLE.value)
        self.selection_changed.emit(None)
        self._emit_session_update()

    # ============ Input ============

    def select_occupant(self, occupant_id: Optional[int]) -> Optional[int]:
        """
        Toggle selection of a vehicle.

        Returns:
            The selected id after the call
        """
        previous = self._session.selected_id
        selected = select_occupant(self._session, occupant_id)
        if selected != previous:
            self.selection_changed.emit(selected)
            self._emit_session_update()
        return selected

    def move(self, direction: Union[Direction, str]) -> MoveOutcome:
        """Nudge the selected vehicle one cell."""
        outcome = apply_move(self._session, self.board, Direction.parse(direction), self.balance)

        if outcome.result == MoveResult.REJECTED:
            self.move_rejected.emit({
                "id": outcome.occupant_id,
                "direction": outcome.direction.value,
                "blocked_by": outcome.blocked_by,
            })
            return outcome

        if outcome.result == MoveResult.MOVED:
            x, y = outcome.position
            self.occupant_moved.emit({
                "id": outcome.occupant_id,
                "direction": outcome.direction.value,
                "x": x,
                "y": y,
            })
        else:
            logger.debug("Vehicle %d cleared", outcome.occupant_id)
            self.occupant_cleared.emit({
                "id": outcome.occupant_id,
                "direction": outcome.direction.value,
                "score": self._session.score,
                "cleared_count": self._session.cleared_count,
            })
            self.selection_changed.emit(None)
            self._check_level_complete()

        self._emit_session_update()
        return outcome

    # ============ Clock ============

    def tick(self) -> None:
        """Count one second down. Ignored unless PLAYING."""
        if not self._session.is_playing:
            logger.debug("Ignoring tick in state %s", self.state.value)
            return

        expired = tick(self._session)
        self.timer_tick.emit(self._session.time_left)

        if expired:
            self._finish()
        else:
            self._check_level_complete()
        self._emit_session_update()

    def _on_clock_tick(self, generation: int) -> None:
        """Handle a clock tick, dropping ticks armed for an older session."""
        if generation != self._session.generation:
            logger.debug("Dropping stale tick for session %d", generation)
            return
        self.tick()

    # ============ Transitions ============

    def _check_level_complete(self) -> bool:
        """Advance to the next level if few enough vehicles remain."""
        if not is_level_complete(self._session, self.balance):
            return False

        self.state = SessionState.LEVEL_ADVANCE
        self._session = advance_level(self._session, self.board, self._rng, self.balance)
        logger.info("Level %d: %d vehicles, %ds left",
                    self._session.level, self._session.alive_count, self._session.time_left)

        self.state_changed.emit(SessionState.PLAYING.value)
        self.level_advanced.emit(self._session.level)
        return True

    def _finish(self) -> None:
        """Clock ran out: stop ticking and report the result once."""
        self.clock.stop()
        self.state_changed.emit(SessionState.GAME_OVER.value)

        experience = claim_experience(self._session, self.balance)
        if experience is None:
            return

        result = GameResult(
            level=self._session.level,
            score=self._session.score,
            cleared_count=self._session.cleared_count,
            experience=experience,
        )
        logger.info("Game over: score %d, level %d, %d xp",
                    result.score, result.level, result.experience)
        self.game_over.emit(result.model_dump())
        self.experience_reported.emit(experience)

    # ============ Snapshots ============

    def snapshot(self) -> SessionSnapshot:
        """Read-only view of the session for the presentation layer."""
        session = self._session
        occupants = []
        for occupant in session.occupants:
            if not occupant.alive:
                continue
            left, top, width_px, height_px = self.board.to_pixels(occupant.box)
            occupants.append(OccupantView(
                id=occupant.id,
                category=occupant.category,
                color=occupant.color,
                x=occupant.x,
                y=occupant.y,
                width=occupant.width,
                height=occupant.height,
                is_selected=(occupant.id == session.selected_id),
                left_px=left,
                top_px=top,
                width_px=width_px,
                height_px=height_px,
            ))

        return SessionSnapshot(
            state=session.state.value,
            level=session.level,
            score=session.score,
            time_left=session.time_left,
            cleared_count=session.cleared_count,
            selected_id=session.selected_id,
            board=BoardView(
                width=self.board.width,
                height=self.board.height,
                cell_size=self.board.cell_size,
            ),
            occupants=tuple(occupants),
            grid=tuple(tuple(row) for row in self.board.occupancy(session.occupants).tolist()),
        )

    def _emit_session_update(self) -> None:
        """Emit the current session snapshot."""
        self.session_updated.emit(self.snapshot())
