"""
Traffic Tamer Application Controller

Top-level controller that wires the engine to the event bus.
"""

from typing import Optional, Union

from PySide6.QtCore import QObject

from config import BalanceSettings, BoardSettings, BALANCE_SETTINGS, BOARD_SETTINGS
from engine.movement import MoveOutcome
from engine.session import SessionState
from engine.tamer import TamerEngine
from models.board import Board, Direction
from services.event_bus import EventBus


class TrafficTamerApp(QObject):
    """
    Top-level application controller.

    The host UI translates clicks and key presses into select_occupant()
    and move() calls and listens on the event bus.
    """

    def __init__(
        self,
        board_settings: BoardSettings = BOARD_SETTINGS,
        balance: BalanceSettings = BALANCE_SETTINGS,
        seed: Optional[int] = None,
        event_bus: Optional[EventBus] = None,
    ):
        super().__init__()

        # Core services
        self.event_bus = event_bus or EventBus()
        self.engine = TamerEngine(
            board=Board.from_settings(board_settings),
            balance=balance,
            seed=seed,
        )

        # Wire up signals to event bus
        self.engine.session_updated.connect(self.event_bus.session_updated.emit)
        self.engine.state_changed.connect(self.event_bus.state_changed.emit)
        self.engine.selection_changed.connect(self.event_bus.selection_changed.emit)
        self.engine.occupant_moved.connect(self.event_bus.occupant_moved.emit)
        self.engine.occupant_cleared.connect(self.event_bus.occupant_cleared.emit)
        self.engine.move_rejected.connect(self.event_bus.move_rejected.emit)
        self.engine.level_advanced.connect(self.event_bus.level_advanced.emit)
        self.engine.timer_tick.connect(self.event_bus.timer_tick.emit)
        self.engine.game_over.connect(self.event_bus.game_over.emit)
        self.engine.experience_reported.connect(self.event_bus.experience_reported.emit)

        self.engine.level_advanced.connect(self._on_level_advanced)
        self.engine.game_over.connect(self._on_game_over)

    def start_game(self) -> None:
        """Start a fresh game, resetting a finished one first."""
        if self.engine.state != SessionState.IDLE:
            self.engine.reset()
        self.engine.start()
        self.event_bus.game_started.emit(self.engine.session.level)

    def reset_game(self) -> None:
        """Abandon the current game."""
        self.engine.reset()
        self.event_bus.game_reset.emit()

    def select_vehicle(self, vehicle_id: int) -> Optional[int]:
        """Click on a vehicle."""
        return self.engine.select_occupant(vehicle_id)

    def move_vehicle(self, direction: Union[Direction, str]) -> MoveOutcome:
        """Nudge the selected vehicle."""
        return self.engine.move(direction)

    def _on_level_advanced(self, level: int) -> None:
        self.event_bus.emit_message("info", f"Level {level}")

    def _on_game_over(self, result: dict) -> None:
        self.event_bus.emit_message("info", f"Traffic cleared! Final score: {result['score']}")
