"""
Event Bus - Central signal hub for inter-module communication.

The presentation layer and the progression system connect to this single
object rather than directly to the engine.
"""

from PySide6.QtCore import QObject, Signal


class EventBus(QObject):
    """
    Central signal hub for Traffic Tamer.

    The EventBus acts as a mediator between the application components:
    - TamerEngine emits session, board, and timer events
    - Presentation layers listen and redraw
    - The progression system listens for the experience report

    Usage:
        # In the app controller
        engine.session_updated.connect(event_bus.session_updated.emit)

        # In a scoreboard
        event_bus.session_updated.connect(self._on_session_updated)
    """

    # ============ Session Lifecycle ============
    game_started = Signal(int)          # level
    game_reset = Signal()
    state_changed = Signal(str)         # state name
    level_advanced = Signal(int)        # new level
    game_over = Signal(dict)            # Final results dict

    # ============ Board Events ============
    session_updated = Signal(object)    # SessionSnapshot
    selection_changed = Signal(object)  # selected id or None
    occupant_moved = Signal(dict)       # {id, direction, x, y}
    occupant_cleared = Signal(dict)     # {id, direction, score, cleared_count}
    move_rejected = Signal(dict)        # {id, direction, blocked_by}

    # ============ Timer Events ============
    timer_tick = Signal(int)            # seconds remaining

    # ============ Progression ============
    experience_reported = Signal(int)   # experience earned, once per session

    # ============ System Events ============
    system_message = Signal(str, str)   # (level, message) - e.g., ("info", "Level 2")

    def __init__(self):
        super().__init__()

    def emit_message(self, level: str, message: str) -> None:
        """Emit a system message (info, warning, error)."""
        self.system_message.emit(level, message)
