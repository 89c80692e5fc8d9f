"""
Traffic Tamer Game Engine

Core puzzle logic: placement, movement validation, and the session state
machine. Only the driver and clock depend on Qt.
"""

from engine.movement import MoveOutcome, MoveResult, validate_move
from engine.placement import generate_occupants, occupant_count_for_level
from engine.session import Session, SessionState, advance_level
from engine.tamer import TamerEngine
from engine.timer import GameClock

__all__ = [
    "MoveOutcome",
    "MoveResult",
    "validate_move",
    "generate_occupants",
    "occupant_count_for_level",
    "Session",
    "SessionState",
    "advance_level",
    "TamerEngine",
    "GameClock",
]
