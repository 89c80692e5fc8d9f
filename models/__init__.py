"""
Traffic Tamer Models

Board geometry, vehicles, and read-only snapshot schemas.
"""

from models.board import Board, Box, Direction, EMPTY_CELL
from models.vehicle import Occupant, VehicleType, OFF_BOARD
from models.schemas import BoardView, GameResult, OccupantView, SessionSnapshot

__all__ = [
    "Board",
    "Box",
    "Direction",
    "EMPTY_CELL",
    "Occupant",
    "VehicleType",
    "OFF_BOARD",
    "BoardView",
    "GameResult",
    "OccupantView",
    "SessionSnapshot",
]
