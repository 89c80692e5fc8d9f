"""
Vehicle occupant model for the Traffic Tamer board.
"""

import enum
from dataclasses import dataclass
from typing import Optional

from models.board import Box


# Where cleared vehicles are parked, well clear of any board
OFF_BOARD = (-1000, -1000)


class VehicleType(enum.Enum):
    """Vehicle categories. The category only decides the footprint."""
    CAR = "car"
    RICKSHAW = "rickshaw"
    BUS = "bus"


@dataclass
class Occupant:
    """
    A rectangular vehicle on the grid.

    Position is the top-left corner in cells. Once cleared the vehicle is
    parked at OFF_BOARD with alive=False and takes no further part in
    collision checks.
    """
    id: int
    category: VehicleType
    x: int
    y: int
    width: int
    height: int
    color: str = "#3b82f6"
    alive: bool = True

    def __repr__(self) -> str:
        state = "alive" if self.alive else "cleared"
        return (f"<Occupant(id={self.id}, {self.category.value}, "
                f"({self.x}, {self.y}) {self.width}x{self.height}, {state})>")

    @property
    def position(self) -> tuple[int, int]:
        return self.x, self.y

    @property
    def footprint(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def box(self) -> Box:
        """Bounding box at the current position."""
        return Box(self.x, self.y, self.width, self.height)

    def box_at(self, x: int, y: int) -> Box:
        """Bounding box this vehicle would have at (x, y)."""
        return Box(x, y, self.width, self.height)

    def clear(self) -> None:
        """Take the vehicle off the board."""
        self.alive = False
        self.x, self.y = OFF_BOARD


def find_occupant(occupants: list[Occupant], occupant_id: Optional[int]) -> Optional[Occupant]:
    """Return the alive occupant with the given id, or None."""
    if occupant_id is None:
        return None
    for occupant in occupants:
        if occupant.id == occupant_id and occupant.alive:
            return occupant
    return None


def alive_occupants(occupants: list[Occupant]) -> list[Occupant]:
    return [o for o in occupants if o.alive]
