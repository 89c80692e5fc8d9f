"""
Board geometry for the Traffic Tamer grid.

The board is a fixed W x H grid of cells. It knows nothing about which
vehicles sit on it; it only answers questions about boxes and coordinates.
"""

import enum
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Union

import numpy as np

from config import BoardSettings, BOARD_SETTINGS


EMPTY_CELL = -1


class Direction(enum.Enum):
    """The four single-cell move directions."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> tuple[int, int]:
        """(dx, dy) for one step in this direction. y grows downwards."""
        return {
            Direction.UP: (0, -1),
            Direction.DOWN: (0, 1),
            Direction.LEFT: (-1, 0),
            Direction.RIGHT: (1, 0),
        }[self]

    @classmethod
    def parse(cls, value: Union["Direction", str]) -> "Direction":
        """Accept a Direction or its name ("up", "DOWN", ...)."""
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


class Box(NamedTuple):
    """Axis-aligned rectangle in cell units."""
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def overlaps(self, other: "Box") -> bool:
        """True when the two boxes share at least one cell."""
        return (self.x < other.right and self.right > other.x
                and self.y < other.bottom and self.bottom > other.y)


@dataclass(frozen=True)
class Board:
    """
    Immutable grid extent.

    Legal coordinates are [0, width) x [0, height). cell_size is only used
    to translate cell geometry into pixels for the presentation layer.
    """
    width: int = 12
    height: int = 12
    cell_size: int = 40

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Board must be at least 1x1, got {self.width}x{self.height}")

    @classmethod
    def from_settings(cls, settings: BoardSettings = BOARD_SETTINGS) -> "Board":
        return cls(settings.width, settings.height, settings.cell_size)

    @property
    def pixel_size(self) -> tuple[int, int]:
        return self.width * self.cell_size, self.height * self.cell_size

    def contains(self, box: Box) -> bool:
        """True when the whole box lies on the board."""
        return (box.x >= 0 and box.y >= 0
                and box.right <= self.width and box.bottom <= self.height)

    def touches_edge(self, box: Box) -> bool:
        """True when the box sits at or beyond any board edge."""
        return (box.x <= 0 or box.y <= 0
                or box.right >= self.width or box.bottom >= self.height)

    def clamp(self, box: Box) -> Box:
        """Shift a box back inside the board, keeping its size."""
        x = min(max(box.x, 0), max(self.width - box.width, 0))
        y = min(max(box.y, 0), max(self.height - box.height, 0))
        return Box(x, y, box.width, box.height)

    def to_pixels(self, box: Box) -> tuple[int, int, int, int]:
        """(left, top, width, height) in pixels."""
        c = self.cell_size
        return box.x * c, box.y * c, box.width * c, box.height * c

    def occupancy(self, occupants: Iterable) -> np.ndarray:
        """
        Render alive occupants into a (height, width) grid of ids.

        Empty cells hold EMPTY_CELL. Raises ValueError if an occupant lies
        off the board or two occupants claim the same cell.
        """
        grid = np.full((self.height, self.width), EMPTY_CELL, dtype=np.int32)
        for occupant in occupants:
            if not occupant.alive:
                continue
            box = occupant.box
            if not self.contains(box):
                raise ValueError(f"Occupant {occupant.id} lies off the board: {box}")
            cells = grid[box.y:box.bottom, box.x:box.right]
            if (cells != EMPTY_CELL).any():
                raise ValueError(f"Occupant {occupant.id} overlaps another occupant")
            cells[...] = occupant.id
        return grid
