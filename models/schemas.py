"""
Pydantic schemas for read-only views handed to the presentation layer.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from models.vehicle import VehicleType


# ============ Board Schemas ============

class OccupantView(BaseModel):
    """A visible vehicle, in cells and in pixels."""
    model_config = ConfigDict(frozen=True)

    id: int
    category: VehicleType
    color: str = Field(..., pattern=r"^#[0-9A-Fa-f]{6}$")
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)
    width: int = Field(..., ge=1)
    height: int = Field(..., ge=1)
    is_selected: bool = False

    # Pixel geometry
    left_px: int
    top_px: int
    width_px: int
    height_px: int


class BoardView(BaseModel):
    """Board extent."""
    model_config = ConfigDict(frozen=True)

    width: int = Field(..., ge=1)
    height: int = Field(..., ge=1)
    cell_size: int = Field(..., ge=1)


# ============ Session Schemas ============

class SessionSnapshot(BaseModel):
    """
    Immutable snapshot of the current session.
    Emitted after every state change for GUI updates.
    """
    model_config = ConfigDict(frozen=True)

    state: str = "idle"
    level: int = Field(1, ge=1)
    score: int = Field(0, ge=0)
    time_left: int = Field(0, ge=0)
    cleared_count: int = Field(0, ge=0)
    selected_id: Optional[int] = None
    board: BoardView
    occupants: tuple[OccupantView, ...] = ()

    # Cell grid, row-major: occupant id per cell, -1 when empty
    grid: tuple[tuple[int, ...], ...] = ()

    @property
    def remaining(self) -> int:
        return len(self.occupants)


class GameResult(BaseModel):
    """Final results reported once at game over."""
    model_config = ConfigDict(frozen=True)

    level: int = Field(..., ge=1)
    score: int = Field(..., ge=0)
    cleared_count: int = Field(..., ge=0)
    experience: int = Field(..., ge=0)
