"""
Traffic Tamer Configuration

Centralized settings, paths, and balance constants for the puzzle.
"""

import logging
import sys
from pathlib import Path
from dataclasses import dataclass
import appdirs


# Application info
APP_NAME = "TrafficTamer"
APP_AUTHOR = "ArcadeBreak"
APP_VERSION = "1.0.0"


@dataclass(frozen=True)
class Paths:
    """Application paths."""
    # Log directory
    log_dir: Path = Path(appdirs.user_log_dir(APP_NAME, APP_AUTHOR))

    @property
    def log_file(self) -> Path:
        return self.log_dir / "traffictamer.log"

    def ensure_directories(self) -> None:
        """Create all required directories."""
        self.log_dir.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class BoardSettings:
    """Board geometry."""
    # Grid extent in cells
    width: int = 12
    height: int = 12

    # Cell size in pixels (presentation only)
    cell_size: int = 40

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError("Board must be at least 1x1 cells")
        if self.cell_size < 1:
            raise ValueError("Cell size must be positive")


@dataclass(frozen=True)
class BalanceSettings:
    """Gameplay balance."""
    # Session clock
    initial_time_s: int = 30
    tick_interval_ms: int = 1000

    # Occupants per level: min(base + level, max)
    base_occupants: int = 8
    max_occupants: int = 15

    # Random placement retries per occupant before it is dropped
    placement_attempts: int = 50

    # Scoring
    clear_reward: int = 100
    level_bonus: int = 500
    experience_multiplier: int = 10

    # Time added on level advance; shrinks by `decay` per level down to `floor`
    level_time_bonus_s: int = 15
    level_time_bonus_decay_s: int = 0
    level_time_bonus_floor_s: int = 5

    # Level completes once this many (or fewer) occupants are left
    level_complete_threshold: int = 2

    # (category name, (width, height) in cells); a dict is accepted and frozen
    footprints: tuple[tuple[str, tuple[int, int]], ...] = (
        ("car", (1, 2)),
        ("rickshaw", (1, 1)),
        ("bus", (2, 1)),
    )

    colors: tuple[str, ...] = (
        "#ef4444", "#3b82f6", "#10b981", "#f59e0b", "#8b5cf6", "#ec4899",
    )

    def __post_init__(self):
        if isinstance(self.footprints, dict):
            object.__setattr__(self, "footprints", tuple(self.footprints.items()))
        object.__setattr__(self, "footprints",
                           tuple((name, tuple(size)) for name, size in self.footprints))
        object.__setattr__(self, "colors", tuple(self.colors))

        if self.initial_time_s < 1:
            raise ValueError("Initial time must be at least one second")
        if self.tick_interval_ms < 1:
            raise ValueError("Tick interval must be positive")
        if self.placement_attempts < 1:
            raise ValueError("Placement needs at least one attempt")
        if self.max_occupants < 0 or self.base_occupants < 0:
            raise ValueError("Occupant counts cannot be negative")
        if not self.footprints:
            raise ValueError("At least one vehicle category is required")
        for name, (w, h) in self.footprints:
            if w < 1 or h < 1:
                raise ValueError(f"Footprint for {name} must be at least 1x1")
        if not self.colors:
            raise ValueError("Colour palette cannot be empty")

    @property
    def categories(self) -> list[str]:
        """Category names in declaration order."""
        return [name for name, _ in self.footprints]

    def footprint(self, category: str) -> tuple[int, int]:
        """(width, height) for a category name."""
        for name, size in self.footprints:
            if name == category:
                return size
        raise KeyError(category)


# Singleton instances
PATHS = Paths()
BOARD_SETTINGS = BoardSettings()
BALANCE_SETTINGS = BalanceSettings()

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: int = logging.INFO, log_file: Path = None) -> None:
    """Attach console and file handlers to the root logger."""
    root = logging.getLogger()
    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


def init_config(level: int = logging.INFO) -> None:
    """Initialize configuration, create required directories and set up logging."""
    PATHS.ensure_directories()
    configure_logging(level, PATHS.log_file)
