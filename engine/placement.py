"""
Placement Generator - builds a fresh, non-overlapping vehicle layout.

Every vehicle gets a bounded number of random placement attempts. A vehicle
that cannot be placed within its budget is dropped, so generation always
terminates and a level may hold fewer vehicles than requested.
"""

import logging
from random import Random

from config import BalanceSettings, BALANCE_SETTINGS
from models.board import Board
from models.vehicle import Occupant, VehicleType

logger = logging.getLogger(__name__)


def occupant_count_for_level(level: int, balance: BalanceSettings = BALANCE_SETTINGS) -> int:
    """Number of vehicles requested for a level, capped at max_occupants."""
    return max(0, min(balance.base_occupants + level, balance.max_occupants))


def generate_occupants(
    count: int,
    board: Board,
    rng: Random,
    balance: BalanceSettings = BALANCE_SETTINGS,
) -> list[Occupant]:
    """
    Generate up to `count` vehicles that neither overlap nor leave the board.

    Args:
        count: Number of vehicles requested
        board: The board the vehicles are placed on
        rng: The single random source for the session
        balance: Footprints, palette, and placement budget

    Returns:
        The accepted vehicles. Ids are the request index, so ids of dropped
        requests are skipped.
    """
    categories = balance.categories
    placed: list[Occupant] = []

    for occupant_id in range(count):
        name = rng.choice(categories)
        width, height = balance.footprint(name)
        color = rng.choice(balance.colors)

        if width > board.width or height > board.height:
            logger.debug("Vehicle %d (%s) does not fit a %dx%d board",
                         occupant_id, name, board.width, board.height)
            continue

        # Top-left range keeps the whole footprint on the board; a footprint
        # spanning the board only fits at 0
        x_range = max(board.width - width, 1)
        y_range = max(board.height - height, 1)

        candidate = None
        for _ in range(balance.placement_attempts):
            occupant = Occupant(
                id=occupant_id,
                category=VehicleType(name),
                x=rng.randrange(x_range),
                y=rng.randrange(y_range),
                width=width,
                height=height,
                color=color,
            )
            if not any(occupant.box.overlaps(other.box) for other in placed):
                candidate = occupant
                break

        if candidate is None:
            logger.debug("Dropped vehicle %d (%s) after %d attempts",
                         occupant_id, name, balance.placement_attempts)
            continue
        placed.append(candidate)

    if len(placed) < count:
        logger.debug("Generated %d of %d requested vehicles", len(placed), count)
    return placed
