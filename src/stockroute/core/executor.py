"""
Move execution.

Wraps the backend's transfer primitive and folds its outcome into two
buckets: something moved, or nothing did.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from stockroute.core.inventory import Inventory

logger = logging.getLogger(__name__)


class MoveStatus(Enum):
    MOVED = "moved"  # at least one unit, possibly a partial stack
    FULL = "full"    # zero units or the call failed


@dataclass(frozen=True)
class MoveResult:
    units_moved: int
    error: str | None = None

    @property
    def status(self) -> MoveStatus:
        return classify(self.units_moved)


def classify(units_moved: int | None) -> MoveStatus:
    """Anything above zero counts as a successful move."""
    if units_moved and units_moved > 0:
        return MoveStatus.MOVED
    return MoveStatus.FULL


async def execute(source: Inventory, slot: int, destination: Inventory) -> MoveResult:
    """
    Push the whole stack at `slot` from `source` into `destination`.

    Never raises for transfer problems; a failed call becomes a zero-unit
    result with the error text attached. Not retried within the cycle.
    """
    try:
        moved = await source.push(slot, destination)
    except Exception as e:
        logger.warning(f"Transfer {source.name}[{slot}] -> {destination.name} failed: {e}")
        return MoveResult(units_moved=0, error=str(e))

    if moved is None or moved < 0:
        return MoveResult(units_moved=0)
    return MoveResult(units_moved=int(moved))
