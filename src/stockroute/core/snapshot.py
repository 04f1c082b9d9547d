"""
Concurrent snapshot of destination contents.

Destinations are queried in waves of at most `batch_size` concurrent
listings. Each wave is joined before the next starts, which keeps the
number of outstanding queries under the environment's event budget.
"""

import asyncio
import logging
from collections.abc import Sequence

from stockroute.core.inventory import Inventory, TypeIndex

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 200


def waves(destinations: Sequence[Inventory], batch_size: int) -> list[Sequence[Inventory]]:
    """Split destinations into consecutive batches of at most batch_size."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    return [
        destinations[i:i + batch_size]
        for i in range(0, len(destinations), batch_size)
    ]


async def _item_types(inventory: Inventory) -> frozenset[str]:
    """Query one destination. Any failure counts as holding nothing."""
    try:
        listing = await inventory.list()
    except Exception as e:
        logger.warning(f"Listing {inventory.name} failed: {e}")
        return frozenset()

    if not listing:
        return frozenset()
    return frozenset(stack.item_id for stack in listing.values() if stack.item_id)


async def build_index(
    destinations: Sequence[Inventory],
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> TypeIndex:
    """
    Build the item-type index for one cycle.

    Every destination is queried exactly once. The result has one entry
    per destination, keyed by name, and is never updated afterwards.
    """
    index: TypeIndex = {}

    for batch in waves(destinations, batch_size):
        # _item_types never raises, so one failed query can't cancel its siblings
        results = await asyncio.gather(*(_item_types(inv) for inv in batch))
        for inventory, types in zip(batch, results):
            index[inventory.name] = types

    logger.debug(f"Snapshot: {len(index)} destinations, {sum(len(s) for s in index.values())} item types")
    return index
