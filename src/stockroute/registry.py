"""
Stockroute - Inventory handle registry.

Resolves configured names into inventory handles once, at startup, and
hands them out in a fixed order for the life of the run.

Usage:
    from stockroute.registry import InventoryRegistry

    registry = InventoryRegistry.from_settings(settings, world.get)
    registry.report()
    ctx = registry.build_context(sink, batch_size=settings.batch_size)
"""

import logging
from collections.abc import Callable, Iterable

from stockroute.config import RouterSettings
from stockroute.core.cycle import CycleContext
from stockroute.core.events import EventSink
from stockroute.core.inventory import Inventory
from stockroute.errors import SourceUnavailableError

logger = logging.getLogger(__name__)

# name -> handle, or None when nothing is attached under that name
Lookup = Callable[[str], Inventory | None]


class InventoryRegistry:
    """The source, the ordered destinations, and the optional fallback."""

    def __init__(
        self,
        source: Inventory,
        destinations: Iterable[Inventory],
        fallback: Inventory | None = None,
        fallback_name: str | None = None,
    ):
        self._source = source
        self._destinations = tuple(destinations)
        self._fallback = fallback
        self.fallback_name = fallback_name or (fallback.name if fallback else None)

    @classmethod
    def resolve(
        cls,
        lookup: Lookup,
        source_name: str,
        destination_names: Iterable[str],
        fallback_name: str | None = None,
    ) -> "InventoryRegistry":
        """
        Look up every configured name.

        Raises:
            SourceUnavailableError: if the source cannot be found
        """
        source = lookup(source_name)
        if source is None:
            raise SourceUnavailableError(source_name)

        fallback = lookup(fallback_name) if fallback_name else None

        # The source and fallback never take part in matching
        excluded = {source_name, fallback_name}
        destinations = []
        seen: set[str] = set()
        missing = 0
        for name in destination_names:
            # Each name once; the first occurrence keeps its place
            if name in excluded or name in seen:
                continue
            seen.add(name)
            inventory = lookup(name)
            if inventory is None:
                missing += 1
                continue
            destinations.append(inventory)

        if missing:
            logger.debug(f"{missing} configured destinations not found")

        return cls(source, destinations, fallback, fallback_name)

    @classmethod
    def from_settings(cls, settings: RouterSettings, lookup: Lookup) -> "InventoryRegistry":
        return cls.resolve(
            lookup,
            settings.source_name,
            settings.destination_names(),
            settings.fallback_name,
        )

    def list_destinations(self) -> tuple[Inventory, ...]:
        return self._destinations

    def source(self) -> Inventory:
        return self._source

    def fallback(self) -> Inventory | None:
        return self._fallback

    def report(self) -> None:
        """Log what was found. Missing pieces are warnings, never errors."""
        if not self._destinations:
            logger.warning("[INIT] No destination inventories found.")
        else:
            logger.info(f"[INIT] Dest inventories: {len(self._destinations)}")

        if self._fallback is not None:
            logger.info(f"[INIT] Fallback inventory available: {self._fallback.name}")
        elif self.fallback_name:
            logger.warning(f"[WARN] Fallback inventory not found: {self.fallback_name}")
        else:
            logger.info("[INIT] No fallback configured; unmatched items stay in the source.")

    def build_context(self, sink: EventSink, batch_size: int) -> CycleContext:
        return CycleContext(
            source=self._source,
            destinations=self._destinations,
            fallback=self._fallback,
            sink=sink,
            batch_size=batch_size,
        )
