"""
Stockroute - Exception hierarchy.

Only SourceUnavailableError and WorldFileError are meant to escape to the
caller, and only at startup. Everything raised while the loop is running is
caught at the component boundary and degraded (see core.snapshot and
core.executor).
"""


class StockRouteError(Exception):
    """Base class for all stockroute errors."""


class InventoryQueryError(StockRouteError):
    """Listing an inventory's contents failed."""

    def __init__(self, inventory: str, message: str = "listing failed"):
        self.inventory = inventory
        super().__init__(f"{inventory}: {message}")


class TransferError(StockRouteError):
    """The transfer primitive failed outright (as opposed to moving zero units)."""

    def __init__(self, source: str, slot: int, destination: str, message: str = "transfer failed"):
        self.source = source
        self.slot = slot
        self.destination = destination
        super().__init__(f"{source}[{slot}] -> {destination}: {message}")


class SourceUnavailableError(StockRouteError):
    """The source inventory cannot be reached. Fatal before the loop starts."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Source inventory '{name}' not found.")


class WorldFileError(StockRouteError):
    """A world description file could not be loaded."""
