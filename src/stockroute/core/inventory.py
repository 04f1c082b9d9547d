"""
Inventory contract.

An Inventory is an opaque handle owned by whoever registered it. The core
only reads through it (`list`, `detail`) and asks it to push a slot into
another inventory (`push`). Backends implement this class; see
stockroute.backends.memory for the in-process one.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, Field


class ItemStack(BaseModel):
    """
    One occupied slot.

    Only `item_id` takes part in routing. `quantity` and `label` are carried
    along for display and accounting.
    """

    model_config = ConfigDict(frozen=True)

    item_id: str | None  # None or "" when the identifier cannot be read
    quantity: int = Field(default=1, ge=1)
    label: str | None = None

    @property
    def readable(self) -> bool:
        return bool(self.item_id)

    @property
    def display_name(self) -> str:
        return self.label or self.item_id or "Unknown item"


# slot index -> stack; only occupied slots appear
Listing = dict[int, ItemStack]

# inventory name -> item types present at snapshot time
TypeIndex = dict[str, frozenset[str]]


class Inventory(ABC):
    """Handle to one storage container."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable identity (peripheral name, address, ...)."""

    @abstractmethod
    async def list(self) -> Listing | None:
        """
        Current contents.

        Returns None when the listing is unavailable. May also raise
        InventoryQueryError; callers treat both the same way.
        """

    @abstractmethod
    async def push(self, slot: int, destination: Inventory) -> int:
        """
        Move the stack at `slot` into `destination`.

        Returns the number of units actually moved. Zero means the
        destination had no room, which is a normal outcome. Raises
        TransferError when the call itself fails.
        """

    async def detail(self, slot: int) -> ItemStack | None:
        """Richer description of one slot (display label). Optional."""
        return None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
