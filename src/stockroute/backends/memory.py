"""
In-process inventories.

MemoryInventory behaves like a chest: numbered slots starting at 1, a
per-slot stack limit, and pushes that first top up existing stacks of the
same type and then fill empty slots. Used by the `run`/`check` CLI
commands against a YAML world file, and throughout the tests.

World file format:

    source: minecraft:chest_3
    inventories:
      minecraft:chest_3:
        size: 27
        slots:
          1: {item: minecraft:stone, count: 5, label: Stone}
      minecraft:chest_4:
        slots:
          1: {item: minecraft:oak_log, count: 12}
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from stockroute.core.inventory import Inventory, ItemStack, Listing
from stockroute.errors import InventoryQueryError, TransferError, WorldFileError

DEFAULT_SIZE = 27
DEFAULT_STACK_LIMIT = 64


class MemoryInventory(Inventory):
    """
    A chest held in memory.

    Failure injection:
        offline: list() returns None (transient unavailability)
        broken: list() and push() raise
        locked: accepts nothing, every push into it moves zero units
        latency: seconds to await inside each call
    """

    def __init__(
        self,
        name: str,
        size: int = DEFAULT_SIZE,
        stack_limit: int = DEFAULT_STACK_LIMIT,
        slots: dict[int, ItemStack] | None = None,
        *,
        offline: bool = False,
        broken: bool = False,
        locked: bool = False,
        latency: float = 0.0,
    ):
        self._name = name
        self.size = size
        self.stack_limit = stack_limit
        self.slots: dict[int, ItemStack] = dict(slots or {})
        self.offline = offline
        self.broken = broken
        self.locked = locked
        self.latency = latency
        self.list_calls = 0
        self.push_calls = 0

    @property
    def name(self) -> str:
        return self._name

    async def _tick(self) -> None:
        await asyncio.sleep(self.latency)

    async def list(self) -> Listing | None:
        self.list_calls += 1
        await self._tick()
        if self.broken:
            raise InventoryQueryError(self.name)
        if self.offline:
            return None
        return dict(self.slots)

    async def detail(self, slot: int) -> ItemStack | None:
        return self.slots.get(slot)

    async def push(self, slot: int, destination: Inventory) -> int:
        self.push_calls += 1
        await self._tick()
        if self.broken:
            raise TransferError(self.name, slot, destination.name)
        if not isinstance(destination, MemoryInventory):
            raise TransferError(self.name, slot, destination.name, "destination is not a memory inventory")
        if destination.broken:
            raise TransferError(self.name, slot, destination.name, "destination unavailable")

        stack = self.slots.get(slot)
        if stack is None:
            return 0

        moved = destination.accept(stack)
        remaining = stack.quantity - moved
        if remaining > 0:
            self.slots[slot] = stack.model_copy(update={"quantity": remaining})
        else:
            del self.slots[slot]
        return moved

    def accept(self, stack: ItemStack) -> int:
        """Store as much of `stack` as fits. Returns the units taken."""
        if self.locked:
            return 0

        remaining = stack.quantity
        # Top up existing stacks first
        for slot in sorted(self.slots):
            if remaining == 0:
                break
            held = self.slots[slot]
            if held.item_id != stack.item_id:
                continue
            room = self.stack_limit - held.quantity
            if room > 0:
                take = min(room, remaining)
                self.slots[slot] = held.model_copy(update={"quantity": held.quantity + take})
                remaining -= take

        # Then empty slots
        for slot in range(1, self.size + 1):
            if remaining == 0:
                break
            if slot in self.slots:
                continue
            take = min(self.stack_limit, remaining)
            self.slots[slot] = stack.model_copy(update={"quantity": take})
            remaining -= take

        return stack.quantity - remaining

    def count(self, item_id: str) -> int:
        return sum(s.quantity for s in self.slots.values() if s.item_id == item_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "size": self.size,
            "slots": {
                slot: {"item": s.item_id, "count": s.quantity, **({"label": s.label} if s.label else {})}
                for slot, s in sorted(self.slots.items())
            },
        }


class MemoryWorld:
    """Name -> inventory lookup for a set of memory inventories."""

    def __init__(self, inventories: list[MemoryInventory] | None = None, source: str | None = None):
        self.inventories: dict[str, MemoryInventory] = {}
        self.source = source
        for inv in inventories or []:
            self.add(inv)

    def add(self, inventory: MemoryInventory) -> MemoryInventory:
        self.inventories[inventory.name] = inventory
        return inventory

    def get(self, name: str) -> MemoryInventory | None:
        return self.inventories.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self.inventories

    def __len__(self) -> int:
        return len(self.inventories)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.source:
            data["source"] = self.source
        data["inventories"] = {name: inv.to_dict() for name, inv in self.inventories.items()}
        return data


def _parse_stack(raw: Any, where: str) -> ItemStack:
    if isinstance(raw, str):
        return ItemStack(item_id=raw)
    if not isinstance(raw, dict):
        raise WorldFileError(f"{where}: expected a mapping or an item id, got {type(raw).__name__}")
    try:
        return ItemStack(
            item_id=raw.get("item"),
            quantity=raw.get("count", 1),
            label=raw.get("label"),
        )
    except ValidationError as e:
        raise WorldFileError(f"{where}: {e}") from e


def world_from_dict(data: dict[str, Any]) -> MemoryWorld:
    """Build a world from the parsed YAML structure."""
    if not isinstance(data, dict) or not isinstance(data.get("inventories"), dict):
        raise WorldFileError("world file needs an 'inventories' mapping")

    world = MemoryWorld(source=data.get("source"))
    for name, entry in data["inventories"].items():
        entry = entry or {}
        if not isinstance(entry, dict):
            raise WorldFileError(f"{name}: expected a mapping, got {type(entry).__name__}")
        slots = {}
        for slot, raw in (entry.get("slots") or {}).items():
            try:
                slot_no = int(slot)
            except (TypeError, ValueError) as e:
                raise WorldFileError(f"{name}: slot {slot!r} is not an integer") from e
            slots[slot_no] = _parse_stack(raw, f"{name}[{slot}]")
        world.add(MemoryInventory(
            name,
            size=entry.get("size", DEFAULT_SIZE),
            stack_limit=entry.get("stack_limit", DEFAULT_STACK_LIMIT),
            slots=slots,
            locked=entry.get("locked", False),
        ))
    return world


def load_world(path: Path | str) -> MemoryWorld:
    """Load a YAML world file."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise WorldFileError(f"cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise WorldFileError(f"invalid YAML in {path}: {e}") from e
    return world_from_dict(data)


def save_world(world: MemoryWorld, path: Path | str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(world.to_dict(), f, sort_keys=False)
