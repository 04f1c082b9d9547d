"""
Routing decisions.

Pure functions of (stack, snapshot, destination order). No I/O happens here.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from stockroute.core.inventory import Inventory, ItemStack, TypeIndex


class DecisionKind(Enum):
    MATCH = "match"          # a destination already holds this type
    FALLBACK = "fallback"    # no match, send to the fallback inventory
    NONE = "none"            # leave the item where it is


class Reason(Enum):
    MATCHED = "matched"
    NO_MATCH = "no match"
    NO_FALLBACK = "no fallback configured"
    UNREADABLE = "unreadable identifier"


@dataclass(frozen=True)
class Decision:
    """Where one source slot should go this cycle."""

    slot: int
    kind: DecisionKind
    reason: Reason
    target: Inventory | None = None

    @property
    def target_name(self) -> str | None:
        return self.target.name if self.target is not None else None


def find_match(
    item_id: str,
    index: TypeIndex,
    destinations: Sequence[Inventory],
) -> Inventory | None:
    """First destination, in the given order, whose snapshot holds item_id."""
    for destination in destinations:
        if item_id in index.get(destination.name, ()):
            return destination
    return None


def route(
    slot: int,
    stack: ItemStack,
    index: TypeIndex,
    destinations: Sequence[Inventory],
    fallback: Inventory | None = None,
) -> Decision:
    """
    Decide where the stack in `slot` goes.

    First match in destination order wins; ties are never broken by fill
    level or any other property. Unmatched stacks go to `fallback` when
    one is configured and stay put otherwise.
    """
    if not stack.readable:
        return Decision(slot, DecisionKind.NONE, Reason.UNREADABLE)

    target = find_match(stack.item_id, index, destinations)
    if target is not None:
        return Decision(slot, DecisionKind.MATCH, Reason.MATCHED, target)

    if fallback is not None:
        return Decision(slot, DecisionKind.FALLBACK, Reason.NO_MATCH, fallback)

    return Decision(slot, DecisionKind.NONE, Reason.NO_FALLBACK)
