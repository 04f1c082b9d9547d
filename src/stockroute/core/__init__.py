"""
Stockroute core - snapshot, routing, moves, and the cycle driver.

Usage:
    from stockroute.core import CycleContext, run_forever

    ctx = CycleContext(source=src, destinations=dests, fallback=fb, sink=sink)
    await run_forever(ctx, loop_delay=0)
"""

from stockroute.core.cycle import CycleContext, CycleReport, process_slot, run_cycle, run_forever
from stockroute.core.events import EventSink, OutcomeEvent, OutcomeKind
from stockroute.core.executor import MoveResult, MoveStatus, classify, execute
from stockroute.core.inventory import Inventory, ItemStack, Listing, TypeIndex
from stockroute.core.routing import Decision, DecisionKind, Reason, find_match, route
from stockroute.core.snapshot import DEFAULT_BATCH_SIZE, build_index, waves

__all__ = [
    "CycleContext",
    "CycleReport",
    "DEFAULT_BATCH_SIZE",
    "Decision",
    "DecisionKind",
    "EventSink",
    "Inventory",
    "ItemStack",
    "Listing",
    "MoveResult",
    "MoveStatus",
    "OutcomeEvent",
    "OutcomeKind",
    "Reason",
    "TypeIndex",
    "build_index",
    "classify",
    "execute",
    "find_match",
    "process_slot",
    "route",
    "run_cycle",
    "run_forever",
    "waves",
]
