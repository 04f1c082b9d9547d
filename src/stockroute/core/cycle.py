"""
Cycle driver.

One cycle: snapshot destinations -> list source -> route and move every
occupied slot -> emit one event per slot. `run_forever` repeats that with
an optional pause between cycles until the process is stopped.

The snapshot is frozen for the whole cycle. If an earlier slot fills a
destination, later slots routed there simply come back FULL and are picked
up again next cycle.
"""

import asyncio
import logging
import time
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field

from stockroute.core.events import EventSink, OutcomeEvent, OutcomeKind
from stockroute.core.executor import MoveStatus, execute
from stockroute.core.inventory import Inventory, ItemStack, TypeIndex
from stockroute.core.routing import DecisionKind, Reason, route
from stockroute.core.snapshot import DEFAULT_BATCH_SIZE, build_index

logger = logging.getLogger(__name__)


@dataclass
class CycleContext:
    """
    Everything a cycle needs, passed explicitly instead of living in globals.

    `destinations` is kept as a tuple: routing order is part of the
    configuration and must not change between cycles.
    """

    source: Inventory
    destinations: tuple[Inventory, ...]
    sink: EventSink
    fallback: Inventory | None = None
    batch_size: int = DEFAULT_BATCH_SIZE
    cycle: int = 0

    def __post_init__(self) -> None:
        self.destinations = tuple(self.destinations)


@dataclass
class CycleReport:
    cycle: int
    destinations_indexed: int = 0
    events: list[OutcomeEvent] = field(default_factory=list)
    skipped: bool = False  # source listing unavailable
    duration_ms: int = 0

    def counts(self) -> Counter:
        return Counter(event.kind for event in self.events)

    @property
    def units_moved(self) -> int:
        return sum(event.units_moved for event in self.events)


def _emit(sink: EventSink, event: OutcomeEvent) -> None:
    """Fire-and-forget; a broken sink must not stop the loop."""
    try:
        sink.notify(event)
    except Exception:
        logger.exception(f"Event sink {type(sink).__name__} failed")


async def _display_label(source: Inventory, slot: int, stack: ItemStack) -> str:
    try:
        detail = await source.detail(slot)
    except Exception as e:
        logger.debug(f"Detail for {source.name}[{slot}] unavailable: {e}")
        detail = None
    if detail is not None and detail.label:
        return detail.label
    return stack.display_name


async def process_slot(
    ctx: CycleContext,
    index: TypeIndex,
    slot: int,
    stack: ItemStack,
) -> OutcomeEvent:
    """Route one slot, attempt the move, and describe the outcome."""
    decision = route(slot, stack, index, ctx.destinations, ctx.fallback)

    if decision.reason is Reason.UNREADABLE:
        return OutcomeEvent(
            kind=OutcomeKind.UNREADABLE,
            cycle=ctx.cycle,
            slot=slot,
            item_id=stack.item_id,
            label=stack.display_name,
            requested=stack.quantity,
        )

    label = await _display_label(ctx.source, slot, stack)
    base = dict(cycle=ctx.cycle, slot=slot, item_id=stack.item_id, label=label, requested=stack.quantity)

    if decision.kind is not DecisionKind.MATCH:
        logger.info(f"[SKIP] No match for {label} (slot {slot}).")

    if decision.kind is DecisionKind.NONE:
        return OutcomeEvent(kind=OutcomeKind.NO_FALLBACK, **base)

    result = await execute(ctx.source, slot, decision.target)
    moved = result.status is MoveStatus.MOVED

    if decision.kind is DecisionKind.MATCH:
        kind = OutcomeKind.OK if moved else OutcomeKind.FULL
    else:
        kind = OutcomeKind.FALLBACK if moved else OutcomeKind.FULL_FALLBACK

    return OutcomeEvent(
        kind=kind,
        destination=decision.target_name,
        units_moved=result.units_moved,
        error=result.error,
        **base,
    )


async def run_cycle(ctx: CycleContext) -> CycleReport:
    """Run a single pass over the source inventory."""
    ctx.cycle += 1
    started = time.monotonic()
    report = CycleReport(cycle=ctx.cycle)

    index = await build_index(ctx.destinations, ctx.batch_size)
    report.destinations_indexed = len(index)

    try:
        listing = await ctx.source.list()
    except Exception as e:
        logger.warning(f"Listing source {ctx.source.name} failed: {e}")
        listing = None

    if listing is None:
        report.skipped = True
    else:
        # Slots are independent; sorted only so logs read top to bottom
        for slot in sorted(listing):
            event = await process_slot(ctx, index, slot, listing[slot])
            report.events.append(event)
            _emit(ctx.sink, event)

    report.duration_ms = int((time.monotonic() - started) * 1000)
    return report


async def run_forever(
    ctx: CycleContext,
    loop_delay: float = 0.0,
    max_cycles: int | None = None,
    on_cycle: Callable[[CycleReport], None] | None = None,
) -> int:
    """
    Repeat cycles until cancelled, or until `max_cycles` have run.

    Returns the number of cycles completed.
    """
    completed = 0
    while max_cycles is None or completed < max_cycles:
        report = await run_cycle(ctx)
        completed += 1
        if on_cycle is not None:
            try:
                on_cycle(report)
            except Exception:
                logger.exception(f"Cycle hook failed after cycle {report.cycle}")

        if max_cycles is not None and completed >= max_cycles:
            break
        if loop_delay > 0:
            await asyncio.sleep(loop_delay)
        else:
            await asyncio.sleep(0)
    return completed
