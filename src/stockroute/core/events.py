"""
Outcome events and the sink interface.

The driver emits exactly one OutcomeEvent per occupied source slot per
cycle. Sinks (logging, console, JSONL, ...) consume them; the core keeps
none of them.
"""

from enum import Enum
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict


class OutcomeKind(Enum):
    OK = "OK"                        # moved into the matching destination
    FULL = "FULL"                    # matching destination took nothing
    FALLBACK = "FALLBACK"            # no match, moved into the fallback
    FULL_FALLBACK = "FULL(fallback)" # no match, fallback took nothing
    NO_FALLBACK = "WARN(no fallback)"
    UNREADABLE = "WARN(unreadable)"


# Kinds that signal "item did not land where it belongs"
FAILURE_TONE_KINDS = frozenset({
    OutcomeKind.FALLBACK,
    OutcomeKind.FULL_FALLBACK,
    OutcomeKind.NO_FALLBACK,
})

WARNING_KINDS = frozenset({
    OutcomeKind.FULL,
    OutcomeKind.FULL_FALLBACK,
    OutcomeKind.NO_FALLBACK,
    OutcomeKind.UNREADABLE,
})


class OutcomeEvent(BaseModel):
    """What happened to one source slot in one cycle."""

    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind
    cycle: int
    slot: int
    item_id: str | None
    label: str
    destination: str | None = None
    units_moved: int = 0
    requested: int = 0
    error: str | None = None

    @property
    def failure_tone(self) -> bool:
        return self.kind in FAILURE_TONE_KINDS

    @property
    def partial(self) -> bool:
        """Moved something, but less than the whole stack."""
        return 0 < self.units_moved < self.requested

    @property
    def is_warning(self) -> bool:
        return self.kind in WARNING_KINDS

    def describe(self) -> str:
        """One log line, in the same shape for every sink."""
        where = f"(slot {self.slot})"
        if self.kind is OutcomeKind.OK:
            line = f"[OK] Moved {self.units_moved} x {self.label} {where} -> {self.destination}"
            if self.partial:
                line += f" ({self.requested - self.units_moved} left)"
            return line
        if self.kind is OutcomeKind.FULL:
            return f"[FULL] No room in {self.destination} for {self.label} {where}."
        if self.kind is OutcomeKind.FALLBACK:
            return f"[FALLBACK] Moved {self.units_moved} x {self.label} {where} -> {self.destination}"
        if self.kind is OutcomeKind.FULL_FALLBACK:
            return f"[FULL] No room in fallback {self.destination} for {self.label} {where}."
        if self.kind is OutcomeKind.NO_FALLBACK:
            return f"[WARN] No fallback inventory; leaving {self.label} {where} in source."
        return f"[WARN] Could not read name for slot {self.slot}"


@runtime_checkable
class EventSink(Protocol):
    """Anything with notify(event). Must not block."""

    def notify(self, event: OutcomeEvent) -> None:
        ...
