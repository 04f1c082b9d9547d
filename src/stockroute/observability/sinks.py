"""
Event sinks.

Each sink turns OutcomeEvents into some side effect. None of them may
block the loop or raise into it; the driver guards notify() anyway.
"""

import logging

from rich.console import Console
from rich.text import Text

from stockroute.core.events import EventSink, OutcomeEvent, OutcomeKind

logger = logging.getLogger(__name__)


KIND_STYLES = {
    OutcomeKind.OK: "green",
    OutcomeKind.FULL: "yellow",
    OutcomeKind.FALLBACK: "cyan",
    OutcomeKind.FULL_FALLBACK: "yellow",
    OutcomeKind.NO_FALLBACK: "red",
    OutcomeKind.UNREADABLE: "red",
}


class LoggingSink:
    """Writes one log record per event; warnings for anything that didn't land."""

    def __init__(self, name: str = "stockroute.events"):
        self.logger = logging.getLogger(name)

    def notify(self, event: OutcomeEvent) -> None:
        level = logging.WARNING if event.is_warning else logging.INFO
        self.logger.log(level, event.describe())


class ConsoleSink:
    """
    Monitor-style output on a rich console.

    With `bell` set, events that carry a failure tone ring the terminal bell.
    """

    def __init__(self, console: Console | None = None, bell: bool = False):
        self.console = console or Console()
        self.bell = bell

    def notify(self, event: OutcomeEvent) -> None:
        style = KIND_STYLES.get(event.kind, "white")
        self.console.print(Text(event.describe(), style=style))
        if self.bell and event.failure_tone:
            self.console.bell()


class RecordingSink:
    """Keeps every event in memory."""

    def __init__(self):
        self.events: list[OutcomeEvent] = []

    def notify(self, event: OutcomeEvent) -> None:
        self.events.append(event)

    def kinds(self) -> list[OutcomeKind]:
        return [e.kind for e in self.events]

    def clear(self) -> None:
        self.events.clear()


class CompositeSink:
    """Fans each event out to several sinks; one failing sink doesn't starve the rest."""

    def __init__(self, *sinks: EventSink):
        self.sinks = list(sinks)

    def add(self, sink: EventSink) -> None:
        self.sinks.append(sink)

    def notify(self, event: OutcomeEvent) -> None:
        for sink in self.sinks:
            try:
                sink.notify(event)
            except Exception:
                logger.exception(f"Sink {type(sink).__name__} failed")
