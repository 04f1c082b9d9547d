"""
Stockroute - JSONL event log.

One file per run, one line per event, plus markers for run and cycle
boundaries. Easy to parse, tail -f friendly.

Usage:
    from stockroute.observability.event_log import EventLog

    log = EventLog(Path("event_logs"))
    log.run_start(source="minecraft:chest_3", destinations=12)
    log.notify(event)            # EventSink
    log.cycle_end(report)
    log.close()

Log format (JSONL):
    {"ts": "2026-01-01T17:30:00", "event": "outcome", "kind": "OK", "slot": 1, ...}
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from stockroute.core.cycle import CycleReport
from stockroute.core.events import OutcomeEvent

DEFAULT_LOG_DIR = Path("event_logs")


class EventLog:
    """
    Per-run event log written as JSONL.

    Also an EventSink, so it can sit in a CompositeSink next to the
    console and logging sinks.
    """

    def __init__(self, log_dir: Path | None = None, run_id: str | None = None, enabled: bool = True):
        self.enabled = enabled
        self.log_file = None
        self.log_path: Path | None = None

        if not enabled:
            return

        log_dir = log_dir or DEFAULT_LOG_DIR
        log_dir.mkdir(parents=True, exist_ok=True)

        if run_id is None:
            run_id = datetime.now().strftime("%Y%m%d_%H%M%S")

        self.run_id = run_id
        self.log_path = log_dir / f"run_{run_id}.jsonl"
        self.log_file = open(self.log_path, "a", encoding="utf-8")

    def _write(self, data: dict[str, Any]) -> None:
        if not self.enabled or self.log_file is None:
            return

        entry = {
            "ts": datetime.now().isoformat(),
            **data,
        }
        self.log_file.write(json.dumps(entry, default=str) + "\n")
        self.log_file.flush()

    # =========================================================================
    # Run / cycle markers
    # =========================================================================

    def run_start(self, source: str, destinations: int, fallback: str | None = None) -> None:
        self._write({
            "event": "run_start",
            "source": source,
            "destinations": destinations,
            "fallback": fallback,
        })

    def cycle_end(self, report: CycleReport) -> None:
        self._write({
            "event": "cycle_end",
            "cycle": report.cycle,
            "skipped": report.skipped,
            "destinations_indexed": report.destinations_indexed,
            "units_moved": report.units_moved,
            "duration_ms": report.duration_ms,
            "counts": {kind.value: n for kind, n in report.counts().items()},
        })

    def run_end(self, cycles: int) -> None:
        self._write({"event": "run_end", "cycles": cycles})

    # =========================================================================
    # EventSink
    # =========================================================================

    def notify(self, event: OutcomeEvent) -> None:
        self._write({
            "event": "outcome",
            "kind": event.kind.value,
            "cycle": event.cycle,
            "slot": event.slot,
            "item_id": event.item_id,
            "label": event.label,
            "destination": event.destination,
            "units_moved": event.units_moved,
            "requested": event.requested,
            "partial": event.partial,
            "error": event.error,
        })

    def close(self) -> None:
        if self.log_file is not None:
            self.log_file.close()
            self.log_file = None

    def __enter__(self) -> "EventLog":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


def read_events(path: Path) -> list[dict[str, Any]]:
    """Parse a run log back into dicts."""
    with open(path, encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]
