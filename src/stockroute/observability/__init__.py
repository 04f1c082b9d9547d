"""
Stockroute observability - where outcome events go.
"""

from stockroute.observability.event_log import EventLog, read_events
from stockroute.observability.sinks import CompositeSink, ConsoleSink, LoggingSink, RecordingSink

__all__ = ["CompositeSink", "ConsoleSink", "EventLog", "LoggingSink", "RecordingSink", "read_events"]
