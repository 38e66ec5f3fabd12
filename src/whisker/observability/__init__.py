"""Loader observability — what was requested, found, and executed.

All events are frozen dataclasses with nanosecond timestamps, safe for
concurrent production from multiple threads.

Quick Start:
    >>> from whisker.observability import LoaderCollector, EventLog
    >>> log = EventLog()
    >>> collector = LoaderCollector(log)
    >>> # Pass collector to Loader(..., collector=collector)
    >>> # then inspect log.misses() or log.slug_stats()

"""

from whisker.observability.collector import LoaderCollector
from whisker.observability.events import (
    FileExecuted,
    LoaderEvent,
    PartLocated,
    PartRequested,
    now_ns,
)
from whisker.observability.log import EventLog

__all__ = [
    "EventLog",
    "FileExecuted",
    "LoaderCollector",
    "LoaderEvent",
    "PartLocated",
    "PartRequested",
    "now_ns",
]
