"""Event log — what loaders asked for, what they found, what they ran.

Answers the questions that come up when a theme override "doesn't take":
which slugs were requested, which resolved to nothing, which file won, and
how often executed files were reused::

    log = EventLog()
    loader = template_loader(..., collector=LoaderCollector(log))
    ...
    log.misses()                 # PartLocated events with no match
    log.query(slug="order")      # everything about "order", newest first
    log.slug_stats()["order"]    # {"requested": 3, "found": 2, "missing": 1}

Thread Safety:
    Every method takes ``self._lock``; events themselves are immutable.

"""

import threading
from collections import deque
from typing import Any

from whisker.observability.events import (
    FileExecuted,
    LoaderEvent,
    PartLocated,
    PartRequested,
)


class EventLog:
    """Bounded, oldest-dropped store of loader events.

    Args:
        max_events: Number of events kept before the oldest are discarded.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 10_000) -> None:
        self._max_events = max_events
        self._events: deque[LoaderEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: LoaderEvent) -> None:
        with self._lock:
            self._events.append(event)

    def query(
        self,
        *,
        event_type: type | None = None,
        slug: str | None = None,
        found: bool | None = None,
        path: str | None = None,
        limit: int = 100,
    ) -> list[LoaderEvent]:
        """Return matching events, newest first.

        Args:
            event_type: Only events of this class.
            slug: Only request/locate events for this slug.  Executions carry
                no slug and never match.
            found: Only locate events that did (``True``) or did not
                (``False``) resolve to a file.
            path: Only events whose file path contains this substring.
            limit: Maximum number of events returned.

        """
        with self._lock:
            snapshot = list(self._events)

        results: list[LoaderEvent] = []
        for event in reversed(snapshot):
            if len(results) >= limit:
                break
            if event_type is not None and not isinstance(event, event_type):
                continue
            if slug is not None and getattr(event, "slug", None) != slug:
                continue
            if found is not None and (
                not isinstance(event, PartLocated) or event.found != found
            ):
                continue
            if path is not None and path not in getattr(event, "path", ""):
                continue
            results.append(event)
        return results

    def misses(self, limit: int = 100) -> list[PartLocated]:
        """Locate events that matched no file, newest first."""
        return self.query(found=False, limit=limit)  # type: ignore[return-value]

    def recent(self, n: int = 20) -> list[LoaderEvent]:
        """The *n* most recent events, oldest first."""
        with self._lock:
            items = list(self._events)
        return items[-n:]

    def clear(self) -> int:
        """Drop every event; return how many there were."""
        with self._lock:
            count = len(self._events)
            self._events.clear()
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def slug_stats(self) -> dict[str, dict[str, int]]:
        """Per-slug counts of requests and of found/missing resolutions."""
        with self._lock:
            events = list(self._events)
        return _count_slugs(events)

    def stats(self) -> dict[str, Any]:
        """Summary: per-slug resolution counts plus execution totals."""
        with self._lock:
            events = list(self._events)

        executions = [e for e in events if isinstance(e, FileExecuted)]
        return {
            "total": len(events),
            "max_events": self._max_events,
            "slugs": _count_slugs(events),
            "executed": sum(1 for e in executions if not e.reused),
            "reused": sum(1 for e in executions if e.reused),
            "execute_ms": sum(e.duration_ms for e in executions),
        }


def _count_slugs(events: list[LoaderEvent]) -> dict[str, dict[str, int]]:
    per_slug: dict[str, dict[str, int]] = {}
    for event in events:
        if not isinstance(event, (PartRequested, PartLocated)):
            continue
        counts = per_slug.setdefault(
            event.slug, {"requested": 0, "found": 0, "missing": 0},
        )
        if isinstance(event, PartRequested):
            counts["requested"] += 1
        elif event.found:
            counts["found"] += 1
        else:
            counts["missing"] += 1
    return per_slug
