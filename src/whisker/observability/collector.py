"""Loader collector — records resolution and execution events.

A ``LoaderCollector`` is handed to :class:`whisker.loader.Loader` and to
:class:`whisker.executor.FileExecutor`; both record into the same
``EventLog``.

The collector holds no state of its own beyond the log, so one instance can
be shared by several loaders and threads.

"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from whisker.observability.events import (
    FileExecuted,
    PartLocated,
    PartRequested,
    now_ns,
)
from whisker.observability.log import EventLog


class LoaderCollector:
    """Event collector for loaders and executors.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record_request(self, slug: str, name: str | None, *, prefix: str) -> None:
        """Record that a part was requested."""
        self._log.append(
            PartRequested(slug=slug, name=name, prefix=prefix, timestamp_ns=now_ns())
        )

    def record_located(
        self,
        slug: str,
        name: str | None,
        candidates: Sequence[str],
        located: Path | None,
    ) -> None:
        """Record the outcome of resolving a part."""
        self._log.append(
            PartLocated(
                slug=slug,
                name=name,
                candidates=tuple(candidates),
                path=str(located) if located is not None else "",
                timestamp_ns=now_ns(),
            )
        )

    def record_execute(
        self, path: Path, *, reused: bool = False, duration_ms: float = 0.0,
    ) -> None:
        """Record a file execution."""
        self._log.append(
            FileExecuted(
                path=str(path),
                reused=reused,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )
