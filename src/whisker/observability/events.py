"""Loader events for observability.

One event per step of a part lookup, from the request through resolution
to running the winning file.  Each carries a monotonic
``timestamp_ns`` so events from several loaders interleave correctly.

Events are frozen and can be handed between threads freely.

"""

import time
from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class PartRequested:
    """A part was requested from a loader, before resolution.

    Attributes:
        slug: Requested slug.
        name: Optional qualifier, or *None*.
        prefix: Hook prefix of the loader that received the request.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    slug: str
    name: str | None
    prefix: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class PartLocated:
    """Resolution finished for a requested part.

    Attributes:
        slug: Requested slug.
        name: Optional qualifier, or *None*.
        candidates: Filenames that were tried, most specific first.
        path: Located file, or ``""`` when nothing matched.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    slug: str
    name: str | None
    candidates: tuple[str, ...]
    path: str
    timestamp_ns: int

    @property
    def found(self) -> bool:
        return bool(self.path)


@dataclass(frozen=True, slots=True)
class FileExecuted:
    """A located file was executed (or reused) by the file executor.

    Attributes:
        path: Executed file.
        reused: True if a ``once`` execution returned the earlier result.
        duration_ms: Time spent executing in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    reused: bool
    duration_ms: float
    timestamp_ns: int


# Union of whisker event types
LoaderEvent: TypeAlias = PartRequested | PartLocated | FileExecuted


def now_ns() -> int:
    """Return the current monotonic time in nanoseconds."""
    return time.monotonic_ns()
