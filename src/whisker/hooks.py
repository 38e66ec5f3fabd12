"""Hook registry — filters and actions for extending resolution.

Filters rewrite a value (candidate filenames, search-path mappings); actions
are fire-and-forget notifications.  Handlers run in ascending priority order,
then in registration order, so the last filter to return wins.

Hook names used by :class:`whisker.loader.Loader`::

    get_part_{slug}                action, (slug, name)
    {prefix}_get_part_{slug}       action, (slug, name)
    {prefix}_get_part              filter, (filenames, slug, name)
    {prefix}_file_paths            filter, (mapping,)

Thread Safety:
    Registration and dispatch take ``self._lock``.  Handlers are snapshotted
    before they run, so a handler may register further handlers.

"""

from __future__ import annotations

import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from whisker._types import ActionFunc, FilterFunc

DEFAULT_PRIORITY = 10


@dataclass(frozen=True, slots=True)
class _Registration:
    handler: Any
    priority: int
    order: int


class HookRegistry:
    """Ordered filter and action handlers keyed by event name."""

    __slots__ = ("_actions", "_counter", "_filters", "_lock")

    def __init__(self) -> None:
        self._filters: defaultdict[str, list[_Registration]] = defaultdict(list)
        self._actions: defaultdict[str, list[_Registration]] = defaultdict(list)
        self._counter = 0
        self._lock = threading.Lock()

    # ----- registration -----

    def add_filter(
        self, event: str, handler: FilterFunc, priority: int = DEFAULT_PRIORITY,
    ) -> None:
        """Register *handler* to rewrite the value passed through *event*."""
        self._register(self._filters, event, handler, priority)

    def add_action(
        self, event: str, handler: ActionFunc, priority: int = DEFAULT_PRIORITY,
    ) -> None:
        """Register *handler* to be notified when *event* fires."""
        self._register(self._actions, event, handler, priority)

    def remove_filter(self, event: str, handler: FilterFunc) -> bool:
        """Unregister *handler* from *event*.  Returns whether it was present."""
        return self._unregister(self._filters, event, handler)

    def remove_action(self, event: str, handler: ActionFunc) -> bool:
        """Unregister *handler* from *event*.  Returns whether it was present."""
        return self._unregister(self._actions, event, handler)

    def has_filter(self, event: str) -> bool:
        with self._lock:
            return bool(self._filters.get(event))

    def has_action(self, event: str) -> bool:
        with self._lock:
            return bool(self._actions.get(event))

    # ----- dispatch -----

    def apply_filters(self, event: str, value: Any, *context: Any) -> Any:
        """Pass *value* through every filter for *event* and return the result.

        Each handler is called as ``handler(value, *context)`` and its return
        value becomes the input of the next one.

        """
        for handler in self._snapshot(self._filters, event):
            value = handler(value, *context)
        return value

    def do_action(self, event: str, *context: Any) -> None:
        """Call every action handler for *event* with *context*."""
        for handler in self._snapshot(self._actions, event):
            handler(*context)

    # ----- internals -----

    def _register(
        self,
        table: defaultdict[str, list[_Registration]],
        event: str,
        handler: Any,
        priority: int,
    ) -> None:
        with self._lock:
            self._counter += 1
            table[event].append(_Registration(handler, priority, self._counter))
            table[event].sort(key=lambda r: (r.priority, r.order))

    def _unregister(
        self,
        table: defaultdict[str, list[_Registration]],
        event: str,
        handler: Any,
    ) -> bool:
        with self._lock:
            registrations = table.get(event, [])
            kept = [r for r in registrations if r.handler != handler]
            if len(kept) == len(registrations):
                return False
            table[event] = kept
            return True

    def _snapshot(
        self, table: defaultdict[str, list[_Registration]], event: str,
    ) -> list[Any]:
        with self._lock:
            return [r.handler for r in table.get(event, ())]
