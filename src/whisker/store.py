"""Keyed stores — per-template key/value data for loaded parts.

Two levels: template name -> key -> value.  ``TemplateData`` slugifies both
levels on insert and lookup (``"Order Summary"`` and ``"order-summary"`` are
the same template); ``Data`` stores names as given.

Conflicts and misses are returned, not raised::

    store = TemplateData()
    store.add("order", "is_private", True)       # True
    store.add("order", "is_private", False)      # AlreadyExists(...), value kept
    store.update("order", "post", post)          # True, always overwrites

    store.get("order", "missing", fallback="-")  # "-"
    result = store.lookup("order", "missing")    # KeyNotFound(...)
    if not result:
        ...

The process-wide store is owned by an explicit :class:`StoreContext` rather
than a module global: construct one context at startup, pass it to whatever
needs the data, and its ``data`` is created on first access and reused.

Thread Safety:
    Every store operation takes ``self._lock`` (an ``RLock``, since
    ``update`` creates the template entry through ``add_template``).

"""

from __future__ import annotations

import re
import threading
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Literal, TypeAlias
from urllib.parse import quote

_TAG_RE = re.compile(r"<[^>]*>")
_STRAY_PERCENT_RE = re.compile(r"%(?![0-9a-fA-F]{2})")
_INVALID_RE = re.compile(r"[^%a-z0-9_\s-]")
_SPACE_RE = re.compile(r"\s+")
_DASHES_RE = re.compile(r"-{2,}")


def sanitize_key(value: str) -> str:
    """Slugify *value* for use as a template or key name.

    ``"<b>Order</b> Summary.v2"`` -> ``"order-summary-v2"``

    Tags are stripped and non-ASCII characters are percent-encoded as UTF-8
    (``"café"`` -> ``"caf%c3%a9"``), so distinct names stay distinct.  The
    result is lowercased, periods and whitespace become dashes, anything
    else outside ``[%a-z0-9_-]`` is dropped, and runs of dashes collapse.

    """
    value = _STRAY_PERCENT_RE.sub("", _TAG_RE.sub("", str(value)))
    value = "".join(char if char.isascii() else quote(char) for char in value)
    value = value.lower().replace(".", "-")
    value = _INVALID_RE.sub("", value)
    value = _SPACE_RE.sub("-", value.strip())
    return _DASHES_RE.sub("-", value).strip("-")


# ---------------------------------------------------------------------------
# Result values
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Found:
    """A successful lookup."""

    value: Any

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class AlreadyExists:
    """An ``add`` that would have overwritten existing data."""

    template: str
    key: str | None = None

    def __bool__(self) -> bool:
        return False

    @property
    def message(self) -> str:
        if self.key is None:
            return f"Template {self.template!r} already exists."
        return f"Key {self.key!r} already exists in template {self.template!r}."


@dataclass(frozen=True, slots=True)
class KeyNotFound:
    """A ``lookup`` for a template or key that is not stored."""

    template: str
    key: str | None = None

    def __bool__(self) -> bool:
        return False

    @property
    def message(self) -> str:
        if self.key is None:
            return f"Template {self.template!r} does not exist."
        return f"Key {self.key!r} does not exist in template {self.template!r}."


AddResult: TypeAlias = Literal[True] | AlreadyExists
LookupResult: TypeAlias = Found | KeyNotFound


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------


class KeyedStore:
    """Two-level mapping with add/update/get semantics.

    Subclasses choose how names are normalized by overriding
    :meth:`normalize`.

    Args:
        data: Initial contents, ``{template: {key: value}}``.

    """

    __slots__ = ("_data", "_lock")

    def __init__(self, data: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self._lock = threading.RLock()
        self._data: dict[str, dict[str, Any]] = {}
        for template, values in (data or {}).items():
            self._data[self.normalize(template)] = {
                self.normalize(key): value for key, value in values.items()
            }

    def normalize(self, name: str) -> str:
        return name

    # ----- existence -----

    def template_exists(self, template: str) -> bool:
        with self._lock:
            return self.normalize(template) in self._data

    def exists(self, template: str, key: str) -> bool:
        """Whether *key* is stored under *template*."""
        with self._lock:
            values = self._data.get(self.normalize(template))
            return values is not None and self.normalize(key) in values

    key_exists = exists

    # ----- writes -----

    def add_template(
        self, template: str, data: Mapping[str, Any] | None = None,
    ) -> AddResult:
        """Create *template*, seeded with *data*.  Never replaces one."""
        with self._lock:
            name = self.normalize(template)
            if name in self._data:
                return AlreadyExists(name)
            self._data[name] = {
                self.normalize(key): value for key, value in (data or {}).items()
            }
            return True

    def add(self, template: str, key: str, value: Any) -> AddResult:
        """Store *value* unless *key* is already set under *template*."""
        with self._lock:
            if self.exists(template, key):
                return AlreadyExists(self.normalize(template), self.normalize(key))
            return self.update(template, key, value)

    def update(self, template: str, key: str, value: Any) -> Literal[True]:
        """Store *value*, overwriting any existing one and creating *template*."""
        with self._lock:
            self.add_template(template)
            self._data[self.normalize(template)][self.normalize(key)] = value
            return True

    # ----- reads -----

    def get(self, template: str, key: str | None = None, fallback: Any = None) -> Any:
        """Return the value for *key* (or the whole template), else *fallback*.

        Never fails.  With no *key* (or an empty one), returns a copy of the
        template's mapping.

        """
        result = self.lookup(template, key)
        if isinstance(result, Found):
            return result.value
        return fallback

    def lookup(self, template: str, key: str | None = None) -> LookupResult:
        """Return ``Found(value)`` or ``KeyNotFound`` for *template* / *key*."""
        with self._lock:
            name = self.normalize(template)
            values = self._data.get(name)
            if values is None:
                return KeyNotFound(name, self.normalize(key) if key else None)
            if not key:
                return Found(dict(values))
            normalized = self.normalize(key)
            if normalized not in values:
                return KeyNotFound(name, normalized)
            return Found(values[normalized])

    def templates(self) -> list[str]:
        with self._lock:
            return list(self._data)

    def __contains__(self, template: object) -> bool:
        return isinstance(template, str) and self.template_exists(template)

    def __iter__(self) -> Iterator[str]:
        return iter(self.templates())

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


class Data(KeyedStore):
    """Per-instance store that keeps names exactly as given."""

    __slots__ = ()

    def set(self, template: str, key: str, value: Any) -> None:
        """Store *value* under *template* / *key*, overwriting."""
        self.update(template, key, value)

    def set_template(self, template: str, values: Mapping[str, Any]) -> None:
        """Replace the whole mapping stored for *template*."""
        with self._lock:
            self._data[self.normalize(template)] = dict(values)


class TemplateData(KeyedStore):
    """Store whose template and key names are slugified with :func:`sanitize_key`."""

    __slots__ = ()

    def normalize(self, name: str) -> str:
        return sanitize_key(name)


class StoreContext:
    """Owns the long-lived ``TemplateData`` for a process.

    Construct once at startup and pass it around.  :attr:`data` is created on
    first access and the same instance is returned for the lifetime of the
    context.

    Args:
        factory: Creates the store on first access.

    """

    __slots__ = ("_data", "_factory", "_lock")

    def __init__(self, factory: Callable[[], TemplateData] = TemplateData) -> None:
        self._factory = factory
        self._data: TemplateData | None = None
        self._lock = threading.Lock()

    @property
    def data(self) -> TemplateData:
        with self._lock:
            if self._data is None:
                self._data = self._factory()
            return self._data

    @property
    def initialized(self) -> bool:
        """Whether :attr:`data` has been created yet."""
        with self._lock:
            return self._data is not None
