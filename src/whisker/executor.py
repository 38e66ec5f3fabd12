"""File executor — run or parse a located file and return what it yields.

Dispatch is by suffix::

    .py            run with ``runpy``; yields the file's public namespace
    .yaml / .yml   ``yaml.safe_load``
    .toml          ``tomllib``
    .json          ``json``
    anything else  the file's text

Python files see the loader's template scope as pre-set globals, so a
template can read ``yourplugin_data.title`` without importing anything.
Names injected that way, private names (leading ``_``), and imported modules
are left out of the yielded namespace::

    # config/order.py
    import os

    statuses = ["pending", "paid"]
    per_page = int(os.environ.get("ORDER_PAGE", "20"))

    -> {"statuses": ["pending", "paid"], "per_page": 20}

"""

from __future__ import annotations

import json
import runpy
import threading
import time
import tomllib
import types
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from whisker._errors import LoadError

if TYPE_CHECKING:
    from whisker._types import Scope
    from whisker.observability.collector import LoaderCollector


def _run_python(path: Path, scope: Scope) -> dict[str, Any]:
    namespace = runpy.run_path(str(path), init_globals=dict(scope))
    return {
        key: value
        for key, value in namespace.items()
        if not key.startswith("_")
        and key not in scope
        and not isinstance(value, types.ModuleType)
    }


def _load_yaml(path: Path, scope: Scope) -> Any:
    return yaml.safe_load(path.read_text(encoding="utf-8"))


def _load_toml(path: Path, scope: Scope) -> Any:
    return tomllib.loads(path.read_text(encoding="utf-8"))


def _load_json(path: Path, scope: Scope) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _read_text(path: Path, scope: Scope) -> str:
    return path.read_text(encoding="utf-8")


_HANDLERS = {
    ".py": _run_python,
    ".yaml": _load_yaml,
    ".yml": _load_yaml,
    ".toml": _load_toml,
    ".json": _load_json,
}


class FileExecutor:
    """Executes located files, optionally at most once per file.

    Args:
        collector: Receives a ``FileExecuted`` event per call, or *None*.

    """

    __slots__ = ("_collector", "_executed", "_lock")

    def __init__(self, collector: LoaderCollector | None = None) -> None:
        self._collector = collector
        self._executed: dict[Path, Any] = {}
        self._lock = threading.Lock()

    def execute(
        self,
        path: Path,
        *,
        scope: Scope | None = None,
        once: bool = False,
    ) -> Any:
        """Execute *path* and return what it yields.

        Args:
            path: File to execute or parse.
            scope: Variables exposed to Python files as globals.
            once: If the file was already executed by this executor, skip it
                and return the earlier result.

        Raises:
            LoadError: If the file cannot be read, parsed, or executed.

        """
        key = path.resolve()
        if once:
            with self._lock:
                if key in self._executed:
                    result = self._executed[key]
                    self._record(path, reused=True, duration_ms=0.0)
                    return result

        handler = _HANDLERS.get(path.suffix.lower(), _read_text)
        start = time.perf_counter()
        try:
            result = handler(path, scope or {})
        except Exception as exc:
            msg = f"Failed to load {path}: {exc}"
            raise LoadError(msg) from exc
        duration_ms = (time.perf_counter() - start) * 1000

        with self._lock:
            self._executed[key] = result
        self._record(path, reused=False, duration_ms=duration_ms)
        return result

    def executed(self, path: Path) -> bool:
        """Whether *path* has been executed by this executor."""
        with self._lock:
            return path.resolve() in self._executed

    def _record(self, path: Path, *, reused: bool, duration_ms: float) -> None:
        if self._collector is not None:
            self._collector.record_execute(path, reused=reused, duration_ms=duration_ms)
