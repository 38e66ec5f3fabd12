"""Path resolver — first existing file for a set of candidate names.

Search order is filename-major, path-minor: the most specific filename is
tried in *every* search directory before a less specific one is tried.  A
``slug-name.py`` bundled with the plugin therefore beats a ``slug.py``
override in the child theme.

Results, misses included, are memoized per ``(filenames, paths)`` query for
the lifetime of the resolver.  Entries are write-once; there is no
invalidation.

Thread Safety:
    Cache reads and writes take ``self._lock``.  Two threads racing on the
    same cold key may both search the filesystem; the first result stored
    wins and both callers return it.

"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import NamedTuple

# Cache key used when the caller relies on the default search paths
_DEFAULT_PATHS = "<default>"


class CacheInfo(NamedTuple):
    """Resolver cache statistics."""

    hits: int
    misses: int
    size: int


def _normalize_filename(filename: str) -> str:
    """Trim leading slashes and turn spaces into dashes."""
    return filename.lstrip("/").replace(" ", "-")


class PathResolver:
    """Locates the highest-priority existing file and remembers the answer.

    Args:
        default_paths: Called to produce the search directories when
            :meth:`locate` is given none.  Only called on a cache miss.

    """

    __slots__ = ("_cache", "_default_paths", "_hits", "_lock", "_misses")

    def __init__(self, default_paths: Callable[[], Sequence[Path]]) -> None:
        self._default_paths = default_paths
        self._cache: dict[tuple[tuple[str, ...], tuple[str, ...] | str], Path | None] = {}
        self._hits = 0
        self._misses = 0
        self._lock = threading.Lock()

    def locate(
        self,
        filenames: str | Iterable[str],
        paths: Sequence[Path | str] | None = None,
    ) -> Path | None:
        """Return the first existing file, or *None* when nothing matches.

        Args:
            filenames: One filename or an ordered iterable of them, most
                specific first.
            paths: Directories to search, in order.  Defaults to the
                loader's search paths.

        """
        names = (filenames,) if isinstance(filenames, str) else tuple(filenames)
        path_key = _DEFAULT_PATHS if not paths else tuple(str(p) for p in paths)
        key = (names, path_key)

        with self._lock:
            if key in self._cache:
                self._hits += 1
                return self._cache[key]

        search = self._default_paths() if not paths else [Path(p) for p in paths]
        located = self._search(names, search)

        with self._lock:
            self._misses += 1
            return self._cache.setdefault(key, located)

    def cache_info(self) -> CacheInfo:
        with self._lock:
            return CacheInfo(self._hits, self._misses, len(self._cache))

    @staticmethod
    def _search(names: Sequence[str], paths: Sequence[Path]) -> Path | None:
        for filename in filter(None, names):
            filename = _normalize_filename(filename)
            if not filename:
                continue
            for directory in paths:
                candidate = directory / filename
                if candidate.is_file():
                    return candidate
        return None
