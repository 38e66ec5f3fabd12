"""File resolution — candidate names, search paths, and the memoizing resolver.

Public API::

    from whisker.resolve import PathResolver, SearchPathBuilder, build_candidate_names

    names = build_candidate_names("order", "pending", extension=".py")
    resolver = PathResolver(SearchPathBuilder(config, theme).build)
    resolver.locate(names)
"""

from whisker.resolve.names import build_candidate_names
from whisker.resolve.paths import (
    CHILD_THEME_PRIORITY,
    PLUGIN_PRIORITY,
    THEME_PRIORITY,
    SearchPathBuilder,
)
from whisker.resolve.resolver import CacheInfo, PathResolver

__all__ = [
    "CHILD_THEME_PRIORITY",
    "PLUGIN_PRIORITY",
    "THEME_PRIORITY",
    "CacheInfo",
    "PathResolver",
    "SearchPathBuilder",
    "build_candidate_names",
]
