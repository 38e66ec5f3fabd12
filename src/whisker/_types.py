"""Shared type definitions for whisker."""

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Literal, TypeAlias

# Loader preset
LoaderKind: TypeAlias = Literal["file", "template", "config"]

# How Loader.load treats a located file: run it as-is, or as a config
# fragment with fallback to the plugin copy
LoadStrategy: TypeAlias = Literal["execute", "data"]

# Primary identifier of a requested part (e.g. "order")
Slug: TypeAlias = str

# Ordered candidate filenames, most specific first
Filenames: TypeAlias = tuple[str, ...]

# Search directories keyed by priority (lower is searched first)
PathMapping: TypeAlias = dict[int, Path]

# Filter handler: receives the value plus context, returns the replacement
FilterFunc: TypeAlias = Callable[..., Any]

# Action handler: fire-and-forget, return value ignored
ActionFunc: TypeAlias = Callable[..., None]

# Candidate naming strategy
NamingFunc: TypeAlias = Callable[..., Filenames]

# Variables exposed to an executed file
Scope: TypeAlias = Mapping[str, Any]
