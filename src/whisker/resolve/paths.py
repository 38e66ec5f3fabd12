"""Search directories for a loader, in priority order.

Default mapping (lower priority is searched first)::

    1    <child theme>/<theme_file_directory>     only with a child theme
    10   <parent theme>/<theme_file_directory>
    100  <plugin_directory>/<files_directory>

The mapping goes through the ``{prefix}_file_paths`` filter, so handlers may
add, drop or reprioritize entries before it is sorted.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from whisker._types import PathMapping
    from whisker.config import LoaderConfig
    from whisker.hooks import HookRegistry
    from whisker.theme import ThemeDirectories

CHILD_THEME_PRIORITY = 1
THEME_PRIORITY = 10
PLUGIN_PRIORITY = 100


class SearchPathBuilder:
    """Builds the ordered search directories for one loader.

    Args:
        config: Loader configuration (directory names, hook prefix).
        theme: Active/parent theme directories, or *None* when the host has
            no theme (only the plugin directory is searched).
        hooks: Registry whose ``{prefix}_file_paths`` filters rewrite the
            mapping, or *None* for no filtering.

    """

    __slots__ = ("_config", "_hooks", "_theme")

    def __init__(
        self,
        config: LoaderConfig,
        theme: ThemeDirectories | None = None,
        hooks: HookRegistry | None = None,
    ) -> None:
        self._config = config
        self._theme = theme
        self._hooks = hooks

    @property
    def filter_name(self) -> str:
        return f"{self._config.hook_prefix}_file_paths"

    def defaults(self) -> PathMapping:
        """Return the unfiltered priority mapping."""
        mapping: PathMapping = {PLUGIN_PRIORITY: self._config.plugin_files_path}
        theme = self._theme
        if theme is not None:
            subdir = self._config.theme_file_directory
            mapping[THEME_PRIORITY] = theme.template_directory / subdir  # type: ignore[operator]
            # Non-child themes would otherwise check the active theme twice
            if theme.is_child_theme():
                mapping[CHILD_THEME_PRIORITY] = theme.stylesheet_directory / subdir
        return mapping

    def mapping(self) -> PathMapping:
        """Return the filtered priority mapping, sorted by priority."""
        mapping = self.defaults()
        if self._hooks is not None:
            mapping = self._hooks.apply_filters(self.filter_name, mapping)
        return {
            priority: Path(path)
            for priority, path in sorted(mapping.items())
            if path
        }

    def build(self) -> tuple[Path, ...]:
        """Return the search directories in the order they are tried.

        ``Path`` drops trailing separators and the resolver joins with
        ``/``, so every directory is followed by exactly one separator.
        Empty results are allowed: resolution then finds nothing.

        """
        return tuple(self.mapping().values())
