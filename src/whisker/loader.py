"""Loader — find, and optionally run, the file that supplies a part.

A part is named by a *slug* and an optional *name*.  The loader turns that
into candidate filenames, searches the child theme, parent theme and plugin
directories, and returns the first match::

    loader = template_loader(
        prefix="shop",
        plugin_directory=Path("plugins/shop"),
        theme=ThemeDirectories(Path("themes/child"), Path("themes/parent")),
    )

    loader.get("order", "pending")
    # tries order-pending.py, pending.py, order.py in
    #   themes/child/templates/ -> themes/parent/templates/ -> plugins/shop/templates/

    loader.set_template_data({"title": "Orders"}).load("order")
    # runs the file with ``shop_data.title == "Orders"`` in scope

Config fragments use :meth:`Loader.load_data`, which falls back to the
plugin's bundled file when the override yields nothing.

The three loader kinds (files, templates, config) are the same class with
different :class:`~whisker.config.LoaderConfig` presets.
"""

from __future__ import annotations

import threading
import types
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from whisker._errors import LoadError
from whisker.config import LoaderConfig
from whisker.executor import FileExecutor
from whisker.resolve.names import build_candidate_names
from whisker.resolve.paths import SearchPathBuilder
from whisker.resolve.resolver import PathResolver

if TYPE_CHECKING:
    from whisker._types import Filenames, NamingFunc
    from whisker.hooks import HookRegistry
    from whisker.observability.collector import LoaderCollector
    from whisker.store import KeyedStore
    from whisker.theme import ThemeDirectories


class Loader:
    """Resolves parts against the theme override chain.

    Args:
        config: Directory names, extension and hook prefix.
        hooks: Filters and actions fired during resolution, or *None*.
        theme: Active/parent theme directories, or *None* to search only the
            plugin directory.
        executor: Runs located files.  Defaults to a private
            :class:`~whisker.executor.FileExecutor`.
        collector: Receives request/locate/execute events, or *None*.
        naming: Candidate naming strategy, called as
            ``naming(slug, name, extension=...)``.

    """

    __slots__ = (
        "_collector",
        "_config",
        "_data_var_names",
        "_executor",
        "_hooks",
        "_naming",
        "_paths",
        "_resolver",
        "_scope",
        "_scope_lock",
    )

    def __init__(
        self,
        config: LoaderConfig,
        *,
        hooks: HookRegistry | None = None,
        theme: ThemeDirectories | None = None,
        executor: FileExecutor | None = None,
        collector: LoaderCollector | None = None,
        naming: NamingFunc = build_candidate_names,
    ) -> None:
        self._config = config
        self._hooks = hooks
        self._collector = collector
        self._naming = naming
        self._executor = executor if executor is not None else FileExecutor(collector)
        self._paths = SearchPathBuilder(config, theme, hooks)
        self._resolver = PathResolver(self._paths.build)
        self._scope: dict[str, Any] = {}
        self._data_var_names: list[str] = []
        self._scope_lock = threading.Lock()

    @property
    def config(self) -> LoaderConfig:
        return self._config

    @property
    def resolver(self) -> PathResolver:
        return self._resolver

    @property
    def plugin_files_path(self) -> Path:
        """The plugin's bundled files directory (lowest priority)."""
        return self._config.plugin_files_path

    @property
    def scope(self) -> dict[str, Any]:
        """Copy of the variables currently exposed to executed files."""
        with self._scope_lock:
            return dict(self._scope)

    # ----- resolution -----

    def get_filenames(self, slug: str, name: str | None = None) -> Filenames:
        """Return candidate filenames for *slug* / *name*, most specific first.

        The ``{prefix}_get_part`` filter receives ``(filenames, slug, name)``
        and its result replaces the list.

        """
        files = list(self._naming(slug, name, extension=self._config.extension))
        if self._hooks is not None:
            files = self._hooks.apply_filters(
                f"{self._config.hook_prefix}_get_part", files, slug, name,
            )
        return tuple(files)

    def get_paths(self) -> tuple[Path, ...]:
        """Return the search directories in the order they are tried."""
        return self._paths.build()

    def locate(
        self,
        filenames: str | Iterable[str],
        paths: Sequence[Path | str] | None = None,
    ) -> Path | None:
        """Return the highest-priority existing file, or *None*."""
        return self._resolver.locate(filenames, paths)

    def get(self, slug: str, name: str | None = None) -> Path | None:
        """Locate the file for *slug* / *name* without running it."""
        if self._hooks is not None:
            self._hooks.do_action(f"get_part_{slug}", slug, name)
            self._hooks.do_action(f"{self._config.hook_prefix}_get_part_{slug}", slug, name)
        if self._collector is not None:
            self._collector.record_request(slug, name, prefix=self._config.hook_prefix)

        files = self.get_filenames(slug, name)
        located = self.locate(files)

        if self._collector is not None:
            self._collector.record_located(slug, name, files, located)
        return located

    # ----- loading -----

    def load(self, slug: str, name: str | None = None, *, once: bool = False) -> Any:
        """Locate and run the file for *slug* / *name*.

        Loaders configured with ``load_strategy="data"`` (the config preset)
        go through :meth:`load_data` instead and always return a dict.

        Returns:
            Whatever the executor yields, or *None* when nothing was found.

        Raises:
            LoadError: If the located file fails to execute.

        """
        if self._config.load_strategy == "data":
            return self.load_data(slug, name)
        located = self.get(slug, name)
        if located is None:
            return None
        return self._execute(located, once=once)

    def load_data(
        self,
        slug: str,
        name: str | None = None,
        *,
        store: KeyedStore | None = None,
    ) -> dict[str, Any]:
        """Load a config fragment as a dict.

        The highest-priority file is tried first.  If it yields nothing, the
        plugin's own copy is used instead.  When *store* is given, every key
        is written to it under *slug* with ``store.update``.

        Raises:
            LoadError: If a file fails to execute or yields a non-mapping.

        """
        files = self.get_filenames(slug, name)
        primary = self.locate(files)
        default = self.locate(files, [self.plugin_files_path])

        if self._collector is not None:
            self._collector.record_located(slug, name, files, primary)

        data: Any = None
        if primary is not None:
            data = self._execute(primary)
        if not data and default is not None and default != primary:
            data = self._execute(default)

        if not data:
            result: dict[str, Any] = {}
        elif isinstance(data, Mapping):
            result = dict(data)
        else:
            msg = (
                f"Config for {slug!r} must yield a mapping, "
                f"got {type(data).__name__}"
            )
            raise LoadError(msg)

        if store is not None:
            for key, value in result.items():
                store.update(slug, key, value)
        return result

    def get_part(self, slug: str, name: str | None = None, *, load: bool = False) -> Any:
        """:meth:`load` when *load* is true, else :meth:`get`."""
        if load:
            return self.load(slug, name)
        return self.get(slug, name)

    def locate_template(
        self,
        filenames: str | Iterable[str],
        *,
        load: bool = False,
        once: bool = True,
    ) -> Path | None:
        """Locate *filenames* and, with *load*, run the match.

        Returns the located path either way.

        """
        located = self.locate(filenames)
        if located is not None and load:
            self._execute(located, once=once)
        return located

    # ----- template data -----

    def set_template_data(self, data: Any, var_name: str = "") -> Loader:
        """Expose *data* to executed files as the variable *var_name*.

        Mappings become attribute bags (``shop_data.title``); other values
        are exposed as-is.  *var_name* defaults to ``{prefix}_data``.  Every
        name set here is remembered until :meth:`unset_template_data`.

        """
        var_name = var_name or self._config.data_var_name
        value = types.SimpleNamespace(**data) if isinstance(data, Mapping) else data
        with self._scope_lock:
            self._scope[var_name] = value
            if var_name not in self._data_var_names:
                self._data_var_names.append(var_name)
        return self

    def unset_template_data(self) -> Loader:
        """Remove every variable ever set with :meth:`set_template_data`."""
        with self._scope_lock:
            for var_name in self._data_var_names:
                self._scope.pop(var_name, None)
            self._data_var_names.clear()
        return self

    @property
    def template_data_var_names(self) -> list[str]:
        with self._scope_lock:
            return list(self._data_var_names)

    def close(self) -> None:
        """Clean up template data."""
        self.unset_template_data()

    def __enter__(self) -> Loader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _execute(self, path: Path, *, once: bool = False) -> Any:
        return self._executor.execute(path, scope=self.scope, once=once)


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------


def file_loader(
    *,
    hooks: HookRegistry | None = None,
    theme: ThemeDirectories | None = None,
    executor: FileExecutor | None = None,
    collector: LoaderCollector | None = None,
    **options: Any,
) -> Loader:
    """Loader for generic files under ``templates/`` directories."""
    return Loader(
        LoaderConfig.for_files(**options),
        hooks=hooks, theme=theme, executor=executor, collector=collector,
    )


def template_loader(
    *,
    hooks: HookRegistry | None = None,
    theme: ThemeDirectories | None = None,
    executor: FileExecutor | None = None,
    collector: LoaderCollector | None = None,
    **options: Any,
) -> Loader:
    """Loader for template parts under ``templates/`` directories."""
    return Loader(
        LoaderConfig.for_templates(**options),
        hooks=hooks, theme=theme, executor=executor, collector=collector,
    )


def config_loader(
    *,
    hooks: HookRegistry | None = None,
    theme: ThemeDirectories | None = None,
    executor: FileExecutor | None = None,
    collector: LoaderCollector | None = None,
    **options: Any,
) -> Loader:
    """Loader for config fragments under ``config/`` directories."""
    return Loader(
        LoaderConfig.for_config(**options),
        hooks=hooks, theme=theme, executor=executor, collector=collector,
    )
