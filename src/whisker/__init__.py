"""Whisker — theme-aware file resolution for plugin templates and config.

Finds the file that supplies a named part, searching a child theme, its
parent theme, and finally the plugin's own bundled copy.  Optionally runs
the file and keeps per-template data alongside it.

Quick start::

    from pathlib import Path
    from whisker import ThemeDirectories, template_loader

    loader = template_loader(
        prefix="shop",
        plugin_directory=Path("plugins/shop"),
        theme=ThemeDirectories(Path("themes/child"), Path("themes/parent")),
    )
    loader.get("order", "pending")   # Path to the winning file, or None

Three loader presets::

    file_loader(...)        # templates/ directories
    template_loader(...)    # templates/ directories, template data helpers
    config_loader(...)      # config/ directories, load_data() fallback

Per-template data::

    context = StoreContext()
    context.data.update("order", "post", post)
    context.data.get("order", "post", fallback=None)

"""

__version__ = "0.1.0"
__all__ = [
    "Data",
    "HookRegistry",
    "Loader",
    "LoaderConfig",
    "StoreContext",
    "TemplateData",
    "ThemeDirectories",
    "__version__",
    "config_loader",
    "file_loader",
    "template_loader",
]

_LAZY = {
    "Data": "whisker.store",
    "StoreContext": "whisker.store",
    "TemplateData": "whisker.store",
    "HookRegistry": "whisker.hooks",
    "Loader": "whisker.loader",
    "config_loader": "whisker.loader",
    "file_loader": "whisker.loader",
    "template_loader": "whisker.loader",
    "LoaderConfig": "whisker.config",
    "ThemeDirectories": "whisker.theme",
}


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import whisker`` fast while providing a clean top-level API.
    """
    module_name = _LAZY.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
