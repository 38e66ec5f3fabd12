"""Whisker configuration.

LoaderConfig is the central configuration object, frozen after creation.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from pathlib import Path

from whisker._errors import ConfigError
from whisker._types import LoadStrategy

# Accepted as a synonym for ``prefix``
_LEGACY_ALIASES: dict[str, str] = {"filter_prefix": "prefix"}

_LOAD_STRATEGIES = ("execute", "data")


def _normalize_extension(extension: str) -> str:
    """Return *extension* with exactly one leading dot (``"py"`` -> ``".py"``)."""
    extension = extension.strip()
    if not extension:
        return ""
    return "." + extension.lstrip(".")


@dataclass(frozen=True, slots=True)
class LoaderConfig:
    """Configuration for a whisker Loader.

    Attributes:
        prefix: Namespace for hook names (``{prefix}_get_part``,
            ``{prefix}_file_paths``) and the default template data variable.
        theme_file_directory: Directory inside a theme that holds overrides.
        plugin_directory: Root directory of the owning plugin.
        files_directory: Directory under *plugin_directory* holding the
            bundled default files.
        extension: File extension appended to every candidate name.
        load_strategy: ``"execute"`` returns what the located file yields;
            ``"data"`` loads it as a config fragment (see
            :meth:`whisker.loader.Loader.load_data`).

    """

    prefix: str = "yourplugin"
    theme_file_directory: str = "templates"
    plugin_directory: Path = field(default_factory=Path.cwd)
    files_directory: str = "templates"
    extension: str = ".py"
    load_strategy: LoadStrategy = "execute"

    def __post_init__(self) -> None:
        if not self.prefix:
            msg = "LoaderConfig.prefix must not be empty"
            raise ConfigError(msg)
        if not isinstance(self.plugin_directory, Path):
            object.__setattr__(self, "plugin_directory", Path(self.plugin_directory))
        object.__setattr__(self, "extension", _normalize_extension(self.extension))
        if self.load_strategy not in _LOAD_STRATEGIES:
            msg = (
                f"load_strategy must be one of {list(_LOAD_STRATEGIES)}, "
                f"got {self.load_strategy!r}"
            )
            raise ConfigError(msg)

    @property
    def hook_prefix(self) -> str:
        """Prefix used in hook names, dashes replaced with underscores."""
        return self.prefix.replace("-", "_")

    @property
    def plugin_files_path(self) -> Path:
        """Absolute-or-relative path to the plugin's bundled files."""
        return self.plugin_directory / self.files_directory

    @property
    def data_var_name(self) -> str:
        """Default variable name under which template data is exposed."""
        return f"{self.hook_prefix}_data"

    @classmethod
    def for_files(cls, **options: object) -> LoaderConfig:
        """Preset for generic files: ``templates/`` directories."""
        return cls.from_mapping(options)

    @classmethod
    def for_templates(cls, **options: object) -> LoaderConfig:
        """Preset for template parts (same defaults as :meth:`for_files`)."""
        return cls.from_mapping(options)

    @classmethod
    def for_config(cls, **options: object) -> LoaderConfig:
        """Preset for config fragments: ``config/`` directories, data loading."""
        base = cls(
            theme_file_directory="config",
            files_directory="config",
            load_strategy="data",
        )
        return cls.from_mapping(options, base=base)

    @classmethod
    def from_mapping(
        cls,
        options: Mapping[str, object],
        *,
        base: LoaderConfig | None = None,
    ) -> LoaderConfig:
        """Build a config from a plain mapping of options.

        ``filter_prefix`` is accepted as a legacy alias of ``prefix`` (an
        explicit ``prefix`` wins).  Keys that are not fields raise.

        Raises:
            ConfigError: On unrecognized keys or invalid values.

        """
        known = {f.name for f in fields(cls)}
        merged: dict[str, object] = {}
        for key, value in options.items():
            target = _LEGACY_ALIASES.get(key, key)
            if target not in known:
                msg = f"Unknown loader option {key!r} (expected one of {sorted(known)})"
                raise ConfigError(msg)
            if key in _LEGACY_ALIASES and target in options:
                continue
            merged[target] = value

        for key, value in merged.items():
            if key == "plugin_directory":
                if not isinstance(value, (str, Path)):
                    msg = f"plugin_directory must be a path, got {type(value).__name__}"
                    raise ConfigError(msg)
            elif not isinstance(value, str):
                msg = f"{key} must be a str, got {type(value).__name__}"
                raise ConfigError(msg)

        return replace(base if base is not None else cls(), **merged)
