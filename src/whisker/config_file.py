"""Load LoaderConfig from whisker.yaml / whisker.toml if present.

Merges file config with keyword overrides. Overrides win.

    # whisker.yaml
    whisker:
      prefix: shop
      plugin_directory: plugins/shop

"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from whisker._errors import ConfigError
from whisker._types import LoaderKind
from whisker.config import LoaderConfig

_CONFIG_FILES = ("whisker.yaml", "whisker.yml", "whisker.toml")

_OPTION_KEYS = frozenset({
    "prefix",
    "filter_prefix",
    "theme_file_directory",
    "plugin_directory",
    "files_directory",
    "extension",
    "load_strategy",
})


def load_config(
    root: Path,
    *,
    kind: LoaderKind = "template",
    **overrides: object,
) -> LoaderConfig:
    """Load a LoaderConfig for *kind* from *root*, merging overrides.

    A relative ``plugin_directory`` is taken relative to *root*; when none is
    given, *root* itself is the plugin directory.

    Raises:
        ConfigError: If the config file cannot be parsed or has bad keys.

    """
    merged = {**read_config_file(root), **overrides}
    plugin_directory = Path(str(merged.get("plugin_directory", ".")))
    if not plugin_directory.is_absolute():
        plugin_directory = (root / plugin_directory).resolve()
    merged["plugin_directory"] = plugin_directory

    if kind == "config":
        return LoaderConfig.for_config(**merged)
    if kind == "file":
        return LoaderConfig.for_files(**merged)
    return LoaderConfig.for_templates(**merged)


def read_config_file(root: Path) -> dict[str, object]:
    """Read whisker options from yaml/toml in *root*.  Empty when absent."""
    for name in _CONFIG_FILES:
        path = root / name
        if path.is_file():
            return _flatten_whisker_section(_parse(path))
    return {}


def _parse(path: Path) -> dict[str, object]:
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix == ".toml":
            data = tomllib.loads(text)
        else:
            data = yaml.safe_load(text) or {}
    except (OSError, tomllib.TOMLDecodeError, yaml.YAMLError) as exc:
        msg = f"Could not read {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)
    return data


def _flatten_whisker_section(data: dict[str, object]) -> dict[str, object]:
    """Extract whisker.* keys (and known top-level keys) into one dict."""
    result: dict[str, object] = {}
    for k, v in data.items():
        if k in _OPTION_KEYS:
            result[k] = v
    section = data.get("whisker")
    if isinstance(section, dict):
        result.update(section)
    return result
