"""Shared test fixtures for whisker."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from whisker.theme import ThemeDirectories


@pytest.fixture
def plugin_dir(tmp_path: Path) -> Path:
    """Create a plugin root with empty templates/ and config/ directories."""
    root = tmp_path / "plugins" / "shop"
    (root / "templates").mkdir(parents=True)
    (root / "config").mkdir()
    return root


@pytest.fixture
def child_theme(tmp_path: Path) -> ThemeDirectories:
    """A child theme on top of a parent theme, both with templates/ and config/."""
    child = tmp_path / "themes" / "child"
    parent = tmp_path / "themes" / "parent"
    for theme in (child, parent):
        (theme / "templates").mkdir(parents=True)
        (theme / "config").mkdir()
    return ThemeDirectories(child, parent)


@pytest.fixture
def single_theme(tmp_path: Path) -> ThemeDirectories:
    """A theme with no child theme."""
    theme = tmp_path / "themes" / "solo"
    (theme / "templates").mkdir(parents=True)
    (theme / "config").mkdir()
    return ThemeDirectories.single(theme)


@pytest.fixture
def write_file() -> Callable[[Path, str], Path]:
    """Return a helper that writes *content* to *path*, creating parents."""

    def _write(path: Path, content: str = "") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write
