"""Tests for whisker.resolve.resolver — first-match search and memoization."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from unittest import mock

import pytest

from whisker.resolve.resolver import PathResolver

_real_is_file = Path.is_file


@pytest.fixture
def dirs(tmp_path: Path) -> tuple[Path, Path, Path]:
    """Child, parent and plugin directories (created, empty)."""
    child, parent, plugin = tmp_path / "child", tmp_path / "parent", tmp_path / "plugin"
    for d in (child, parent, plugin):
        d.mkdir()
    return child, parent, plugin


def _resolver(paths: tuple[Path, ...]) -> PathResolver:
    return PathResolver(lambda: paths)


class TestSearchOrder:
    """Filename-major, path-minor search."""

    def test_first_path_wins_for_same_filename(
        self, dirs: tuple[Path, Path, Path], write_file: Callable[[Path, str], Path],
    ) -> None:
        child, parent, plugin = dirs
        write_file(parent / "order.py", "")
        write_file(plugin / "order.py", "")
        assert _resolver(dirs).locate(["order.py"]) == parent / "order.py"

    def test_specific_name_beats_path_priority(
        self, dirs: tuple[Path, Path, Path], write_file: Callable[[Path, str], Path],
    ) -> None:
        """A exists only in the plugin dir, B in child and parent: A wins."""
        child, parent, plugin = dirs
        write_file(plugin / "order-pending.py", "")
        write_file(child / "order.py", "")
        write_file(parent / "order.py", "")
        located = _resolver(dirs).locate(["order-pending.py", "order.py"])
        assert located == plugin / "order-pending.py"

    def test_falls_through_to_less_specific(
        self, dirs: tuple[Path, Path, Path], write_file: Callable[[Path, str], Path],
    ) -> None:
        child, _parent, _plugin = dirs
        write_file(child / "order.py", "")
        located = _resolver(dirs).locate(["order-pending.py", "pending.py", "order.py"])
        assert located == child / "order.py"

    def test_not_found_returns_none(self, dirs: tuple[Path, Path, Path]) -> None:
        assert _resolver(dirs).locate(["missing.py"]) is None

    def test_directories_are_not_matches(self, dirs: tuple[Path, Path, Path]) -> None:
        child, _parent, _plugin = dirs
        (child / "order.py").mkdir()
        assert _resolver(dirs).locate(["order.py"]) is None

    def test_no_paths_finds_nothing(self) -> None:
        assert _resolver(()).locate(["order.py"]) is None


class TestFilenameNormalization:
    """Empty entries dropped, leading slashes trimmed, spaces dashed."""

    def test_single_string(
        self, dirs: tuple[Path, Path, Path], write_file: Callable[[Path, str], Path],
    ) -> None:
        _child, parent, _plugin = dirs
        write_file(parent / "order.py", "")
        assert _resolver(dirs).locate("order.py") == parent / "order.py"

    def test_empty_entries_skipped(
        self, dirs: tuple[Path, Path, Path], write_file: Callable[[Path, str], Path],
    ) -> None:
        _child, _parent, plugin = dirs
        write_file(plugin / "order.py", "")
        assert _resolver(dirs).locate(["", "order.py"]) == plugin / "order.py"

    def test_leading_slash_trimmed(
        self, dirs: tuple[Path, Path, Path], write_file: Callable[[Path, str], Path],
    ) -> None:
        _child, _parent, plugin = dirs
        write_file(plugin / "order.py", "")
        assert _resolver(dirs).locate(["//order.py"]) == plugin / "order.py"

    def test_spaces_become_dashes(
        self, dirs: tuple[Path, Path, Path], write_file: Callable[[Path, str], Path],
    ) -> None:
        _child, _parent, plugin = dirs
        write_file(plugin / "order-summary.py", "")
        assert _resolver(dirs).locate(["order summary.py"]) == plugin / "order-summary.py"


class TestExplicitPaths:
    """Callers may pass their own search paths."""

    def test_explicit_paths_override_defaults(
        self, dirs: tuple[Path, Path, Path], write_file: Callable[[Path, str], Path],
    ) -> None:
        child, _parent, plugin = dirs
        write_file(child / "order.py", "")
        write_file(plugin / "order.py", "")
        resolver = _resolver(dirs)
        assert resolver.locate(["order.py"], [plugin]) == plugin / "order.py"
        assert resolver.locate(["order.py"]) == child / "order.py"

    def test_string_paths_accepted(
        self, dirs: tuple[Path, Path, Path], write_file: Callable[[Path, str], Path],
    ) -> None:
        _child, _parent, plugin = dirs
        write_file(plugin / "order.py", "")
        assert _resolver(dirs).locate(["order.py"], [str(plugin) + "/"]) == plugin / "order.py"

    def test_empty_paths_use_defaults(
        self, dirs: tuple[Path, Path, Path], write_file: Callable[[Path, str], Path],
    ) -> None:
        child, _parent, _plugin = dirs
        write_file(child / "order.py", "")
        assert _resolver(dirs).locate(["order.py"], []) == child / "order.py"


class TestCache:
    """Write-once memoization per (filenames, paths)."""

    def test_second_call_does_not_touch_filesystem(
        self, dirs: tuple[Path, Path, Path], write_file: Callable[[Path, str], Path],
    ) -> None:
        _child, _parent, plugin = dirs
        write_file(plugin / "order.py", "")
        resolver = _resolver(dirs)

        with mock.patch.object(Path, "is_file", autospec=True, side_effect=_real_is_file) as spy:
            first = resolver.locate(["order.py"])
            calls_after_first = spy.call_count
            second = resolver.locate(["order.py"])

        assert first == second == plugin / "order.py"
        assert calls_after_first == 3
        assert spy.call_count == calls_after_first

    def test_miss_is_cached(
        self, dirs: tuple[Path, Path, Path], write_file: Callable[[Path, str], Path],
    ) -> None:
        """A cached miss is returned even if the file appears later."""
        _child, _parent, plugin = dirs
        resolver = _resolver(dirs)
        assert resolver.locate(["late.py"]) is None
        write_file(plugin / "late.py", "")
        assert resolver.locate(["late.py"]) is None

    def test_hit_survives_deletion(
        self, dirs: tuple[Path, Path, Path], write_file: Callable[[Path, str], Path],
    ) -> None:
        _child, _parent, plugin = dirs
        path = write_file(plugin / "order.py", "")
        resolver = _resolver(dirs)
        assert resolver.locate(["order.py"]) == path
        path.unlink()
        assert resolver.locate(["order.py"]) == path

    def test_default_paths_not_rebuilt_on_hit(self, dirs: tuple[Path, Path, Path]) -> None:
        builder = mock.Mock(return_value=dirs)
        resolver = PathResolver(builder)
        resolver.locate(["order.py"])
        resolver.locate(["order.py"])
        assert builder.call_count == 1

    def test_different_paths_are_different_keys(
        self, dirs: tuple[Path, Path, Path], write_file: Callable[[Path, str], Path],
    ) -> None:
        child, _parent, plugin = dirs
        write_file(child / "order.py", "")
        resolver = _resolver(dirs)
        assert resolver.locate(["order.py"], [plugin]) is None
        assert resolver.locate(["order.py"], [child]) == child / "order.py"

    def test_cache_info(self, dirs: tuple[Path, Path, Path]) -> None:
        resolver = _resolver(dirs)
        resolver.locate(["a.py"])
        resolver.locate(["a.py"])
        resolver.locate(["b.py"])
        info = resolver.cache_info()
        assert info.hits == 1
        assert info.misses == 2
        assert info.size == 2
