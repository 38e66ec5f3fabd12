"""Tests for whisker._cli — argument parsing and command dispatch."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from whisker._cli import _build_parser, main


class TestBuildParser:
    """_build_parser — CLI argument parsing."""

    def test_locate_args(self) -> None:
        args = _build_parser().parse_args(["locate", "order", "pending"])
        assert args.command == "locate"
        assert args.slug == "order"
        assert args.name == "pending"
        assert args.root == "."
        assert args.kind == "template"

    def test_locate_without_name(self) -> None:
        args = _build_parser().parse_args(["locate", "order"])
        assert args.name is None

    def test_load_defaults_to_config_kind(self) -> None:
        args = _build_parser().parse_args(["load", "order"])
        assert args.kind == "config"

    def test_theme_dirs(self) -> None:
        args = _build_parser().parse_args([
            "paths", "--stylesheet-dir", "child", "--template-dir", "parent",
        ])
        assert args.stylesheet_dir == "child"
        assert args.template_dir == "parent"

    def test_invalid_kind(self) -> None:
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["paths", "--kind", "nope"])


class TestMain:
    """End-to-end command dispatch."""

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "usage" in capsys.readouterr().out

    def test_locate_found(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        target = tmp_path / "templates" / "order.py"
        target.parent.mkdir()
        target.write_text("")
        main(["locate", "order", "--root", str(tmp_path)])
        assert capsys.readouterr().out.strip() == str(target.resolve())

    def test_locate_missing_exits_1(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["locate", "order", "pending", "--root", str(tmp_path)])
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "order-pending.py" in err

    def test_paths_with_child_theme(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        child, parent = tmp_path / "child", tmp_path / "parent"
        main([
            "paths", "--root", str(tmp_path),
            "--stylesheet-dir", str(child), "--template-dir", str(parent),
        ])
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            str(child / "templates"),
            str(parent / "templates"),
            str(tmp_path.resolve() / "templates"),
        ]

    def test_load_prints_json(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "order.py").write_text("per_page = 20\n")
        main(["load", "order", "--root", str(tmp_path)])
        assert json.loads(capsys.readouterr().out) == {"per_page": 20}

    def test_config_error_exits_2(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        (tmp_path / "whisker.yaml").write_text("whisker:\n  colour: orange\n")
        with pytest.raises(SystemExit) as exc_info:
            main(["paths", "--root", str(tmp_path)])
        assert exc_info.value.code == 2
        assert "colour" in capsys.readouterr().err
