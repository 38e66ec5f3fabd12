"""Whisker CLI — whisker locate / whisker paths / whisker load.

Entry point for the ``whisker`` command-line interface.  Useful for checking
which file a theme override chain actually picks.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from whisker._errors import WhiskerError

if TYPE_CHECKING:
    from whisker.loader import Loader


def _add_common(parser: argparse.ArgumentParser, *, kind: str = "template") -> None:
    parser.add_argument("--root", default=".", help="Plugin root (holds whisker.yaml)")
    parser.add_argument(
        "--kind",
        choices=("file", "template", "config"),
        default=kind,
        help="Loader preset",
    )
    parser.add_argument(
        "--stylesheet-dir", default=None, help="Active (child) theme directory",
    )
    parser.add_argument(
        "--template-dir", default=None, help="Parent theme directory",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the whisker CLI."""
    parser = argparse.ArgumentParser(
        prog="whisker",
        description="Theme-aware template and config file resolution.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # whisker locate
    locate_parser = subparsers.add_parser("locate", help="Print the file a part resolves to")
    locate_parser.add_argument("slug", help="Part slug")
    locate_parser.add_argument("name", nargs="?", default=None, help="Optional part name")
    _add_common(locate_parser)

    # whisker paths
    paths_parser = subparsers.add_parser("paths", help="Print the search directories in order")
    _add_common(paths_parser)

    # whisker load
    load_parser = subparsers.add_parser("load", help="Load a config fragment as JSON")
    load_parser.add_argument("slug", help="Part slug")
    load_parser.add_argument("name", nargs="?", default=None, help="Optional part name")
    _add_common(load_parser, kind="config")

    return parser


def _get_version() -> str:
    """Get the package version."""
    from whisker import __version__

    return __version__


def _make_loader(args: argparse.Namespace) -> Loader:
    from whisker.config_file import load_config
    from whisker.loader import Loader
    from whisker.theme import ThemeDirectories

    config = load_config(Path(args.root), kind=args.kind)
    theme = None
    if args.stylesheet_dir or args.template_dir:
        stylesheet = args.stylesheet_dir or args.template_dir
        theme = ThemeDirectories(Path(stylesheet), Path(args.template_dir or stylesheet))
    return Loader(config, theme=theme)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        loader = _make_loader(args)
        if args.command == "locate":
            located = loader.get(args.slug, args.name)
            if located is None:
                candidates = ", ".join(loader.get_filenames(args.slug, args.name))
                print(f"  Not found: {candidates}", file=sys.stderr)
                sys.exit(1)
            print(located)
        elif args.command == "paths":
            for path in loader.get_paths():
                print(path)
        elif args.command == "load":
            data = loader.load_data(args.slug, args.name)
            print(json.dumps(data, indent=2, sort_keys=True, default=str))
    except WhiskerError as exc:
        print(f"  Error: {exc}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
