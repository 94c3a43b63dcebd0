"""Command-line front door for fsnav.

Parses CLI options, resolves the starting directory and sets up logging.
Bookmark import/export run without a terminal; everything else dispatches into
the interactive runtime.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from . import __version__
from .bookmarks import export_bookmarks, import_bookmarks, open_store
from .errors import FsnavError, describe_error
from .preview.syntax import DEFAULT_STYLE
from .runtime import run_app

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(log_file: Path | None) -> None:
    """Send package logs to ``log_file``; without one they are discarded."""
    if log_file is None:
        return
    package_logger = logging.getLogger("fsnav")
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fsnav",
        description="Browse directories in the terminal, edit permissions and ownership, and keep bookmarks.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to open. Defaults to current directory.")
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for file previews.")
    parser.add_argument("--no-color", action="store_true", help="Disable colors in listings and previews.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug logs to this file.")
    parser.add_argument("--bookmarks", type=Path, default=None, help="Bookmark store file to use.")
    parser.add_argument("--export-bookmarks", type=Path, metavar="PATH", help="Write bookmarks to PATH and exit.")
    parser.add_argument("--import-bookmarks", type=Path, metavar="PATH", help="Merge bookmarks from PATH and exit.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _run_bookmark_command(args: argparse.Namespace) -> None:
    store, advisory = open_store(args.bookmarks)
    if advisory is not None:
        print(advisory.message)
    try:
        if args.import_bookmarks is not None:
            imported = import_bookmarks(store, args.import_bookmarks)
            error = store.take_persist_error()
            if error is not None:
                raise SystemExit(f"Could not save bookmarks: {describe_error(error)}")
            print(f"Imported {imported} bookmark(s) from {args.import_bookmarks}")
        if args.export_bookmarks is not None:
            export_bookmarks(store, args.export_bookmarks)
            print(f"Exported {len(store)} bookmark(s) to {args.export_bookmarks}")
    except (FsnavError, OSError) as exc:
        raise SystemExit(f"Bookmark command failed: {describe_error(exc)}") from exc


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch fsnav.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)

    if args.import_bookmarks is not None or args.export_bookmarks is not None:
        if args.path is not None:
            raise SystemExit("Cannot combine a path with bookmark import/export.")
        _run_bookmark_command(args)
        return

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")

    run_app(path, color=not args.no_color, style=args.style, bookmarks_path=args.bookmarks)


if __name__ == "__main__":
    main()
