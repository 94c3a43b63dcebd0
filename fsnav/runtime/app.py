"""Interactive bootstrap: load persisted state, build the dispatcher, run the loop."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from ..bookmarks import open_store
from ..directory_pane import DirectoryCursor
from ..dispatch import ModeDispatcher
from ..entry_model import is_elevated
from ..preview.syntax import DEFAULT_STYLE
from .config import load_preferences, save_preferences
from .loop import run_main_loop
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def build_dispatcher(
    path: Path,
    *,
    color: bool = True,
    style: str = DEFAULT_STYLE,
    bookmarks_path: Path | None = None,
) -> ModeDispatcher:
    preferences = load_preferences()
    cursor, advisory = DirectoryCursor.open(path, show_hidden=preferences.show_hidden)
    store, store_advisory = open_store(bookmarks_path)
    elevated = is_elevated()
    logger.info("starting in %s (elevated=%s)", cursor.path, elevated)
    dispatcher = ModeDispatcher(
        cursor,
        store,
        elevated=elevated,
        preferences=preferences,
        save_preferences=save_preferences,
        color=color,
        style=style,
    )
    dispatcher.notify(advisory)
    dispatcher.notify(store_advisory)
    return dispatcher


def run_app(
    path: Path,
    *,
    color: bool = True,
    style: str = DEFAULT_STYLE,
    bookmarks_path: Path | None = None,
) -> None:
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not (os.isatty(stdin_fd) and os.isatty(stdout_fd)):
        raise SystemExit("fsnav needs an interactive terminal.")

    dispatcher = build_dispatcher(path, color=color, style=style, bookmarks_path=bookmarks_path)
    terminal = TerminalController(stdin_fd, stdout_fd)
    run_main_loop(dispatcher, terminal, stdin_fd, color=color)


__all__ = ["build_dispatcher", "run_app"]
