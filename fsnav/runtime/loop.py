"""Main interactive event loop for the terminal UI.

One key is read, dispatched and drawn before the next is read. Resize is
detected by polling the terminal size between keys, so no signal handler is
needed. The loop is wiring only; behavior lives in the dispatcher.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..dispatch import ExitKind, ModeDispatcher, RenderModel
from ..errors import Advisory
from ..input import read_key
from .screen import render_frame
from .shell import launch_shell
from .terminal import TerminalController

logger = logging.getLogger(__name__)

KEY_POLL_MS = 250


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    read_key: Callable[[int, int | None], str] = read_key
    launch_shell: Callable[[Path, Callable[[], None], Callable[[], None]], str | None] = launch_shell


def run_main_loop(
    dispatcher: ModeDispatcher,
    terminal: TerminalController,
    stdin_fd: int,
    *,
    color: bool = True,
    callbacks: RuntimeLoopCallbacks | None = None,
) -> None:
    """Run the interactive loop until a quit action occurs."""
    ops = callbacks if callbacks is not None else RuntimeLoopCallbacks()
    size: tuple[int, int] | None = None
    model: RenderModel = dispatcher.render()
    dirty = True

    with terminal.raw_mode():
        while True:
            current_size = terminal.size()
            if current_size != size:
                size = current_size
                dispatcher.set_viewport(*size)
                model = dispatcher.render()
                dirty = True
            if dirty:
                terminal.write(render_frame(model, size[0], size[1], color))
                dirty = False

            key = ops.read_key(stdin_fd, KEY_POLL_MS)
            if not key:
                continue
            model = dispatcher.handle_input(key)
            dirty = True

            action = model.exit_action
            if action is None:
                continue
            if action.kind is ExitKind.QUIT:
                logger.info("quit requested")
                return
            if action.kind is ExitKind.SPAWN_SHELL and action.path is not None:
                error = ops.launch_shell(action.path, terminal.disable_tui_mode, terminal.enable_tui_mode)
                model = dispatcher.resume_after_shell()
                if error is not None:
                    dispatcher.notify(Advisory.error(error))
                    model = dispatcher.render()
                # The shell may have resized the terminal.
                size = None


__all__ = ["RuntimeLoopCallbacks", "run_main_loop"]
