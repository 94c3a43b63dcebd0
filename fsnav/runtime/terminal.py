"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle and alternate-screen switching. The controller is the
only place that touches terminal attributes, so a shell hand-off can give the
terminal back and take it again without leaking state.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

DEFAULT_SIZE = (80, 24)


class TerminalController:
    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self.active = False

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen and hide cursor.
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")
        self.active = True

    def disable_tui_mode(self) -> None:
        # Show cursor, reset attributes and restore the main screen buffer.
        os.write(self.stdout_fd, b"\x1b[0m\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        self.active = False

    def size(self) -> tuple[int, int]:
        """Current ``(columns, lines)``."""
        term = shutil.get_terminal_size(DEFAULT_SIZE)
        return max(1, term.columns), max(1, term.lines)

    def write(self, data: str) -> None:
        os.write(self.stdout_fd, data.encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self):
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()


__all__ = ["TerminalController"]
