"""Shell hand-off: run the user's shell in a directory, then resume the TUI.

Runs ``$SHELL`` (or ``/bin/sh``) while temporarily leaving raw/alternate-screen
mode. Returns an error message string instead of raising for UI-friendly
handling.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)

FALLBACK_SHELL = "/bin/sh"


def shell_command() -> list[str]:
    shell_env = os.environ.get("SHELL", "").strip()
    cmd = shlex.split(shell_env) if shell_env else []
    return cmd or [FALLBACK_SHELL]


def launch_shell(
    directory: Path,
    disable_tui_mode: Callable[[], None],
    enable_tui_mode: Callable[[], None],
) -> str | None:
    cmd = shell_command()
    logger.info("spawning %s in %s", cmd[0], directory)
    disable_tui_mode()
    try:
        subprocess.run(cmd, cwd=directory, check=False)
    except OSError as exc:
        logger.warning("shell launch failed: %s", exc)
        return f"Failed to launch shell: {exc}"
    finally:
        enable_tui_mode()
    return None


__all__ = ["FALLBACK_SHELL", "launch_shell", "shell_command"]
