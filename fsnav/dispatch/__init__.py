"""Mode state machine, per-mode key handling and the render model."""

from __future__ import annotations

from .dispatcher import CHROME_ROWS, ModeDispatcher
from .help import MODE_HELP, help_lines_for
from .modes import BookmarksSession, Mode, MultiSelectSession, PatternSelectSession, mode_for
from .render_model import EntryRow, ExitAction, ExitKind, LayoutView, OverlayView, PaneView, RenderModel

__all__ = [
    "BookmarksSession",
    "CHROME_ROWS",
    "EntryRow",
    "ExitAction",
    "ExitKind",
    "LayoutView",
    "MODE_HELP",
    "Mode",
    "ModeDispatcher",
    "MultiSelectSession",
    "OverlayView",
    "PaneView",
    "PatternSelectSession",
    "RenderModel",
    "help_lines_for",
    "mode_for",
]
