"""Interaction modes and the small sessions owned by the dispatcher.

The dispatcher holds at most one session object. Its type decides the active
mode; with no session the mode is the base (``NORMAL`` or ``SPLIT_PANE``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from ..bookmarks import SORT_FREQUENCY, SORT_NAME
from ..editors import OwnershipSession, PermissionSession
from ..preview import PreviewSession
from ..search import SearchSession


class Mode(Enum):
    NORMAL = "normal"
    MULTI_SELECT = "multi_select"
    PATTERN_SELECT = "pattern_select"
    PERMISSION_EDIT = "permission_edit"
    OWNERSHIP_EDIT = "ownership_edit"
    SEARCH = "search"
    PREVIEW = "preview"
    BOOKMARKS = "bookmarks"
    SPLIT_PANE = "split_pane"


ROOT_ONLY_MODES = frozenset({Mode.PERMISSION_EDIT, Mode.OWNERSHIP_EDIT})


@dataclass
class MultiSelectSession:
    """Marks live on the cursor; the session only marks the mode as active."""


@dataclass
class PatternSelectSession:
    pattern: str = ""
    matched: int = 0


@dataclass
class BookmarksSession:
    selected: int = 0
    sort_by: str = SORT_FREQUENCY
    rename_buffer: str | None = None

    def toggle_sort(self) -> None:
        self.sort_by = SORT_NAME if self.sort_by == SORT_FREQUENCY else SORT_FREQUENCY
        self.selected = 0


Session = Union[
    MultiSelectSession,
    PatternSelectSession,
    PermissionSession,
    OwnershipSession,
    SearchSession,
    PreviewSession,
    BookmarksSession,
]

_SESSION_MODES: dict[type, Mode] = {
    MultiSelectSession: Mode.MULTI_SELECT,
    PatternSelectSession: Mode.PATTERN_SELECT,
    PermissionSession: Mode.PERMISSION_EDIT,
    OwnershipSession: Mode.OWNERSHIP_EDIT,
    SearchSession: Mode.SEARCH,
    PreviewSession: Mode.PREVIEW,
    BookmarksSession: Mode.BOOKMARKS,
}


def mode_for(session: Session | None, split_active: bool) -> Mode:
    if session is None:
        return Mode.SPLIT_PANE if split_active else Mode.NORMAL
    return _SESSION_MODES[type(session)]


__all__ = [
    "BookmarksSession",
    "Mode",
    "MultiSelectSession",
    "PatternSelectSession",
    "ROOT_ONLY_MODES",
    "Session",
    "mode_for",
]
