"""Mode dispatcher: the navigation state machine.

The dispatcher owns the primary directory cursor, the split coordinator (once
split has been used), the bookmark store and at most one mode session. Each
key goes to exactly one mode handler; every recoverable failure becomes an
advisory on the next render model instead of propagating to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path

from ..bookmarks import BookmarkStore
from ..directory_pane import DirectoryCursor, match_pattern
from ..editors import GroupInfo, OwnershipSession, PermissionSession, UserInfo, load_groups, load_users
from ..entry_model import FilesystemOps
from ..errors import Advisory, FsnavError
from ..preview import PreviewSession
from ..preview.syntax import DEFAULT_STYLE
from ..runtime.config import Preferences
from ..search import SearchSession
from ..split import Side, SplitCoordinator
from .help import help_lines_for
from .key_base import handle_base_key
from .key_editors import handle_ownership_key, handle_permission_key
from .key_overlays import handle_bookmarks_key, handle_preview_key, handle_search_key
from .key_select import handle_multi_select_key, handle_pattern_select_key
from .modes import (
    BookmarksSession,
    Mode,
    MultiSelectSession,
    PatternSelectSession,
    ROOT_ONLY_MODES,
    Session,
    mode_for,
)
from .overlays import OVERLAY_CHROME_ROWS, build_overlay
from .render_model import ExitAction, ExitKind, LayoutView, RenderModel, pane_view

logger = logging.getLogger(__name__)

CHROME_ROWS = 3
# Modes that act on the current marks, so entering them keeps the marks.
MARK_CONSUMING_MODES = ROOT_ONLY_MODES | {Mode.MULTI_SELECT, Mode.PATTERN_SELECT}
DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24

MODE_HANDLERS = {
    Mode.NORMAL: handle_base_key,
    Mode.SPLIT_PANE: handle_base_key,
    Mode.MULTI_SELECT: handle_multi_select_key,
    Mode.PATTERN_SELECT: handle_pattern_select_key,
    Mode.PERMISSION_EDIT: handle_permission_key,
    Mode.OWNERSHIP_EDIT: handle_ownership_key,
    Mode.SEARCH: handle_search_key,
    Mode.PREVIEW: handle_preview_key,
    Mode.BOOKMARKS: handle_bookmarks_key,
}


class ModeDispatcher:
    def __init__(
        self,
        cursor: DirectoryCursor,
        bookmarks: BookmarkStore,
        *,
        elevated: bool = False,
        fs: FilesystemOps | None = None,
        preferences: Preferences | None = None,
        save_preferences: Callable[[Preferences], None] | None = None,
        color: bool = True,
        style: str = DEFAULT_STYLE,
        users_loader: Callable[[], list[UserInfo]] = load_users,
        groups_loader: Callable[[], list[GroupInfo]] = load_groups,
    ) -> None:
        self.cursor = cursor
        self.bookmarks = bookmarks
        self.elevated = elevated
        self.fs = fs if fs is not None else cursor.fs
        self.preferences = preferences if preferences is not None else Preferences(show_hidden=cursor.show_hidden)
        self._save_preferences = save_preferences
        self.color = color
        self.style = style
        self._users_loader = users_loader
        self._groups_loader = groups_loader

        self.session: Session | None = None
        self.split: SplitCoordinator | None = None
        self.split_active = False
        self.pending_bookmark_jump = False
        self.show_help = False
        self.exit_action: ExitAction | None = None
        self.advisories: list[Advisory] = []
        self.width = DEFAULT_WIDTH
        self.height = DEFAULT_HEIGHT
        self._apply_viewport()

    # -- state queries -----------------------------------------------------

    @property
    def mode(self) -> Mode:
        return mode_for(self.session, self.split_active)

    @property
    def active_cursor(self) -> DirectoryCursor:
        if self.split_active and self.split is not None:
            return self.split.active
        return self.cursor

    def all_cursors(self) -> list[DirectoryCursor]:
        if self.split is None:
            return [self.cursor]
        return [self.split.left, self.split.right]

    # -- entry points ------------------------------------------------------

    def handle_input(self, key: str) -> RenderModel:
        """Process one key token and return the resulting render model."""
        self.advisories = []
        if self.exit_action is not None and self.exit_action.kind is ExitKind.QUIT:
            return self.render()
        try:
            self._dispatch(key)
        except FsnavError as exc:
            self.notify(Advisory.from_exception(exc))
        except OSError as exc:
            logger.info("operation failed: %s", exc)
            self.notify(Advisory.from_exception(exc))
        self._report_bookmark_persist_error()
        return self.render()

    def render(self) -> RenderModel:
        mode = self.mode
        if self.split_active and self.split is not None:
            panes = (
                pane_view(self.split.left, active=self.split.active_side is Side.LEFT),
                pane_view(self.split.right, active=self.split.active_side is Side.RIGHT),
            )
            active_pane = 0 if self.split.active_side is Side.LEFT else 1
            layout = LayoutView(
                orientation=self.split.orientation.value,
                ratio=self.split.split_ratio,
                synced=self.split.synced,
            )
        else:
            panes = (pane_view(self.cursor),)
            active_pane = 0
            layout = None
        return RenderModel(
            mode=mode,
            panes=panes,
            active_pane=active_pane,
            layout=layout,
            overlay=build_overlay(self.session, self.bookmarks, self.body_rows),
            advisories=tuple(self.advisories),
            help_lines=help_lines_for(mode) if self.show_help else (),
            elevated=self.elevated,
            exit_action=self.exit_action,
        )

    def set_viewport(self, width: int, height: int) -> None:
        self.width = max(1, width)
        self.height = max(CHROME_ROWS + 2, height)
        self._apply_viewport()

    def notify(self, advisory: Advisory | None) -> None:
        if advisory is not None:
            self.advisories.append(advisory)

    # -- viewport ----------------------------------------------------------

    @property
    def body_rows(self) -> int:
        return max(2, self.height - CHROME_ROWS)

    @property
    def preview_rows(self) -> int:
        return max(1, self.body_rows - OVERLAY_CHROME_ROWS)

    def _apply_viewport(self) -> None:
        body = self.body_rows
        if self.split_active and self.split is not None:
            (_lw, left_rows), (_rw, right_rows) = self.split.pane_sizes(self.width, body)
            self.split.left.set_viewport_rows(left_rows - 1)
            self.split.right.set_viewport_rows(right_rows - 1)
        else:
            self.cursor.set_viewport_rows(body - 1)
        if isinstance(self.session, PreviewSession):
            self.session.resize(self.width, self.preview_rows)

    # -- dispatch ----------------------------------------------------------

    def _dispatch(self, key: str) -> None:
        if self.pending_bookmark_jump:
            self.pending_bookmark_jump = False
            if key != "ESC":
                self.jump_to_bookmark(key)
            return

        MODE_HANDLERS[self.mode](self, key)

    # -- mode transitions --------------------------------------------------

    def _drop_session(self) -> None:
        """Discard the active session; selection marks go with it."""
        if self.session is None:
            return
        self.session = None
        self.active_cursor.clear_marks()

    def exit_to_base(self) -> None:
        self._drop_session()

    def enter_mode(self, mode: Mode) -> bool:
        """Switch to ``mode``, replacing any current session.

        Root-only modes without privilege, and editors with nothing to edit,
        are refused with a notice and leave the current mode untouched.
        """
        if mode in (Mode.NORMAL, Mode.SPLIT_PANE):
            self.exit_to_base()
            return True
        if mode in ROOT_ONLY_MODES and not self.elevated:
            self.notify(Advisory.info("Permission and ownership editing require root"))
            return False

        cursor = self.active_cursor
        session = self._build_session(mode, cursor)
        if session is None:
            return False
        if mode in MARK_CONSUMING_MODES:
            self.session = None
        else:
            self._drop_session()
        self.session = session
        return True

    def _build_session(self, mode: Mode, cursor: DirectoryCursor) -> Session | None:
        if mode is Mode.MULTI_SELECT:
            return MultiSelectSession()
        if mode is Mode.PATTERN_SELECT:
            return PatternSelectSession()
        if mode is Mode.BOOKMARKS:
            return BookmarksSession()
        if mode is Mode.SEARCH:
            return SearchSession(cursor)
        if mode is Mode.PREVIEW:
            entry = cursor.selected_entry
            if entry is None:
                self.notify(Advisory.info("Nothing to preview"))
                return None
            session = PreviewSession(
                entry,
                width=self.width,
                height=self.preview_rows,
                color=self.color,
                style=self.style,
                show_hidden=cursor.show_hidden,
                fs=self.fs,
            )
            self.notify(session.advisory)
            return session

        targets = cursor.target_entries()
        if not targets:
            self.notify(Advisory.info("Nothing selected"))
            return None
        if mode is Mode.PERMISSION_EDIT:
            return PermissionSession(targets, self.fs)
        if mode is Mode.OWNERSHIP_EDIT:
            return OwnershipSession(
                targets,
                self.fs,
                users_loader=self._users_loader,
                groups_loader=self._groups_loader,
            )
        raise ValueError(f"not an overlay mode: {mode}")

    # -- navigation --------------------------------------------------------

    def navigate(self, step: Callable[[DirectoryCursor], Advisory | None]) -> None:
        """Run a path-changing step on the active cursor."""
        self.notify(step(self.active_cursor))
        if self.split_active and self.split is not None:
            self.notify(self.split.after_navigation())

    def move_selection(self, delta: int) -> None:
        self.active_cursor.move_selection(delta)

    def page(self, direction: int) -> None:
        cursor = self.active_cursor
        self.move_selection(direction * cursor.viewport_rows)

    def move_to_edge(self, end: bool) -> None:
        cursor = self.active_cursor
        if cursor.entries:
            cursor.move_to_index(len(cursor.entries) - 1 if end else 0)

    def toggle_hidden(self) -> None:
        show_hidden = not self.preferences.show_hidden
        for cursor in self.all_cursors():
            self.notify(cursor.set_show_hidden(show_hidden))
        self._update_preferences(show_hidden=show_hidden)
        self.notify(Advisory.info("Showing hidden files" if show_hidden else "Hiding hidden files"))

    def refresh(self) -> None:
        self.navigate(DirectoryCursor.refresh)

    # -- split -------------------------------------------------------------

    def toggle_split(self) -> None:
        if self.split_active:
            self.split_active = False
            self._apply_viewport()
            return
        if self.split is None:
            right, advisory = DirectoryCursor.open(
                self.cursor.path.parent,
                show_hidden=self.cursor.show_hidden,
                fs=self.fs,
            )
            self.notify(advisory)
            self.split = SplitCoordinator(
                self.cursor,
                right,
                orientation=self.preferences.split_orientation,
                ratio=self.preferences.split_ratio,
            )
        self.split_active = True
        self._apply_viewport()

    def split_action(self, action: Callable[[SplitCoordinator], Advisory | None]) -> None:
        if not self.split_active or self.split is None:
            return
        self.notify(action(self.split))
        self._apply_viewport()

    def toggle_orientation(self) -> None:
        if not self.split_active or self.split is None:
            return
        self.split.toggle_orientation()
        self._apply_viewport()
        self._update_preferences(split_orientation=self.split.orientation)

    def adjust_ratio(self, delta: float) -> None:
        if not self.split_active or self.split is None:
            return
        self.split.adjust_ratio(delta)
        self._apply_viewport()
        self._update_preferences(split_ratio=self.split.split_ratio)

    def _update_preferences(self, **changes) -> None:
        self.preferences = replace(self.preferences, **changes)
        if self._save_preferences is not None:
            self._save_preferences(self.preferences)

    # -- bookmarks ---------------------------------------------------------

    def add_bookmark(self, path: Path | None = None) -> None:
        target = path if path is not None else self.active_cursor.path
        bookmark = self.bookmarks.add(target)
        self.notify(Advisory.info(f"Bookmarked {bookmark.path} on '{bookmark.shortcut}'"))

    def jump_to_bookmark(self, shortcut: str) -> None:
        path = self.bookmarks.jump(shortcut)
        self.exit_to_base()
        self.navigate(lambda cursor: cursor.load(path))

    def _report_bookmark_persist_error(self) -> None:
        error = self.bookmarks.take_persist_error()
        if error is not None:
            self.notify(Advisory.from_exception(error, "Could not save bookmarks"))

    # -- pattern select ----------------------------------------------------

    def apply_pattern(self, session: PatternSelectSession) -> None:
        pattern = session.pattern
        cursor = self.active_cursor
        if not pattern:
            cursor.clear_marks()
            session.matched = 0
            return
        session.matched = cursor.mark_matching(lambda entry: match_pattern(pattern, entry.name))

    # -- editors -----------------------------------------------------------

    def commit_editor(self, session: PermissionSession | OwnershipSession) -> None:
        result = session.apply()
        self.notify(result.advisory())
        self.exit_to_base()
        self.refresh()

    # -- process-level actions ---------------------------------------------

    def request_shell(self) -> None:
        self.exit_action = ExitAction.spawn_shell(self.active_cursor.path)

    def resume_after_shell(self) -> RenderModel:
        """Called by the runtime once the shell exits."""
        self.advisories = []
        self.exit_action = None
        self.refresh()
        return self.render()

    def quit(self) -> None:
        self.exit_action = ExitAction.quit()


__all__ = ["CHROME_ROWS", "OVERLAY_CHROME_ROWS", "ModeDispatcher"]
