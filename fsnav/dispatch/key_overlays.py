"""Search, preview and bookmark overlay keyboard handling."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..errors import Advisory
from ..input import KeyComboBinding, KeyComboRegistry
from ..preview import PreviewSession
from ..search import SearchSession
from .key_select import text_char
from .modes import BookmarksSession

if TYPE_CHECKING:
    from .dispatcher import ModeDispatcher


def handle_search_key(dispatcher: ModeDispatcher, key: str) -> None:
    session = dispatcher.session
    assert isinstance(session, SearchSession)

    def cancel() -> None:
        session.restore_origin()
        dispatcher.exit_to_base()

    def next_match() -> None:
        session.next()

    def previous_match() -> None:
        session.previous()

    handled = KeyComboRegistry().register_bindings(
        KeyComboBinding(("BACKSPACE",), session.backspace),
        KeyComboBinding(("CTRL_R",), session.toggle_regex),
        KeyComboBinding(("CTRL_T",), session.toggle_case_sensitive),
        KeyComboBinding(("CTRL_G",), session.toggle_content_mode),
        KeyComboBinding(("DOWN", "CTRL_N"), next_match),
        KeyComboBinding(("UP", "CTRL_P"), previous_match),
        KeyComboBinding(("ENTER",), dispatcher.exit_to_base),
        KeyComboBinding(("ESC",), cancel),
    ).dispatch(key)
    if handled is not None:
        return

    ch = text_char(key)
    if ch is not None:
        session.type_char(ch)


def handle_preview_key(dispatcher: ModeDispatcher, key: str) -> None:
    session = dispatcher.session
    assert isinstance(session, PreviewSession)

    KeyComboRegistry().register_bindings(
        KeyComboBinding(("UP", "k"), lambda: session.scroll_by(-1)),
        KeyComboBinding(("DOWN", "j"), lambda: session.scroll_by(1)),
        KeyComboBinding(("PAGE_UP",), session.page_up),
        KeyComboBinding(("PAGE_DOWN", "SPACE"), session.page_down),
        KeyComboBinding(("HOME", "g"), session.scroll_to_top),
        KeyComboBinding(("END", "G"), lambda: session.scroll_by(session.max_scroll)),
        KeyComboBinding(("ESC", "q", "v"), dispatcher.exit_to_base),
    ).dispatch(key)


def handle_bookmarks_key(dispatcher: ModeDispatcher, key: str) -> None:
    session = dispatcher.session
    assert isinstance(session, BookmarksSession)
    store = dispatcher.bookmarks

    if key == "ESC":
        dispatcher.exit_to_base()
        return

    if session.rename_buffer is not None:
        _handle_rename_key(dispatcher, session, key)
        return

    records = store.list(session.sort_by)

    def selected_shortcut() -> str | None:
        if not records:
            return None
        return records[min(session.selected, len(records) - 1)].shortcut

    def move(delta: int) -> None:
        if records:
            session.selected = max(0, min(len(records) - 1, session.selected + delta))

    def jump() -> None:
        shortcut = selected_shortcut()
        if shortcut is not None:
            dispatcher.jump_to_bookmark(shortcut)

    def delete() -> None:
        shortcut = selected_shortcut()
        if shortcut is None:
            return
        removed = store.remove(shortcut)
        session.selected = max(0, min(session.selected, len(records) - 2))
        dispatcher.notify(Advisory.info(f"Removed bookmark '{removed.shortcut}' ({removed.label})"))

    def begin_rename() -> None:
        shortcut = selected_shortcut()
        if shortcut is not None:
            session.rename_buffer = store.get(shortcut).label

    KeyComboRegistry().register_bindings(
        KeyComboBinding(("UP", "k"), lambda: move(-1)),
        KeyComboBinding(("DOWN", "j"), lambda: move(1)),
        KeyComboBinding(("ENTER",), jump),
        KeyComboBinding(("a",), dispatcher.add_bookmark),
        KeyComboBinding(("d",), delete),
        KeyComboBinding(("r",), begin_rename),
        KeyComboBinding(("s",), session.toggle_sort),
        KeyComboBinding(("q",), dispatcher.exit_to_base),
    ).dispatch(key)


def _handle_rename_key(dispatcher: ModeDispatcher, session: BookmarksSession, key: str) -> None:
    store = dispatcher.bookmarks
    records = store.list(session.sort_by)
    buffer = session.rename_buffer or ""

    if key == "ENTER":
        session.rename_buffer = None
        if records:
            shortcut = records[min(session.selected, len(records) - 1)].shortcut
            store.rename(shortcut, buffer)
        return
    if key == "BACKSPACE":
        session.rename_buffer = buffer[:-1]
        return
    ch = text_char(key)
    if ch is not None:
        session.rename_buffer = buffer + ch


__all__ = ["handle_bookmarks_key", "handle_preview_key", "handle_search_key"]
