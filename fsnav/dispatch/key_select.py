"""Multi-select and pattern-select keyboard handling."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..input import KeyComboBinding, KeyComboRegistry
from .modes import Mode, PatternSelectSession

if TYPE_CHECKING:
    from .dispatcher import ModeDispatcher


def text_char(key: str) -> str | None:
    """The character a key types into a text field, if any."""
    if key == "SPACE":
        return " "
    if len(key) == 1 and key.isprintable():
        return key
    return None


def handle_multi_select_key(dispatcher: ModeDispatcher, key: str) -> None:
    cursor = dispatcher.active_cursor

    def toggle_and_advance() -> None:
        cursor.toggle_mark()
        cursor.move_selection(1)

    def mark_all() -> None:
        cursor.mark_matching(lambda _entry: True)

    def open_editor(mode: Mode):
        def open_mode() -> None:
            dispatcher.enter_mode(mode)

        return open_mode

    KeyComboRegistry().register_bindings(
        KeyComboBinding(("UP", "k"), lambda: dispatcher.move_selection(-1)),
        KeyComboBinding(("DOWN", "j"), lambda: dispatcher.move_selection(1)),
        KeyComboBinding(("PAGE_UP",), lambda: dispatcher.page(-1)),
        KeyComboBinding(("PAGE_DOWN",), lambda: dispatcher.page(1)),
        KeyComboBinding(("HOME", "g"), lambda: dispatcher.move_to_edge(end=False)),
        KeyComboBinding(("END", "G"), lambda: dispatcher.move_to_edge(end=True)),
        KeyComboBinding(("SPACE", "s"), toggle_and_advance),
        KeyComboBinding(("a",), mark_all),
        KeyComboBinding(("n",), cursor.clear_marks),
        KeyComboBinding(("c",), open_editor(Mode.PERMISSION_EDIT)),
        KeyComboBinding(("o",), open_editor(Mode.OWNERSHIP_EDIT)),
        KeyComboBinding(("p",), open_editor(Mode.PATTERN_SELECT)),
        KeyComboBinding(("ESC",), dispatcher.exit_to_base),
    ).dispatch(key)


def handle_pattern_select_key(dispatcher: ModeDispatcher, key: str) -> None:
    session = dispatcher.session
    assert isinstance(session, PatternSelectSession)

    def backspace() -> None:
        session.pattern = session.pattern[:-1]
        dispatcher.apply_pattern(session)

    def keep_matches() -> None:
        dispatcher.enter_mode(Mode.MULTI_SELECT)

    handled = KeyComboRegistry().register_bindings(
        KeyComboBinding(("BACKSPACE",), backspace),
        KeyComboBinding(("ENTER",), keep_matches),
        KeyComboBinding(("ESC",), dispatcher.exit_to_base),
    ).dispatch(key)
    if handled is not None:
        return

    ch = text_char(key)
    if ch is not None:
        session.pattern += ch
        dispatcher.apply_pattern(session)


__all__ = ["handle_multi_select_key", "handle_pattern_select_key", "text_char"]
