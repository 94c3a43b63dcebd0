"""Permission and ownership editor keyboard handling."""

from __future__ import annotations

import string
from typing import TYPE_CHECKING

from ..editors import Focus, OwnershipSession, PermissionSession
from ..input import KeyComboBinding, KeyComboRegistry
from .key_select import text_char

if TYPE_CHECKING:
    from .dispatcher import ModeDispatcher


def handle_permission_key(dispatcher: ModeDispatcher, key: str) -> None:
    session = dispatcher.session
    assert isinstance(session, PermissionSession)

    if key == "ESC":
        dispatcher.exit_to_base()
        return
    if key == "t":
        session.toggle_templates()
        return

    if session.templates_visible:
        KeyComboRegistry().register_bindings(
            KeyComboBinding(("UP", "k"), lambda: session.move_template(-1)),
            KeyComboBinding(("DOWN", "j"), lambda: session.move_template(1)),
            KeyComboBinding(("ENTER",), session.apply_template),
        ).dispatch(key)
        return

    if len(key) == 1 and key in string.digits:
        session.set_digit(int(key))
        return

    KeyComboRegistry().register_bindings(
        KeyComboBinding(("LEFT", "h"), lambda: session.move_cursor(-1)),
        KeyComboBinding(("RIGHT", "l", "TAB"), lambda: session.move_cursor(1)),
        KeyComboBinding(("UP", "k"), lambda: session.adjust(1)),
        KeyComboBinding(("DOWN", "j"), lambda: session.adjust(-1)),
        KeyComboBinding(("ENTER",), lambda: dispatcher.commit_editor(session)),
    ).dispatch(key)


def handle_ownership_key(dispatcher: ModeDispatcher, key: str) -> None:
    session = dispatcher.session
    assert isinstance(session, OwnershipSession)

    if key == "ESC":
        dispatcher.exit_to_base()
        return

    if session.focus is Focus.CONFIRM:
        KeyComboRegistry().register_bindings(
            KeyComboBinding(("y", "Y", "ENTER"), lambda: dispatcher.commit_editor(session)),
            KeyComboBinding(("n", "N"), session.back_to_pickers),
        ).dispatch(key)
        return

    def space() -> None:
        if session.focus is Focus.OPTIONS:
            session.toggle_recursive()
        else:
            session.type_char(" ")

    def review() -> None:
        session.plan()

    handled = KeyComboRegistry().register_bindings(
        KeyComboBinding(("TAB",), session.cycle_focus),
        KeyComboBinding(("UP",), lambda: session.move(-1)),
        KeyComboBinding(("DOWN",), lambda: session.move(1)),
        KeyComboBinding(("CTRL_R",), session.toggle_recursive),
        KeyComboBinding(("SPACE",), space),
        KeyComboBinding(("BACKSPACE",), session.backspace),
        KeyComboBinding(("ENTER",), review),
    ).dispatch(key)
    if handled is not None:
        return

    ch = text_char(key)
    if ch is not None:
        session.type_char(ch)


__all__ = ["handle_ownership_key", "handle_permission_key"]
