"""Base-mode keyboard handling (``NORMAL`` and ``SPLIT_PANE``)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..directory_pane import DirectoryCursor
from ..input import KeyComboBinding, KeyComboRegistry, dispatch_first
from ..split import RATIO_STEP, SplitCoordinator
from .modes import Mode

if TYPE_CHECKING:
    from .dispatcher import ModeDispatcher


def handle_base_key(dispatcher: ModeDispatcher, key: str) -> None:
    """Handle one key while no overlay session is active."""

    def enter_multi_select_marking() -> None:
        if dispatcher.enter_mode(Mode.MULTI_SELECT):
            cursor = dispatcher.active_cursor
            cursor.toggle_mark()
            cursor.move_selection(1)

    def begin_bookmark_jump() -> None:
        dispatcher.pending_bookmark_jump = True

    def toggle_help() -> None:
        dispatcher.show_help = not dispatcher.show_help

    def quit_or_leave_split() -> None:
        if dispatcher.split_active:
            dispatcher.toggle_split()
        else:
            dispatcher.quit()

    movement = KeyComboRegistry().register_bindings(
        KeyComboBinding(("UP", "k"), lambda: dispatcher.move_selection(-1)),
        KeyComboBinding(("DOWN", "j"), lambda: dispatcher.move_selection(1)),
        KeyComboBinding(("PAGE_UP",), lambda: dispatcher.page(-1)),
        KeyComboBinding(("PAGE_DOWN",), lambda: dispatcher.page(1)),
        KeyComboBinding(("HOME", "g"), lambda: dispatcher.move_to_edge(end=False)),
        KeyComboBinding(("END", "G"), lambda: dispatcher.move_to_edge(end=True)),
        KeyComboBinding(("RIGHT", "l", "ENTER"), lambda: dispatcher.navigate(DirectoryCursor.enter_selected)),
        KeyComboBinding(("LEFT", "h", "BACKSPACE"), lambda: dispatcher.navigate(DirectoryCursor.go_parent)),
    )

    overlays = KeyComboRegistry().register_bindings(
        KeyComboBinding(("/", "CTRL_F"), _opener(dispatcher, Mode.SEARCH)),
        KeyComboBinding(("v", "CTRL_P"), _opener(dispatcher, Mode.PREVIEW)),
        KeyComboBinding(("b", "CTRL_B"), _opener(dispatcher, Mode.BOOKMARKS)),
        KeyComboBinding(("s",), _opener(dispatcher, Mode.MULTI_SELECT)),
        KeyComboBinding(("SPACE",), enter_multi_select_marking),
        KeyComboBinding(("p",), _opener(dispatcher, Mode.PATTERN_SELECT)),
        KeyComboBinding(("c",), _opener(dispatcher, Mode.PERMISSION_EDIT)),
        KeyComboBinding(("o",), _opener(dispatcher, Mode.OWNERSHIP_EDIT)),
    )

    actions = KeyComboRegistry().register_bindings(
        KeyComboBinding(("'",), begin_bookmark_jump),
        KeyComboBinding(("m",), dispatcher.add_bookmark),
        KeyComboBinding((".",), dispatcher.toggle_hidden),
        KeyComboBinding(("r", "CTRL_R"), dispatcher.refresh),
        KeyComboBinding(("F2", "w"), dispatcher.toggle_split),
        KeyComboBinding(("S", "CTRL_D"), dispatcher.request_shell),
        KeyComboBinding(("?",), toggle_help),
        KeyComboBinding(("q", "ESC"), quit_or_leave_split),
    )

    registries = [movement, overlays, actions]
    if dispatcher.split_active:
        registries.insert(0, _split_bindings(dispatcher))
    dispatch_first(key, *registries)


def _opener(dispatcher: ModeDispatcher, mode: Mode):
    def open_mode() -> None:
        dispatcher.enter_mode(mode)

    return open_mode


def _split_bindings(dispatcher: ModeDispatcher) -> KeyComboRegistry:
    def switch_side() -> None:
        dispatcher.split_action(lambda split: split.switch_side())

    return KeyComboRegistry().register_bindings(
        KeyComboBinding(("TAB",), switch_side),
        KeyComboBinding(("F5", "="), lambda: dispatcher.split_action(SplitCoordinator.sync)),
        KeyComboBinding(("F6", "|"), dispatcher.toggle_orientation),
        KeyComboBinding(("+",), lambda: dispatcher.adjust_ratio(RATIO_STEP)),
        KeyComboBinding(("-",), lambda: dispatcher.adjust_ratio(-RATIO_STEP)),
        KeyComboBinding(("L",), lambda: dispatcher.split_action(SplitCoordinator.toggle_sync_lock)),
    )


__all__ = ["handle_base_key"]
