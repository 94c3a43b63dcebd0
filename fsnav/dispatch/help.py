"""Contextual key help shown when the operator presses ``?``."""

from __future__ import annotations

from .modes import Mode

HelpLine = tuple[str, str]

_BASE_HELP: tuple[HelpLine, ...] = (
    ("j/k Up/Down PgUp/PgDn g/G", "move selection"),
    ("l/Right/Enter  h/Left/Backspace", "enter directory / parent"),
    ("/ Ctrl+F", "search"),
    ("v Ctrl+P", "preview"),
    ("b Ctrl+B  m  '{key}", "bookmarks / add bookmark / jump"),
    ("s Space  p", "multi-select / select by pattern"),
    ("c  o", "permissions / ownership (root)"),
    (".  r", "hidden files / refresh"),
    ("F2 w", "split pane"),
    ("S Ctrl+D", "shell here"),
    ("?  q", "help / quit"),
)

_SPLIT_HELP: tuple[HelpLine, ...] = (
    ("Tab", "switch side"),
    ("F5 =", "sync other side to this path"),
    ("F6 |", "toggle orientation"),
    ("+ -", "resize split"),
    ("L", "sync lock"),
    ("Esc", "leave split"),
)

MODE_HELP: dict[Mode, tuple[HelpLine, ...]] = {
    Mode.NORMAL: _BASE_HELP,
    Mode.SPLIT_PANE: _BASE_HELP + _SPLIT_HELP,
    Mode.MULTI_SELECT: (
        ("Space s", "toggle mark and move down"),
        ("a  n", "mark all / clear marks"),
        ("c  o", "edit permissions / ownership of marked"),
        ("p", "select by pattern"),
        ("Esc", "clear marks and leave"),
    ),
    Mode.PATTERN_SELECT: (
        ("type", "glob (*, ?), regex, or substring"),
        ("Enter", "keep matches as marks"),
        ("Esc", "cancel"),
    ),
    Mode.PERMISSION_EDIT: (
        ("Left/Right", "choose owner/group/other"),
        ("Up/Down  0-7", "change digit"),
        ("t", "templates"),
        ("Enter", "apply"),
        ("Esc", "cancel"),
    ),
    Mode.OWNERSHIP_EDIT: (
        ("Tab", "users / groups / options"),
        ("type  Backspace", "filter focused list"),
        ("Space Ctrl+R", "toggle recursive"),
        ("Enter", "review changes"),
        ("y/Enter  n", "confirm / back"),
        ("Esc", "cancel"),
    ),
    Mode.SEARCH: (
        ("type  Backspace", "edit query"),
        ("Ctrl+R Ctrl+T Ctrl+G", "regex / case / contents"),
        ("Down Ctrl+N  Up Ctrl+P", "next / previous match"),
        ("Enter", "keep selection"),
        ("Esc", "cancel"),
    ),
    Mode.PREVIEW: (
        ("j/k Up/Down", "scroll"),
        ("PgUp/PgDn Space  g/Home", "page / top"),
        ("q Esc", "close"),
    ),
    Mode.BOOKMARKS: (
        ("j/k Up/Down  Enter", "choose / jump"),
        ("a  d  r", "add current / delete / rename"),
        ("s", "sort by frequency or name"),
        ("q Esc", "close"),
    ),
}


def help_lines_for(mode: Mode) -> tuple[str, ...]:
    width = max(len(keys) for keys, _ in MODE_HELP[mode])
    return tuple(f"{keys:<{width}}  {action}" for keys, action in MODE_HELP[mode])


__all__ = ["MODE_HELP", "help_lines_for"]
