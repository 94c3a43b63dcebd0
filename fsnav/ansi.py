"""ANSI-aware width measurement, clipping and wrapping.

Escape sequences pass through untouched and take no columns; tabs expand to
8-column stops and wide characters take two cells.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
RESET = "\033[0m"


def char_display_width(ch: str, col: int) -> int:
    """Columns taken by ``ch`` when drawn at visual column ``col``."""
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def _tokens(text: str):
    """Yield ``(is_escape, chunk)`` pairs; plain chunks are single characters."""
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                yield True, match.group(0)
                i = match.end()
                continue
        yield False, text[i]
        i += 1


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to ``max_cols`` display columns, expanding tabs."""
    if max_cols <= 0 or not text:
        return ""
    out: list[str] = []
    col = 0
    for is_escape, chunk in _tokens(text):
        if is_escape:
            out.append(chunk)
            continue
        width = char_display_width(chunk, col)
        if col + width > max_cols:
            break
        out.append(" " * width if chunk == "\t" else chunk)
        col += width
    return "".join(out)


def wrap_ansi_line(text: str, width: int) -> list[str]:
    """Split a styled line into rows of at most ``width`` columns."""
    if width <= 0 or not text:
        return [""]
    rows: list[str] = []
    row: list[str] = []
    col = 0
    for is_escape, chunk in _tokens(text):
        if is_escape:
            row.append(chunk)
            continue
        char_width = char_display_width(chunk, col)
        if col + char_width > width and col > 0:
            rows.append("".join(row))
            row = []
            col = 0
            char_width = char_display_width(chunk, col)
        row.append(" " * char_width if chunk == "\t" else chunk)
        col += char_width
    rows.append("".join(row))
    return rows


def pad_ansi_line(text: str, width: int) -> str:
    """Clip to ``width`` and pad with spaces so rows overwrite stale cells."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


__all__ = [
    "ANSI_ESCAPE_RE",
    "RESET",
    "char_display_width",
    "clip_ansi_line",
    "display_width",
    "pad_ansi_line",
    "strip_ansi",
    "wrap_ansi_line",
]
