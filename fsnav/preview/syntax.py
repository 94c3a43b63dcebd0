"""Terminal-safe text and Pygments highlighting for preview windows.

Control bytes are escaped before anything reaches the terminal so a previewed
file cannot ring the bell or move the cursor.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

_FORMATTERS: dict[str, TerminalFormatter] = {}
_VALID_STYLES: set[str] = set()


def sanitize_terminal_text(text: str) -> str:
    """Escape C0/C1 control characters (except newline, CR and tab) as ``\\xNN``."""
    if _CONTROL_RE.search(text) is None:
        return text
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", text)


def normalize_style(style: str) -> str:
    """Return ``style`` when Pygments knows it, else the default style."""
    if style in _VALID_STYLES:
        return style
    try:
        get_style_by_name(style)
    except ClassNotFound:
        logger.debug("unknown pygments style %r, using %s", style, DEFAULT_STYLE)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def _lexer_for(path: Path, sample: str):
    try:
        return get_lexer_for_filename(path.name, sample, stripnl=False)
    except ClassNotFound:
        return TextLexer(stripnl=False)


def colorize_lines(lines: list[str], path: Path, style: str = DEFAULT_STYLE) -> list[str]:
    """Highlight a window of already sanitized lines, one output per input line.

    The window is highlighted on its own, so a construct opened above the
    window (a long docstring, say) may be colored as plain code.
    """
    if not lines:
        return []
    source = "\n".join(lines) + "\n"
    rendered = highlight(source, _lexer_for(path, source), _formatter_for(normalize_style(style)))
    out = rendered.split("\n")
    if len(out) > len(lines):
        out = out[: len(lines)]
    if len(out) < len(lines):
        out.extend(lines[len(out) :])
    return out


__all__ = ["DEFAULT_STYLE", "colorize_lines", "normalize_style", "sanitize_terminal_text"]
