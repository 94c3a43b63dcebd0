"""File preview: content classification, windowed rendering and highlighting."""

from __future__ import annotations

from .classify import ContentKind, classify, is_text_sample, mime_type_for
from .renderer import PreviewHeader, PreviewKind, PreviewSession, hex_dump
from .syntax import colorize_lines, sanitize_terminal_text

__all__ = [
    "ContentKind",
    "PreviewHeader",
    "PreviewKind",
    "PreviewSession",
    "classify",
    "colorize_lines",
    "hex_dump",
    "is_text_sample",
    "mime_type_for",
    "sanitize_terminal_text",
]
