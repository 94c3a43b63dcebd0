"""Preview sessions: classify one entry and render a scrollable window of it.

Text files are never loaded whole. The session counts lines once with a
streaming pass and then reads only the lines in the visible window, so memory
stays proportional to the viewport even for large files.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from itertools import islice

from ..ansi import wrap_ansi_line
from ..entry_model import Entry, EntryKind, FilesystemOps, format_mode, format_size, special_type_name
from ..errors import Advisory, describe_error
from .classify import (
    MAX_TEXT_BYTES,
    ContentKind,
    classify,
    extension_of,
    mime_type_for,
)
from .syntax import DEFAULT_STYLE, colorize_lines, sanitize_terminal_text

logger = logging.getLogger(__name__)

HEX_DUMP_BYTES = 256
HEX_ROW_BYTES = 16
TAB_WIDTH = 4


class PreviewKind(Enum):
    DIRECTORY = "directory"
    TEXT = "text"
    BINARY = "binary"
    IMAGE = "image"
    SPECIAL = "special"
    TOO_LARGE = "too_large"
    ERROR = "error"


@dataclass(frozen=True)
class PreviewHeader:
    name: str
    size: str
    permissions: str
    mime_type: str

    def as_text(self) -> str:
        return f"{self.name}  {self.size}  {self.permissions}  {self.mime_type}"


def hex_dump(data: bytes, row_bytes: int = HEX_ROW_BYTES) -> list[str]:
    """Format bytes as ``offset  hex  ascii`` rows."""
    rows: list[str] = []
    for offset in range(0, len(data), row_bytes):
        chunk = data[offset : offset + row_bytes]
        hex_part = " ".join(f"{byte:02x}" for byte in chunk)
        ascii_part = "".join(chr(byte) if 0x20 <= byte < 0x7F else "." for byte in chunk)
        rows.append(f"{offset:08x}  {hex_part:<{row_bytes * 3 - 1}}  {ascii_part}")
    return rows


def _kind_label(entry: Entry) -> str:
    if entry.is_symlink:
        return "link"
    return "dir" if entry.kind is EntryKind.DIRECTORY else "file"


class PreviewSession:
    def __init__(
        self,
        entry: Entry,
        *,
        width: int = 80,
        height: int = 20,
        color: bool = True,
        style: str = DEFAULT_STYLE,
        show_hidden: bool = False,
        fs: FilesystemOps | None = None,
    ) -> None:
        self.entry = entry
        self.fs = fs if fs is not None else FilesystemOps()
        self.width = max(1, width)
        self.height = max(1, height)
        self.color = color
        self.style = style
        self.show_hidden = show_hidden
        self.scroll = 0
        self.advisory: Advisory | None = None
        self.header = PreviewHeader(
            name=entry.name,
            size=format_size(entry.size_bytes),
            permissions=format_mode(entry),
            mime_type="inode/directory" if entry.is_navigable else mime_type_for(entry.path),
        )
        self._lines: list[str] = []
        self._text_line_count = 0
        self.kind = self._load()

    # -- loading -----------------------------------------------------------

    def _load(self) -> PreviewKind:
        entry = self.entry
        if entry.is_navigable:
            children, scan_error = self.fs.list_directory(entry.path, self.show_hidden)
            if scan_error is not None:
                return self._fail(scan_error)
            self._lines = [f"{_kind_label(child):<4}  {child.name}" for child in children] or ["(empty directory)"]
            return PreviewKind.DIRECTORY

        if not entry.is_regular:
            self._lines = [
                f"Type: {special_type_name(entry.path)}",
                f"Permissions: {self.header.permissions}",
                "(contents of special files are not read)",
            ]
            return PreviewKind.SPECIAL

        try:
            kind = classify(entry.path)
        except OSError as exc:
            return self._fail(exc)

        if kind is ContentKind.IMAGE:
            self._lines = [
                f"Format: {extension_of(entry.path).upper()}",
                f"Size: {format_size(entry.size_bytes)}",
                f"MIME: {self.header.mime_type}",
                "(image content is not rendered)",
            ]
            return PreviewKind.IMAGE

        if kind is ContentKind.BINARY:
            try:
                with entry.path.open("rb") as handle:
                    data = handle.read(HEX_DUMP_BYTES)
            except OSError as exc:
                return self._fail(exc)
            self._lines = hex_dump(data) or ["(empty file)"]
            return PreviewKind.BINARY

        if entry.size_bytes > MAX_TEXT_BYTES:
            self._lines = [f"File too large to preview ({format_size(entry.size_bytes)})"]
            return PreviewKind.TOO_LARGE

        try:
            with entry.path.open("rb") as handle:
                self._text_line_count = sum(1 for _line in handle)
        except OSError as exc:
            return self._fail(exc)
        return PreviewKind.TEXT

    def _fail(self, exc: OSError) -> PreviewKind:
        logger.info("preview of %s failed: %s", self.entry.path, exc)
        self.advisory = Advisory.from_exception(exc, f"Cannot preview {self.entry.name}")
        self._lines = [f"Cannot preview: {describe_error(exc)}"]
        return PreviewKind.ERROR

    # -- scrolling ---------------------------------------------------------

    @property
    def line_count(self) -> int:
        if self.kind is PreviewKind.TEXT:
            return self._text_line_count
        return len(self._lines)

    @property
    def max_scroll(self) -> int:
        return max(0, self.line_count - 1)

    def scroll_by(self, delta: int) -> None:
        self.scroll = max(0, min(self.max_scroll, self.scroll + delta))

    def page_down(self) -> None:
        self.scroll_by(self.height)

    def page_up(self) -> None:
        self.scroll_by(-self.height)

    def scroll_to_top(self) -> None:
        self.scroll = 0

    def resize(self, width: int, height: int) -> None:
        self.width = max(1, width)
        self.height = max(1, height)
        self.scroll_by(0)

    # -- rendering ---------------------------------------------------------

    def _read_text_window(self) -> list[str]:
        try:
            with self.entry.path.open("rb") as handle:
                raw = [
                    line.decode("utf-8", errors="replace")
                    for line in islice(handle, self.scroll, self.scroll + self.height)
                ]
        except OSError as exc:
            self._fail(exc)
            self.kind = PreviewKind.ERROR
            return list(self._lines)
        lines = [sanitize_terminal_text(line.rstrip("\r\n").expandtabs(TAB_WIDTH)) for line in raw]
        if self.color:
            lines = colorize_lines(lines, self.entry.path, self.style)
        return lines

    def window(self) -> list[str]:
        """Display rows for the current scroll offset, wrapped to the width."""
        if self.kind is PreviewKind.TEXT:
            logical = self._read_text_window()
        else:
            logical = self._lines[self.scroll : self.scroll + self.height]

        rows: list[str] = []
        for line in logical:
            rows.extend(wrap_ansi_line(line, self.width))
            if len(rows) >= self.height:
                break
        return rows[: self.height]


__all__ = ["HEX_DUMP_BYTES", "PreviewHeader", "PreviewKind", "PreviewSession", "hex_dump"]
