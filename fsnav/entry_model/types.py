"""Domain datatypes for filesystem entry snapshots."""

from __future__ import annotations

import stat
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EntryKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


@dataclass(frozen=True)
class Entry:
    """Immutable metadata snapshot for one filesystem node.

    A symlink keeps ``kind=SYMLINK`` and records ``link_target``;
    ``target_is_dir`` tells whether following it would land in a directory.
    ``is_regular`` holds only for regular files and links resolving to one;
    nothing else is ever opened for reading.
    """

    name: str
    path: Path
    kind: EntryKind
    size_bytes: int = 0
    mode_bits: int = 0
    uid: int = 0
    gid: int = 0
    link_target: Path | None = None
    target_is_dir: bool = False
    is_regular: bool = True

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def is_symlink(self) -> bool:
        return self.kind is EntryKind.SYMLINK

    @property
    def is_navigable(self) -> bool:
        """Return whether the cursor can enter this entry as a directory."""
        return self.is_dir or (self.is_symlink and self.target_is_dir)

    @property
    def permission_bits(self) -> int:
        return self.mode_bits & 0o777

    @property
    def octal_triple(self) -> tuple[int, int, int]:
        bits = self.permission_bits
        return (bits >> 6) & 0o7, (bits >> 3) & 0o7, bits & 0o7


def sort_key(entry: Entry) -> tuple[bool, str]:
    """Directories (and links to directories) first, then case-insensitive name."""
    return (not entry.is_navigable, entry.name.lower())


def format_permissions(mode: int) -> str:
    """Render the low nine mode bits as ``rwxr-xr-x``."""
    out: list[str] = []
    for shift in (6, 3, 0):
        digit = (mode >> shift) & 0o7
        out.append("r" if digit & 4 else "-")
        out.append("w" if digit & 2 else "-")
        out.append("x" if digit & 1 else "-")
    return "".join(out)


def format_mode(entry: Entry) -> str:
    """Render a full ``ls -l`` style mode column, including the type char."""
    type_char = {EntryKind.DIRECTORY: "d", EntryKind.SYMLINK: "l"}.get(entry.kind, "-")
    return type_char + stat.filemode(entry.mode_bits)[1:]


def format_size(size_bytes: int) -> str:
    """Format a byte count as ``512 B`` or ``1.50 KB`` (binary units)."""
    units = ("B", "KB", "MB", "GB", "TB")
    size = float(size_bytes)
    unit_index = 0
    while size >= 1024.0 and unit_index < len(units) - 1:
        size /= 1024.0
        unit_index += 1
    if unit_index == 0:
        return f"{int(size)} {units[0]}"
    return f"{size:.2f} {units[unit_index]}"


__all__ = [
    "Entry",
    "EntryKind",
    "format_mode",
    "format_permissions",
    "format_size",
    "sort_key",
]
