"""Domain model for filesystem entries plus the filesystem collaborator.

This package contains non-UI primitives:
- immutable entry snapshots and formatting helpers
- directory listing, metadata reads/writes and the no-follow subtree walk
"""

from __future__ import annotations

from .fs import (
    FilesystemOps,
    is_elevated,
    list_directory,
    read_entry,
    set_mode,
    set_owner,
    special_type_name,
    walk_subtree,
)
from .types import Entry, EntryKind, format_mode, format_permissions, format_size, sort_key

__all__ = [
    "Entry",
    "EntryKind",
    "FilesystemOps",
    "format_mode",
    "format_permissions",
    "format_size",
    "is_elevated",
    "list_directory",
    "read_entry",
    "set_mode",
    "set_owner",
    "sort_key",
    "special_type_name",
    "walk_subtree",
]
