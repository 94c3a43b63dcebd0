"""Bookmark store and its JSON persistence."""

from __future__ import annotations

from .persistence import BOOKMARKS_PATH, export_bookmarks, import_bookmarks, load_bookmarks, open_store, save_bookmarks
from .store import SHORTCUT_ORDER, SORT_FREQUENCY, SORT_NAME, Bookmark, BookmarkStore

__all__ = [
    "BOOKMARKS_PATH",
    "Bookmark",
    "BookmarkStore",
    "SHORTCUT_ORDER",
    "SORT_FREQUENCY",
    "SORT_NAME",
    "export_bookmarks",
    "import_bookmarks",
    "load_bookmarks",
    "open_store",
    "save_bookmarks",
]
