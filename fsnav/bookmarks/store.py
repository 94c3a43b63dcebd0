"""In-memory bookmark store keyed by single-character shortcuts.

The store is the single source of truth. It knows nothing about files: every
mutation calls the injected ``persist`` hook with the store itself, and the
persistence layer decides how to write it.
"""

from __future__ import annotations

import logging
import os
import string
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from pathlib import Path

from ..errors import InvalidInputError, StoreFullError

logger = logging.getLogger(__name__)

SHORTCUT_ORDER = string.ascii_lowercase + string.digits
SORT_FREQUENCY = "frequency"
SORT_NAME = "name"


@dataclass(frozen=True)
class Bookmark:
    shortcut: str
    path: Path
    label: str
    access_count: int = 0
    created_at: float = 0.0
    last_accessed: float | None = None


def default_label(path: Path) -> str:
    return path.name or str(path)


class BookmarkStore:
    def __init__(
        self,
        bookmarks: Iterable[Bookmark] = (),
        *,
        persist: Callable[[BookmarkStore], None] | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._by_shortcut: dict[str, Bookmark] = {}
        for bookmark in bookmarks:
            if bookmark.shortcut in self._by_shortcut:
                raise InvalidInputError(f"Duplicate bookmark shortcut: {bookmark.shortcut}")
            self._by_shortcut[bookmark.shortcut] = bookmark
        self._persist = persist
        self._clock = clock
        self.persist_error: OSError | None = None

    def _changed(self) -> None:
        """Run the persist hook; a failed write is kept for the caller to report."""
        if self._persist is None:
            return
        try:
            self._persist(self)
        except OSError as exc:
            logger.warning("saving bookmarks failed: %s", exc)
            self.persist_error = exc

    def take_persist_error(self) -> OSError | None:
        error, self.persist_error = self.persist_error, None
        return error

    # -- queries -----------------------------------------------------------

    def __len__(self) -> int:
        return len(self._by_shortcut)

    def __contains__(self, shortcut: object) -> bool:
        return shortcut in self._by_shortcut

    def get(self, shortcut: str) -> Bookmark | None:
        return self._by_shortcut.get(shortcut)

    def records(self) -> tuple[Bookmark, ...]:
        """All bookmarks in shortcut priority order."""
        return tuple(self._by_shortcut[key] for key in SHORTCUT_ORDER if key in self._by_shortcut)

    def available_shortcuts(self) -> list[str]:
        return [key for key in SHORTCUT_ORDER if key not in self._by_shortcut]

    def find_by_path(self, path: Path) -> Bookmark | None:
        target = Path(os.path.abspath(path))
        for bookmark in self._by_shortcut.values():
            if bookmark.path == target:
                return bookmark
        return None

    def list(self, sort_by: str | None = None) -> tuple[Bookmark, ...]:
        """Return an ordered snapshot; the store itself is never reordered."""
        records = self.records()
        if sort_by == SORT_FREQUENCY:
            return tuple(sorted(records, key=lambda item: (-item.access_count, item.label.lower())))
        if sort_by == SORT_NAME:
            return tuple(sorted(records, key=lambda item: (item.label.lower(), item.shortcut)))
        if sort_by is None:
            return records
        raise InvalidInputError(f"Unknown bookmark sort order: {sort_by}")

    # -- mutations ---------------------------------------------------------

    def _require(self, shortcut: str) -> Bookmark:
        bookmark = self._by_shortcut.get(shortcut)
        if bookmark is None:
            raise InvalidInputError(f"No bookmark on '{shortcut}'")
        return bookmark

    def add(self, path: Path, label: str | None = None) -> Bookmark:
        """Bookmark ``path`` on the lowest free shortcut (a-z, then 0-9)."""
        target = Path(os.path.abspath(path))
        existing = self.find_by_path(target)
        if existing is not None:
            raise InvalidInputError(f"{target} is already bookmarked on '{existing.shortcut}'")
        free = self.available_shortcuts()
        if not free:
            raise StoreFullError(f"All {len(SHORTCUT_ORDER)} bookmark shortcuts are in use")
        bookmark = Bookmark(
            shortcut=free[0],
            path=target,
            label=label or default_label(target),
            created_at=self._clock(),
        )
        self._by_shortcut[bookmark.shortcut] = bookmark
        self._changed()
        return bookmark

    def remove(self, shortcut: str) -> Bookmark:
        bookmark = self._require(shortcut)
        del self._by_shortcut[shortcut]
        self._changed()
        return bookmark

    def rename(self, shortcut: str, label: str) -> Bookmark:
        label = label.strip()
        if not label:
            raise InvalidInputError("Bookmark label cannot be empty")
        bookmark = replace(self._require(shortcut), label=label)
        self._by_shortcut[shortcut] = bookmark
        self._changed()
        return bookmark

    def jump(self, shortcut: str) -> Path:
        """Count an access and return the bookmarked path."""
        bookmark = self._require(shortcut)
        bookmark = replace(bookmark, access_count=bookmark.access_count + 1, last_accessed=self._clock())
        self._by_shortcut[shortcut] = bookmark
        self._changed()
        return bookmark.path

    def merge(self, bookmarks: Iterable[Bookmark]) -> int:
        """Import records, skipping known paths and reassigning taken shortcuts.

        Returns the number imported. Stops quietly when shortcuts run out.
        """
        imported = 0
        for incoming in bookmarks:
            if self.find_by_path(incoming.path) is not None:
                continue
            shortcut = incoming.shortcut
            if shortcut in self._by_shortcut or shortcut not in SHORTCUT_ORDER:
                free = self.available_shortcuts()
                if not free:
                    break
                shortcut = free[0]
            self._by_shortcut[shortcut] = replace(incoming, shortcut=shortcut)
            imported += 1
        if imported:
            self._changed()
        return imported


__all__ = [
    "Bookmark",
    "BookmarkStore",
    "SHORTCUT_ORDER",
    "SORT_FREQUENCY",
    "SORT_NAME",
    "default_label",
]
