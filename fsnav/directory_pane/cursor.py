"""Directory cursor: one browsing location with selection and marks.

The cursor owns the current path, the sorted entry snapshot, the selected row,
the scroll offset for a fixed-height viewport, and the multi-select set. Marks
are keyed by absolute path so they survive refreshes and re-sorts.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

from ..entry_model import Entry, FilesystemOps
from ..errors import Advisory, ErrorKind, error_kind_for

NO_SELECTION = -1
DEFAULT_VIEWPORT_ROWS = 20
_VANISHED_KINDS = {ErrorKind.NOT_FOUND, ErrorKind.NOT_A_DIRECTORY}


def _absolute(path: Path | str) -> Path:
    """Absolute path without resolving symlinks, so ``..`` stays logical."""
    return Path(os.path.abspath(path))


class DirectoryCursor:
    def __init__(
        self,
        path: Path | str,
        *,
        show_hidden: bool = False,
        viewport_rows: int = DEFAULT_VIEWPORT_ROWS,
        fs: FilesystemOps | None = None,
    ) -> None:
        self.fs = fs if fs is not None else FilesystemOps()
        self.path = _absolute(path)
        self.entries: list[Entry] = []
        self.selected_index = NO_SELECTION
        self.scroll_offset = 0
        self.multi_selected: set[Path] = set()
        self.show_hidden = show_hidden
        self.viewport_rows = max(1, viewport_rows)

    @classmethod
    def open(cls, path: Path | str, **kwargs) -> tuple[DirectoryCursor, Advisory | None]:
        """Create a cursor and perform its first read."""
        cursor = cls(path, **kwargs)
        return cursor, cursor.load(cursor.path)

    # -- loading -----------------------------------------------------------

    def load(self, path: Path | str, prefer: Path | None = None) -> Advisory | None:
        """Replace cursor state with a fresh read of ``path``.

        Permission errors leave an empty listing at ``path``; a vanished path
        falls back to its nearest existing ancestor. Either case returns an
        advisory instead of raising.
        """
        target = _absolute(path)
        entries, scan_error = self.fs.list_directory(target, self.show_hidden)
        if scan_error is None:
            self._replace(target, entries, prefer)
            return None

        if error_kind_for(scan_error) in _VANISHED_KINDS:
            return self._fall_back_from(target)

        self._replace(target, [], prefer)
        return Advisory.from_exception(scan_error, f"Cannot read {target}")

    def _fall_back_from(self, missing: Path) -> Advisory:
        candidate = missing.parent
        while True:
            entries, scan_error = self.fs.list_directory(candidate, self.show_hidden)
            if scan_error is None or error_kind_for(scan_error) not in _VANISHED_KINDS:
                self._replace(candidate, entries if scan_error is None else [], None)
                return Advisory.warning(
                    f"{missing} no longer exists; moved to {candidate}",
                    kind=ErrorKind.NOT_FOUND,
                )
            if candidate.parent == candidate:
                self._replace(candidate, [], None)
                return Advisory.error(f"No readable ancestor of {missing}", kind=ErrorKind.NOT_FOUND)
            candidate = candidate.parent

    def _replace(self, path: Path, entries: list[Entry], prefer: Path | None) -> None:
        same_directory = path == self.path
        self.path = path
        self.entries = list(entries)
        live_paths = {entry.path for entry in self.entries}
        if same_directory:
            self.multi_selected &= live_paths
        else:
            self.multi_selected = set()
            self.scroll_offset = 0

        self.selected_index = NO_SELECTION if not self.entries else 0
        if prefer is not None:
            self.select_path(prefer)
        self._clamp()

    # -- navigation --------------------------------------------------------

    @property
    def selected_entry(self) -> Entry | None:
        if self.selected_index == NO_SELECTION:
            return None
        return self.entries[self.selected_index]

    def enter_selected(self) -> Advisory | None:
        """Descend into the selected directory; files are a no-op."""
        entry = self.selected_entry
        if entry is None or not entry.is_navigable:
            return None
        return self.load(entry.path)

    def go_parent(self) -> Advisory | None:
        """Move to the parent and select the directory just left."""
        parent = self.path.parent
        if parent == self.path:
            return None
        return self.load(parent, prefer=self.path)

    def refresh(self) -> Advisory | None:
        """Re-read the current directory keeping selection and marks by path."""
        selected = self.selected_entry
        return self.load(self.path, prefer=selected.path if selected is not None else None)

    def move_selection(self, delta: int) -> bool:
        """Move selection by ``delta`` rows, clamped. Returns whether it moved."""
        if not self.entries:
            return False
        previous = self.selected_index
        self.selected_index = max(0, min(len(self.entries) - 1, self.selected_index + delta))
        self._clamp()
        return self.selected_index != previous

    def move_to_index(self, index: int) -> bool:
        if not self.entries:
            return False
        return self.move_selection(index - self.selected_index)

    def select_path(self, path: Path) -> bool:
        """Select the entry at ``path`` when present."""
        idx = self.index_of(_absolute(path))
        if idx == NO_SELECTION:
            return False
        self.selected_index = idx
        self._clamp()
        return True

    def set_viewport_rows(self, rows: int) -> None:
        self.viewport_rows = max(1, rows)
        self._clamp()

    def set_show_hidden(self, show_hidden: bool) -> Advisory | None:
        if show_hidden == self.show_hidden:
            return None
        self.show_hidden = show_hidden
        return self.refresh()

    def _clamp(self) -> None:
        if not self.entries:
            self.selected_index = NO_SELECTION
            self.scroll_offset = 0
            return
        self.selected_index = max(0, min(len(self.entries) - 1, self.selected_index))
        rows = self.viewport_rows
        if self.selected_index < self.scroll_offset:
            self.scroll_offset = self.selected_index
        elif self.selected_index >= self.scroll_offset + rows:
            self.scroll_offset = self.selected_index - rows + 1
        self.scroll_offset = max(0, min(self.scroll_offset, max(0, len(self.entries) - rows)))

    def visible_entries(self) -> list[Entry]:
        return self.entries[self.scroll_offset : self.scroll_offset + self.viewport_rows]

    # -- marks -------------------------------------------------------------

    def toggle_mark(self) -> bool:
        """Toggle the mark on the selected entry. Returns the new mark state."""
        entry = self.selected_entry
        if entry is None:
            return False
        if entry.path in self.multi_selected:
            self.multi_selected.discard(entry.path)
            return False
        self.multi_selected.add(entry.path)
        return True

    def clear_marks(self) -> None:
        self.multi_selected.clear()

    def mark_matching(self, predicate: Callable[[Entry], bool]) -> int:
        """Replace marks with every entry satisfying ``predicate``."""
        self.multi_selected = {entry.path for entry in self.entries if predicate(entry)}
        return len(self.multi_selected)

    def is_marked(self, entry: Entry) -> bool:
        return entry.path in self.multi_selected

    def target_entries(self) -> list[Entry]:
        """Entries an editor should act on: marked ones, else the selection."""
        if self.multi_selected:
            return [entry for entry in self.entries if entry.path in self.multi_selected]
        entry = self.selected_entry
        return [entry] if entry is not None else []

    def index_of(self, path: Path) -> int:
        for idx, entry in enumerate(self.entries):
            if entry.path == path:
                return idx
        return NO_SELECTION
