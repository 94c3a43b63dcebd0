"""Incremental name and content search over one directory cursor.

Every query edit or flag toggle recomputes the whole match list. Matches keep
listing order: a name match for an entry comes first, followed by its content
matches (at most ``MAX_MATCHES_PER_FILE`` lines per file).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..directory_pane import DirectoryCursor
from ..entry_model import Entry
from ..errors import Advisory, ErrorKind
from ..preview.classify import MAX_TEXT_BYTES, is_text_sample, read_sample

logger = logging.getLogger(__name__)

MAX_MATCHES_PER_FILE = 5
MAX_CONTEXT_CHARS = 100


@dataclass(frozen=True)
class SearchMatch:
    entry_index: int
    line_number: int | None = None
    context: str | None = None

    @property
    def is_content_match(self) -> bool:
        return self.line_number is not None


def truncate_context(line: str, limit: int = MAX_CONTEXT_CHARS) -> str:
    text = line.strip()
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def _can_scan_contents(entry: Entry) -> bool:
    # Opening a FIFO or device would block or read forever.
    return entry.is_regular and entry.size_bytes <= MAX_TEXT_BYTES


def scan_file(path: Path, matches_line: Callable[[str], bool], limit: int = MAX_MATCHES_PER_FILE) -> list[tuple[int, str]]:
    """Return up to ``limit`` ``(line_number, context)`` hits from a text file.

    Binary files and unreadable files yield no hits.
    """
    try:
        if not is_text_sample(read_sample(path)):
            return []
        hits: list[tuple[int, str]] = []
        with path.open("r", encoding="utf-8", errors="replace") as handle:
            for line_number, line in enumerate(handle, start=1):
                if matches_line(line.rstrip("\r\n")):
                    hits.append((line_number, truncate_context(line)))
                    if len(hits) >= limit:
                        break
        return hits
    except OSError as exc:
        logger.debug("content search skipped %s: %s", path, exc)
        return []


class SearchSession:
    def __init__(self, cursor: DirectoryCursor) -> None:
        self.cursor = cursor
        self.query = ""
        self.regex_mode = False
        self.case_sensitive = False
        self.content_mode = False
        self.matches: list[SearchMatch] = []
        self.match_cursor = 0
        self.error: Advisory | None = None
        selected = cursor.selected_entry
        self.origin: Path | None = selected.path if selected is not None else None

    # -- query editing -----------------------------------------------------

    def set_query(self, query: str) -> None:
        self.query = query
        self.recompute()

    def type_char(self, ch: str) -> None:
        self.set_query(self.query + ch)

    def backspace(self) -> None:
        self.set_query(self.query[:-1])

    def toggle_regex(self) -> None:
        self.regex_mode = not self.regex_mode
        self.recompute()

    def toggle_case_sensitive(self) -> None:
        self.case_sensitive = not self.case_sensitive
        self.recompute()

    def toggle_content_mode(self) -> None:
        self.content_mode = not self.content_mode
        self.recompute()

    # -- matching ----------------------------------------------------------

    def _line_matcher(self) -> Callable[[str], bool]:
        """Build the predicate for the current flags; raises ``re.error``."""
        if self.regex_mode:
            flags = 0 if self.case_sensitive else re.IGNORECASE
            pattern = re.compile(self.query, flags)
            return lambda text: pattern.search(text) is not None
        if self.case_sensitive:
            needle = self.query
            return lambda text: needle in text
        folded = self.query.casefold()
        return lambda text: folded in text.casefold()

    def recompute(self) -> None:
        """Rebuild matches from scratch.

        An invalid regular expression leaves the previous matches in place and
        records an error instead.
        """
        if not self.query:
            self.error = None
            self.matches = []
            self.match_cursor = 0
            return
        try:
            matcher = self._line_matcher()
        except re.error as exc:
            self.error = Advisory.warning(f"Invalid regex: {exc}", kind=ErrorKind.INVALID_INPUT)
            return

        self.error = None
        matches: list[SearchMatch] = []
        for index, entry in enumerate(self.cursor.entries):
            if matcher(entry.name):
                matches.append(SearchMatch(entry_index=index))
            if self.content_mode and _can_scan_contents(entry):
                for line_number, context in scan_file(entry.path, matcher):
                    matches.append(SearchMatch(entry_index=index, line_number=line_number, context=context))
        self.matches = matches
        self.match_cursor = 0
        self._select_current()

    # -- navigation --------------------------------------------------------

    @property
    def current_match(self) -> SearchMatch | None:
        if not self.matches:
            return None
        return self.matches[self.match_cursor]

    def next(self) -> SearchMatch | None:
        if self.matches:
            self.match_cursor = (self.match_cursor + 1) % len(self.matches)
            self._select_current()
        return self.current_match

    def previous(self) -> SearchMatch | None:
        if self.matches:
            self.match_cursor = (self.match_cursor - 1) % len(self.matches)
            self._select_current()
        return self.current_match

    def _select_current(self) -> None:
        match = self.current_match
        if match is not None:
            self.cursor.move_to_index(match.entry_index)

    def restore_origin(self) -> None:
        """Put the cursor back where it was when the search started."""
        if self.origin is not None:
            self.cursor.select_path(self.origin)

    def matched_entries(self) -> list[Entry]:
        """Distinct matched entries in listing order."""
        seen: set[int] = set()
        out: list[Entry] = []
        for match in self.matches:
            if match.entry_index in seen:
                continue
            seen.add(match.entry_index)
            out.append(self.cursor.entries[match.entry_index])
        return out


__all__ = ["MAX_MATCHES_PER_FILE", "SearchMatch", "SearchSession", "scan_file", "truncate_context"]
