"""Directory browsing primitives: the cursor and name-pattern matching."""

from __future__ import annotations

from .cursor import DEFAULT_VIEWPORT_ROWS, NO_SELECTION, DirectoryCursor
from .patterns import is_glob, match_pattern

__all__ = [
    "DEFAULT_VIEWPORT_ROWS",
    "NO_SELECTION",
    "DirectoryCursor",
    "is_glob",
    "match_pattern",
]
