"""Name patterns for select-by-pattern.

A pattern containing ``*`` or ``?`` is a shell glob matched against the whole
name. Anything else is tried as a regular expression (searched anywhere in the
name) and falls back to a plain substring test when it does not compile.
"""

from __future__ import annotations

import fnmatch
import re

_GLOB_CHARS = frozenset("*?")


def is_glob(pattern: str) -> bool:
    return any(ch in _GLOB_CHARS for ch in pattern)


def match_pattern(pattern: str, name: str) -> bool:
    if not pattern:
        return False
    if is_glob(pattern):
        return fnmatch.fnmatchcase(name, pattern)
    try:
        return re.search(pattern, name) is not None
    except re.error:
        return pattern in name


__all__ = ["is_glob", "match_pattern"]
