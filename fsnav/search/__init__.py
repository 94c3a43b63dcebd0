"""Name and content search over the active directory listing."""

from __future__ import annotations

from .engine import MAX_MATCHES_PER_FILE, SearchMatch, SearchSession, scan_file, truncate_context

__all__ = ["MAX_MATCHES_PER_FILE", "SearchMatch", "SearchSession", "scan_file", "truncate_context"]
