"""Overlay views for each mode session.

Builders receive the body height and emit only the list rows that fit, keeping
the selected row of every list visible. Section headers and option lines are
always emitted.
"""

from __future__ import annotations

from ..bookmarks import BookmarkStore
from ..editors import PERMISSION_TEMPLATES, Digit, Focus, OwnershipSession, PermissionSession
from ..preview import PreviewSession
from ..search import SearchSession
from .modes import BookmarksSession, MultiSelectSession, PatternSelectSession, Session
from .render_model import OverlayView

# Overlay title, spacer and footer rows.
OVERLAY_CHROME_ROWS = 3
_DIGIT_NAMES = {Digit.OWNER: "owner", Digit.GROUP: "group", Digit.OTHER: "other"}


def _flag(name: str, on: bool) -> str:
    return f"[{'x' if on else ' '}] {name}"


def content_rows(body_rows: int, prompt: str | None = None, warnings: tuple[str, ...] = ()) -> int:
    """Rows left for overlay lines once title, prompt, warnings and footer are drawn."""
    used = OVERLAY_CHROME_ROWS + (1 if prompt is not None else 0) + len(warnings)
    return max(1, body_rows - used)


def window_bounds(count: int, selected: int, rows: int) -> tuple[int, int]:
    """``[start, end)`` of a ``rows`` tall window over ``count`` items showing ``selected``.

    The window stays at the top until the selection passes its last row, then
    re-centers with the selection a third of the way down.
    """
    rows = max(1, rows)
    if count <= rows or selected < rows:
        start = 0
    else:
        start = min(selected - max(1, rows // 3), count - rows)
    return start, min(count, start + rows)


def _split_rows(available: int, first_count: int, second_count: int) -> tuple[int, int]:
    """Share ``available`` rows between two lists; a short list yields its spare rows."""
    first = min(first_count, max(1, available // 2))
    second = min(second_count, max(1, available - first))
    first = min(first_count, max(first, available - second))
    return first, second


def permission_overlay(session: PermissionSession, body_rows: int) -> OverlayView:
    count = len(session.targets)
    title = f"Permissions: {session.targets[0].name}" if count == 1 else f"Permissions: {count} entries"
    digits = "  ".join(
        f"[{value}]" if Digit(idx) is session.cursor else f" {value} " for idx, value in enumerate(session.digits)
    )
    warning = session.warning
    warnings = (f"{session.octal}: {warning}",) if warning else ()
    lines = [
        f"{digits}    {session.octal}  {session.symbolic}",
        f"editing {_DIGIT_NAMES[session.cursor]}",
        "",
        *session.explanations(),
    ]
    if session.templates_visible:
        lines.append("")
        lines.append("Templates:")
        rows = content_rows(body_rows, warnings=warnings) - len(lines)
        start, end = window_bounds(len(PERMISSION_TEMPLATES), session.template_index, rows)
        for idx in range(start, end):
            template = PERMISSION_TEMPLATES[idx]
            marker = ">" if idx == session.template_index else " "
            lines.append(f"{marker} {template.label:<4} {template.name:<28} {template.description}")
    return OverlayView(
        title=title,
        lines=tuple(lines),
        warnings=warnings,
        footer="Enter apply  t templates  Esc cancel",
    )


def _confirm_lines(session: OwnershipSession, rows: int) -> list[str]:
    planned = session.planned
    failures = [f"  ! {failure.path}: {failure.message}" for failure in session.plan_failures]
    shown = max(1, rows - 1 - len(failures))
    if len(planned) > shown:
        shown = max(1, shown - 1)
    lines = [f"{len(planned)} change(s):"]
    for change in planned[:shown]:
        lines.append(f"  {change.path}  {change.old_uid}:{change.old_gid} -> {change.new_uid}:{change.new_gid}")
    if len(planned) > shown:
        lines.append(f"  ... {len(planned) - shown} more")
    lines.extend(failures)
    return lines


def ownership_overlay(session: OwnershipSession, body_rows: int) -> OverlayView:
    count = len(session.targets)
    title = f"Ownership: {session.targets[0].name}" if count == 1 else f"Ownership: {count} entries"
    warnings = tuple(session.warnings)
    if session.focus is Focus.CONFIRM:
        return OverlayView(
            title=title,
            lines=tuple(_confirm_lines(session, content_rows(body_rows, warnings=warnings))),
            warnings=warnings,
            footer="y/Enter apply  n back  Esc cancel",
        )

    user = session.selected_user
    group = session.selected_group
    target = f"{user.name if user else '?'}:{group.name if group else '?'}"
    prompt = f"new owner {target}"
    users = session.filtered_users
    groups = session.filtered_groups
    # Two section headers and the options line are always shown.
    user_rows, group_rows = _split_rows(content_rows(body_rows, prompt, warnings) - 3, len(users), len(groups))

    lines = [f"{'>' if session.focus is Focus.USERS else ' '} Users  (filter: {session.user_filter})"]
    start, end = window_bounds(len(users), min(session.user_index, max(0, len(users) - 1)), user_rows)
    for user_info in users[start:end]:
        marker = "*" if user is not None and user_info == user else " "
        full = f" ({user_info.full_name})" if user_info.full_name else ""
        lines.append(f"   {marker} {user_info.name} [{user_info.uid}]{full}")
    lines.append(f"{'>' if session.focus is Focus.GROUPS else ' '} Groups (filter: {session.group_filter})")
    start, end = window_bounds(len(groups), min(session.group_index, max(0, len(groups) - 1)), group_rows)
    for group_info in groups[start:end]:
        marker = "*" if group is not None and group_info == group else " "
        lines.append(f"   {marker} {group_info.name} [{group_info.gid}]")
    lines.append(f"{'>' if session.focus is Focus.OPTIONS else ' '} {_flag('recursive', session.recursive)}")
    return OverlayView(
        title=title,
        lines=tuple(lines),
        prompt=prompt,
        warnings=warnings,
        footer="Tab focus  Enter review  Esc cancel",
    )


def search_overlay(session: SearchSession, body_rows: int) -> OverlayView:
    flags = "  ".join(
        (
            _flag("regex", session.regex_mode),
            _flag("case", session.case_sensitive),
            _flag("contents", session.content_mode),
        )
    )
    prompt = f"/{session.query}"
    warnings = (session.error.message,) if session.error is not None else ()
    lines = [flags]
    entries = session.cursor.entries
    start, end = window_bounds(len(session.matches), session.match_cursor, content_rows(body_rows, prompt, warnings) - 1)
    for idx in range(start, end):
        match = session.matches[idx]
        marker = ">" if idx == session.match_cursor else " "
        name = entries[match.entry_index].name if match.entry_index < len(entries) else "?"
        if match.is_content_match:
            lines.append(f"{marker} {name}:{match.line_number}: {match.context}")
        else:
            lines.append(f"{marker} {name}")
    if session.matches:
        position = f"{session.match_cursor + 1}/{len(session.matches)} in {len(session.matched_entries())} entries"
    else:
        position = "0/0"
    return OverlayView(
        title="Search",
        lines=tuple(lines),
        prompt=prompt,
        warnings=warnings,
        footer=f"{position}  Enter keep  Esc cancel",
    )


def preview_overlay(session: PreviewSession) -> OverlayView:
    return OverlayView(
        title=session.header.as_text(),
        lines=tuple(session.window()),
        footer=f"{session.kind.value}  line {session.scroll + 1}/{max(1, session.line_count)}",
    )


def bookmarks_overlay(session: BookmarksSession, store: BookmarkStore, body_rows: int) -> OverlayView:
    records = store.list(session.sort_by)
    prompt = f"rename: {session.rename_buffer}" if session.rename_buffer is not None else None
    lines = []
    start, end = window_bounds(len(records), session.selected, content_rows(body_rows, prompt))
    for idx in range(start, end):
        bookmark = records[idx]
        marker = ">" if idx == session.selected else " "
        lines.append(f"{marker} {bookmark.shortcut}  {bookmark.label:<20} {bookmark.path}  ({bookmark.access_count})")
    if not records:
        lines.append("(no bookmarks; press a to add the current directory)")
    return OverlayView(
        title=f"Bookmarks (by {session.sort_by})",
        lines=tuple(lines),
        prompt=prompt,
        footer="Enter jump  a add  d delete  r rename  s sort  Esc close",
    )


def pattern_overlay(session: PatternSelectSession) -> OverlayView:
    return OverlayView(
        title="Select by pattern",
        prompt=f"pattern: {session.pattern}",
        footer=f"{session.matched} matched  Enter keep  Esc cancel",
    )


def build_overlay(session: Session | None, store: BookmarkStore, body_rows: int) -> OverlayView | None:
    if session is None or isinstance(session, MultiSelectSession):
        return None
    if isinstance(session, PermissionSession):
        return permission_overlay(session, body_rows)
    if isinstance(session, OwnershipSession):
        return ownership_overlay(session, body_rows)
    if isinstance(session, SearchSession):
        return search_overlay(session, body_rows)
    if isinstance(session, PreviewSession):
        return preview_overlay(session)
    if isinstance(session, BookmarksSession):
        return bookmarks_overlay(session, store, body_rows)
    if isinstance(session, PatternSelectSession):
        return pattern_overlay(session)
    return None


__all__ = ["OVERLAY_CHROME_ROWS", "build_overlay", "content_rows", "window_bounds"]
