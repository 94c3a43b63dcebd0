"""Turn a render model into terminal rows.

Frame building is pure (``build_frame``) so tests can inspect rows without a
terminal; ``draw`` writes the joined frame in one call.
"""

from __future__ import annotations

from ..ansi import RESET, clip_ansi_line, display_width
from ..dispatch.dispatcher import CHROME_ROWS
from ..dispatch.render_model import EntryRow, OverlayView, PaneView, RenderModel
from ..split import Orientation, split_extent

DIR_STYLE = "\033[1;34m"
LINK_STYLE = "\033[36m"
MARK_STYLE = "\033[1;33m"
LEVEL_STYLES = {"error": "\033[1;31m", "warning": "\033[33m"}
VERTICAL_DIVIDER = "│"
HORIZONTAL_DIVIDER = "─"
SIZE_COLUMN = 9


def fit(text: str, width: int) -> str:
    """Clip and pad a styled string to exactly ``width`` columns."""
    clipped = clip_ansi_line(text, width)
    if "\033" in clipped:
        clipped += RESET
    return clipped + " " * max(0, width - display_width(clipped))


def selected_with_ansi(text: str) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text:
        return text
    # Keep reverse video active even when the text contains internal resets.
    return "\033[7m" + text.replace(RESET, "\033[0;7m") + RESET


def build_status_line(left_text: str, width: int, right_text: str = "? help") -> str:
    usable = max(1, width)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def format_entry_row(row: EntryRow, width: int, color: bool) -> str:
    mark = "*" if row.marked else " "
    name = row.display_name
    if color:
        if row.is_dir:
            name = f"{DIR_STYLE}{name}{RESET}"
        elif row.is_symlink:
            name = f"{LINK_STYLE}{name}{RESET}"
        if row.marked:
            mark = f"{MARK_STYLE}*{RESET}"
    line = fit(f"{mark} {row.mode} {row.size:>{SIZE_COLUMN}}  {name}", width)
    return selected_with_ansi(line) if row.selected else line


def pane_lines(pane: PaneView, width: int, rows: int, color: bool, *, highlight_header: bool) -> list[str]:
    """Header plus entry rows for one cursor, exactly ``rows`` long."""
    counts = f" [{pane.total_entries}]"
    if pane.marked_count:
        counts += f" {pane.marked_count} marked"
    header = fit(f"{pane.path}{counts}", width)
    if highlight_header:
        header = f"\033[1m{header}{RESET}"
    out = [header]
    for row in pane.rows[: max(0, rows - 1)]:
        out.append(format_entry_row(row, width, color))
    if not pane.rows and rows > 1:
        out.append(fit("  (empty)", width))
    while len(out) < rows:
        out.append(" " * width)
    return out[:rows]


def overlay_lines(overlay: OverlayView, width: int, rows: int) -> list[str]:
    """Overlay body: title, prompt, warnings and content, with the footer last."""
    out = [fit(f"\033[1m{overlay.title}{RESET}", width)]
    if overlay.prompt is not None:
        out.append(fit(overlay.prompt, width))
    for warning in overlay.warnings:
        out.append(fit(f"{LEVEL_STYLES['warning']}! {warning}{RESET}", width))
    out.append(" " * width)
    out.extend(fit(line, width) for line in overlay.lines)
    content_rows = max(1, rows - 1)
    out = out[:content_rows]
    while len(out) < content_rows:
        out.append(" " * width)
    out.append(selected_with_ansi(fit(overlay.footer, width)))
    return out[:rows]


def help_body(help_lines: tuple[str, ...], width: int, rows: int) -> list[str]:
    out = [fit("\033[1mKeys\033[0m  (? to close)", width)]
    out.extend(fit(f"  {line}", width) for line in help_lines)
    out = out[:rows]
    while len(out) < rows:
        out.append(" " * width)
    return out


def body_lines(model: RenderModel, width: int, rows: int, color: bool) -> list[str]:
    if model.help_lines:
        return help_body(model.help_lines, width, rows)
    if model.overlay is not None:
        return overlay_lines(model.overlay, width, rows)
    if len(model.panes) == 1 or model.layout is None:
        return pane_lines(model.panes[0], width, rows, color, highlight_header=False)

    left, right = model.panes[0], model.panes[1]
    if model.layout.orientation == Orientation.VERTICAL.value:
        left_width, right_width = split_extent(width, model.layout.ratio)
        left_rows = pane_lines(left, left_width, rows, color, highlight_header=left.active)
        right_rows = pane_lines(right, right_width, rows, color, highlight_header=right.active)
        return [f"{a}{VERTICAL_DIVIDER}{b}" for a, b in zip(left_rows, right_rows)]

    top_rows, bottom_rows = split_extent(rows, model.layout.ratio)
    return [
        *pane_lines(left, width, top_rows, color, highlight_header=left.active),
        HORIZONTAL_DIVIDER * width,
        *pane_lines(right, width, bottom_rows, color, highlight_header=right.active),
    ]


def status_text(model: RenderModel) -> str:
    pane = model.panes[model.active_pane]
    position = f"{pane.selected_index + 1}/{pane.total_entries}" if pane.total_entries else "0/0"
    parts = [model.mode.value.replace("_", " "), position]
    if pane.marked_count:
        parts.append(f"{pane.marked_count} marked")
    if model.layout is not None:
        layout = f"{model.layout.orientation} {model.layout.ratio:.2f}"
        if model.layout.synced:
            layout += " sync"
        parts.append(layout)
    if model.elevated:
        parts.append("ROOT")
    return "  ".join(parts)


def advisory_line(model: RenderModel, width: int) -> str:
    if not model.advisories:
        return " " * width
    text = "  |  ".join(advisory.message for advisory in model.advisories)
    style = ""
    for level in ("error", "warning"):
        if any(advisory.level == level for advisory in model.advisories):
            style = LEVEL_STYLES[level]
            break
    return fit(f"{style}{text}{RESET}" if style else text, width)


def build_frame(model: RenderModel, width: int, height: int, color: bool = True) -> list[str]:
    """Exactly ``height`` rows: title, body, status and advisory."""
    width = max(1, width)
    rows = max(2, height - CHROME_ROWS)
    title = fit(f"fsnav  {model.panes[model.active_pane].path}", width)
    frame = [selected_with_ansi(title)]
    frame.extend(body_lines(model, width, rows, color))
    frame.append(selected_with_ansi(build_status_line(status_text(model), width)))
    frame.append(advisory_line(model, width))
    return frame[:height]


def render_frame(model: RenderModel, width: int, height: int, color: bool = True) -> str:
    return "\033[H\033[J" + "\r\n".join(build_frame(model, width, height, color))


__all__ = ["build_frame", "build_status_line", "fit", "format_entry_row", "render_frame"]
