"""Render model: an immutable description of what the screen should show.

The dispatcher builds a fresh model after every key. The screen layer turns it
into escape sequences; nothing here knows about terminals.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..directory_pane import DirectoryCursor
from ..entry_model import Entry, format_mode, format_size
from ..errors import Advisory
from .modes import Mode


class ExitKind(Enum):
    QUIT = "quit"
    SPAWN_SHELL = "spawn_shell"


@dataclass(frozen=True)
class ExitAction:
    """Request for the runtime loop; ``SPAWN_SHELL`` resumes afterwards."""

    kind: ExitKind
    path: Path | None = None

    @classmethod
    def quit(cls) -> ExitAction:
        return cls(ExitKind.QUIT)

    @classmethod
    def spawn_shell(cls, path: Path) -> ExitAction:
        return cls(ExitKind.SPAWN_SHELL, path)


@dataclass(frozen=True)
class EntryRow:
    name: str
    mode: str
    size: str
    is_dir: bool
    is_symlink: bool
    selected: bool
    marked: bool
    link_target: str | None = None

    @property
    def display_name(self) -> str:
        if self.is_dir:
            return self.name + "/"
        if self.is_symlink and self.link_target:
            return f"{self.name} -> {self.link_target}"
        return self.name


@dataclass(frozen=True)
class PaneView:
    path: str
    rows: tuple[EntryRow, ...]
    selected_index: int
    scroll_offset: int
    total_entries: int
    marked_count: int
    active: bool = True


@dataclass(frozen=True)
class LayoutView:
    orientation: str
    ratio: float
    synced: bool


@dataclass(frozen=True)
class OverlayView:
    title: str
    lines: tuple[str, ...] = ()
    prompt: str | None = None
    warnings: tuple[str, ...] = ()
    footer: str = ""


@dataclass(frozen=True)
class RenderModel:
    mode: Mode
    panes: tuple[PaneView, ...]
    active_pane: int
    layout: LayoutView | None
    overlay: OverlayView | None
    advisories: tuple[Advisory, ...]
    help_lines: tuple[str, ...]
    elevated: bool
    exit_action: ExitAction | None = None


def entry_row(entry: Entry, *, selected: bool, marked: bool) -> EntryRow:
    return EntryRow(
        name=entry.name,
        mode=format_mode(entry),
        size="" if entry.is_navigable else format_size(entry.size_bytes),
        is_dir=entry.is_navigable,
        is_symlink=entry.is_symlink,
        selected=selected,
        marked=marked,
        link_target=str(entry.link_target) if entry.link_target is not None else None,
    )


def pane_view(cursor: DirectoryCursor, *, active: bool = True) -> PaneView:
    rows = tuple(
        entry_row(
            entry,
            selected=(cursor.scroll_offset + offset) == cursor.selected_index,
            marked=cursor.is_marked(entry),
        )
        for offset, entry in enumerate(cursor.visible_entries())
    )
    return PaneView(
        path=str(cursor.path),
        rows=rows,
        selected_index=cursor.selected_index,
        scroll_offset=cursor.scroll_offset,
        total_entries=len(cursor.entries),
        marked_count=len(cursor.multi_selected),
        active=active,
    )


__all__ = [
    "EntryRow",
    "ExitAction",
    "ExitKind",
    "LayoutView",
    "OverlayView",
    "PaneView",
    "RenderModel",
    "entry_row",
    "pane_view",
]
