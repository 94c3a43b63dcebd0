"""Dual-pane coordination: two cursors, an active side and layout state.

The coordinator routes work to the active cursor only. Layout changes
(orientation, ratio) never touch cursor state, and switching sides leaves both
cursors exactly as they were.
"""

from __future__ import annotations

import logging
from enum import Enum

from ..directory_pane import DirectoryCursor
from ..errors import Advisory

logger = logging.getLogger(__name__)

RATIO_MIN = 0.2
RATIO_MAX = 0.8
RATIO_STEP = 0.05
DEFAULT_RATIO = 0.5


class Side(Enum):
    LEFT = "left"
    RIGHT = "right"

    @property
    def other(self) -> Side:
        return Side.RIGHT if self is Side.LEFT else Side.LEFT


class Orientation(Enum):
    """``VERTICAL`` puts panes side by side; ``HORIZONTAL`` stacks them."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


def clamp_ratio(ratio: float) -> float:
    return round(max(RATIO_MIN, min(RATIO_MAX, ratio)), 2)


def split_extent(total: int, ratio: float) -> tuple[int, int]:
    """Divide ``total`` cells between two panes, keeping one for the divider."""
    usable = max(2, total - 1)
    first = max(1, min(usable - 1, int(usable * ratio)))
    return first, usable - first


class SplitCoordinator:
    def __init__(
        self,
        left: DirectoryCursor,
        right: DirectoryCursor,
        *,
        orientation: Orientation = Orientation.VERTICAL,
        ratio: float = DEFAULT_RATIO,
    ) -> None:
        self.cursors = {Side.LEFT: left, Side.RIGHT: right}
        self.active_side = Side.LEFT
        self.orientation = orientation
        self.split_ratio = clamp_ratio(ratio)
        self.synced = False

    @property
    def left(self) -> DirectoryCursor:
        return self.cursors[Side.LEFT]

    @property
    def right(self) -> DirectoryCursor:
        return self.cursors[Side.RIGHT]

    @property
    def active(self) -> DirectoryCursor:
        return self.cursors[self.active_side]

    @property
    def inactive(self) -> DirectoryCursor:
        return self.cursors[self.active_side.other]

    def switch_side(self) -> None:
        self.active_side = self.active_side.other

    def sync(self) -> Advisory | None:
        """Load the active side's path into the inactive side."""
        logger.debug("sync %s -> %s", self.active.path, self.active_side.other.value)
        return self.inactive.load(self.active.path)

    def toggle_sync_lock(self) -> Advisory | None:
        """Toggle mirroring; turning it on syncs immediately."""
        self.synced = not self.synced
        if self.synced:
            return self.sync()
        return None

    def after_navigation(self) -> Advisory | None:
        """Mirror the active path to the other side while the sync lock is on."""
        if self.synced and self.active.path != self.inactive.path:
            return self.sync()
        return None

    def toggle_orientation(self) -> None:
        if self.orientation is Orientation.VERTICAL:
            self.orientation = Orientation.HORIZONTAL
        else:
            self.orientation = Orientation.VERTICAL

    def adjust_ratio(self, delta: float) -> float:
        self.split_ratio = clamp_ratio(self.split_ratio + delta)
        return self.split_ratio

    def pane_sizes(self, width: int, height: int) -> tuple[tuple[int, int], tuple[int, int]]:
        """``((cols, rows), (cols, rows))`` for left/top and right/bottom.

        One column (or row) is reserved for the divider.
        """
        if self.orientation is Orientation.VERTICAL:
            first, second = split_extent(width, self.split_ratio)
            return (first, height), (second, height)
        first, second = split_extent(height, self.split_ratio)
        return (width, first), (width, second)


__all__ = [
    "DEFAULT_RATIO",
    "Orientation",
    "RATIO_MAX",
    "RATIO_MIN",
    "RATIO_STEP",
    "Side",
    "SplitCoordinator",
    "clamp_ratio",
    "split_extent",
]
