"""Two directory cursors side by side."""

from __future__ import annotations

from .coordinator import RATIO_STEP, Orientation, Side, SplitCoordinator, clamp_ratio, split_extent

__all__ = ["Orientation", "RATIO_STEP", "Side", "SplitCoordinator", "clamp_ratio", "split_extent"]
