"""Persistent JSON config helpers.

Stores the hidden-file preference and the split-pane layout. All access is
defensive: a missing or malformed config falls back to defaults, and a failed
write is logged rather than raised into the UI.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..split import Orientation, clamp_ratio
from ..split.coordinator import DEFAULT_RATIO

logger = logging.getLogger(__name__)

APP_NAME = "fsnav"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class Preferences:
    show_hidden: bool = False
    split_ratio: float = DEFAULT_RATIO
    split_orientation: Orientation = Orientation.VERTICAL


def load_config() -> dict[str, object]:
    """Load the persisted JSON object, or ``{}`` when missing or malformed."""
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON; errors are only logged."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def load_preferences() -> Preferences:
    """Read preferences, accepting only well-typed values."""
    data = load_config()
    show_hidden = data.get("show_hidden")
    ratio = data.get("split_ratio")
    orientation = data.get("split_orientation")

    if isinstance(ratio, bool) or not isinstance(ratio, (int, float)):
        ratio = DEFAULT_RATIO
    try:
        parsed_orientation = Orientation(orientation)
    except ValueError:
        parsed_orientation = Orientation.VERTICAL

    return Preferences(
        show_hidden=show_hidden if isinstance(show_hidden, bool) else False,
        split_ratio=clamp_ratio(float(ratio)),
        split_orientation=parsed_orientation,
    )


def save_preferences(preferences: Preferences) -> None:
    """Merge preferences into the config file, keeping unknown keys."""
    config = load_config()
    config["show_hidden"] = bool(preferences.show_hidden)
    config["split_ratio"] = clamp_ratio(preferences.split_ratio)
    config["split_orientation"] = preferences.split_orientation.value
    save_config(config)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "Preferences",
    "load_config",
    "load_preferences",
    "save_config",
    "save_preferences",
]
