"""Input layer: terminal key decoding and key-dispatch tables."""

from __future__ import annotations

from .key_registry import KeyComboBinding, KeyComboRegistry, dispatch_first
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key

__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "dispatch_first",
    "read_key",
]
