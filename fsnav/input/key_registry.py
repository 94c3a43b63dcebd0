"""Key-token dispatch tables."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

KeyHandler = Callable[[], bool | None]


@dataclass(frozen=True)
class KeyComboBinding:
    """One action reachable from one or more key tokens."""

    combos: tuple[str, ...]
    handler: KeyHandler


class KeyComboRegistry:
    """Maps key tokens to handlers, optionally normalizing tokens first.

    ``dispatch`` returns ``None`` for an unbound key. A handler returning
    ``None`` counts as handled; returning ``False`` declines the key so the
    caller can fall through to the next table.
    """

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        self._normalize = normalize if normalize is not None else (lambda key: key)
        self._handlers: dict[str, KeyHandler] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        for combo in binding.combos:
            self._handlers[self._normalize(combo)] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, key: str) -> bool | None:
        handler = self._handlers.get(self._normalize(key))
        if handler is None:
            return None
        result = handler()
        return True if result is None else result


def dispatch_first(key: str, *registries: KeyComboRegistry) -> bool:
    """Try each registry in order; ``True`` once one of them handles ``key``."""
    for registry in registries:
        if registry.dispatch(key):
            return True
    return False


__all__ = ["KeyComboBinding", "KeyComboRegistry", "KeyHandler", "dispatch_first"]
