"""Key-token to engine-command bindings."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..engine import Command


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single engine command."""

    combos: tuple[str, ...]
    command: Command


class KeyComboRegistry:
    """Small key-lookup table with optional key normalization strategy."""

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        """Initialize empty registry with optional token normalizer."""
        self._normalize = normalize if normalize is not None else self._identity
        self._commands: dict[str, Command] = {}

    @staticmethod
    def _identity(key: str) -> str:
        """Return key unchanged for exact-match registries."""
        return key

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing commands for same combos."""
        for combo in binding.combos:
            self._commands[self._normalize(combo)] = binding.command
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def lookup(self, key: str) -> Command | None:
        """Return the command bound to ``key``, if any."""
        return self._commands.get(self._normalize(key))


DEFAULT_BINDINGS: tuple[KeyComboBinding, ...] = (
    KeyComboBinding(("q", "CTRL_C"), Command.QUIT),
    KeyComboBinding(("TAB", "SHIFT_TAB"), Command.TOGGLE_DETAIL),
    KeyComboBinding(("L",), Command.TOGGLE_LOG),
    KeyComboBinding(("g", "HOME"), Command.FIRST),
    KeyComboBinding(("G", "END"), Command.LAST),
    KeyComboBinding(("j", "DOWN"), Command.INCREMENT),
    KeyComboBinding(("k", "UP"), Command.DECREMENT),
    KeyComboBinding(("PAGE_DOWN", "CTRL_F", " "), Command.PAGE_FORWARD),
    KeyComboBinding(("PAGE_UP", "CTRL_B"), Command.PAGE_BACK),
)


def default_key_registry() -> KeyComboRegistry:
    return KeyComboRegistry().register_bindings(*DEFAULT_BINDINGS)


__all__ = [
    "DEFAULT_BINDINGS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "default_key_registry",
]
