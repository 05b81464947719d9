"""Keyboard shortcut dispatch with explicit focus context."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class FocusContext:
    """Where keyboard focus currently is, supplied by the caller."""

    input_focused: bool = False


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single action callback.

    ``in_inputs`` decides whether the binding fires while a text input has
    focus; otherwise the key is left to the input's native behavior.
    """

    combos: tuple[str, ...]
    handler: Callable[[], bool | None]
    in_inputs: bool = True


def normalize_combo(key: str) -> str:
    """Fold case and map ``cmd`` to ``ctrl`` so both platforms share bindings."""
    parts = [part.strip().lower() for part in key.split("+") if part.strip()]
    return "+".join("ctrl" if part in {"cmd", "meta"} else part for part in parts)


class KeyComboRegistry:
    """Small key-dispatch table keyed by normalized combo strings."""

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        self._normalize = normalize if normalize is not None else normalize_combo
        self._bindings: dict[str, KeyComboBinding] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._bindings[self._normalize(combo)] = binding
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, key: str, context: FocusContext = FocusContext()) -> bool | None:
        """Invoke the bound handler for ``key`` and return its handled result.

        Returns ``None`` when nothing is bound or the binding is suppressed
        while an input has focus.
        """
        binding = self._bindings.get(self._normalize(key))
        if binding is None:
            return None
        if context.input_focused and not binding.in_inputs:
            return None
        return binding.handler()


def build_default_registry(
    on_select_all: Callable[[], bool | None],
    on_copy: Callable[[], bool | None],
    on_search: Callable[[], bool | None],
    on_escape: Callable[[], bool | None],
) -> KeyComboRegistry:
    """Bind the standard select-all, copy, search and escape shortcuts."""
    return KeyComboRegistry().register_bindings(
        KeyComboBinding(("ctrl+a", "cmd+a"), on_select_all, in_inputs=False),
        KeyComboBinding(("ctrl+c", "cmd+c"), on_copy, in_inputs=False),
        KeyComboBinding(("ctrl+f", "cmd+f"), on_search),
        KeyComboBinding(("escape",), on_escape),
    )
