"""Keybinding system."""

from __future__ import annotations

import abc
import enum
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Union


class SpecialKey(enum.Enum):
    BACKSPACE = "backspace"
    DELETE = "delete"
    DOWN = "down"
    ESC = "esc"
    ENTER = "enter"
    LEFT = "left"
    RIGHT = "right"
    TAB = "tab"
    UP = "up"


class KeyModifiers(enum.IntFlag):
    NONE = 0
    SHIFT = 1
    CONTROL = 2
    ALT = 4
    SUPER = 8
    HYPER = 16
    META = 32


KeyCode = Union[str, SpecialKey]
Binding = tuple[KeyCode, KeyModifiers]
BindingFn = Callable[[Any, Any, Any], None]


@dataclass(frozen=True)
class KeyEvent:
    """A key press: a character or special key plus modifiers."""

    code: KeyCode
    modifiers: KeyModifiers = KeyModifiers.NONE


class BindingFromStrError(ValueError):
    """Raised when a keybinding string cannot be parsed."""


class UnknownKeyError(BindingFromStrError):
    def __init__(self, key: str) -> None:
        super().__init__(f"unknown key: {key}")
        self.key = key


class UnknownModifierError(BindingFromStrError):
    def __init__(self, modifier: str) -> None:
        super().__init__(f"unknown modifier: {modifier}")
        self.modifier = modifier


class EmptyKeybindingError(BindingFromStrError):
    def __init__(self) -> None:
        super().__init__("empty keybinding")


_NAMED_KEYS: dict[str, KeyCode] = {
    "<space>": " ",
    "<backspace>": SpecialKey.BACKSPACE,
    "<delete>": SpecialKey.DELETE,
    "<down>": SpecialKey.DOWN,
    "<esc>": SpecialKey.ESC,
    "<enter>": SpecialKey.ENTER,
    "<left>": SpecialKey.LEFT,
    "<right>": SpecialKey.RIGHT,
    "<tab>": SpecialKey.TAB,
    "<up>": SpecialKey.UP,
}

_MODIFIERS: dict[str, KeyModifiers] = {
    "s": KeyModifiers.SHIFT,
    "shift": KeyModifiers.SHIFT,
    "a": KeyModifiers.ALT,
    "alt": KeyModifiers.ALT,
    "c": KeyModifiers.CONTROL,
    "ctrl": KeyModifiers.CONTROL,
    "super": KeyModifiers.SUPER,
    "m": KeyModifiers.META,
    "meta": KeyModifiers.META,
}


def _parse_keycode(s: str) -> KeyCode:
    if len(s) == 1 and "!" <= s <= "~":
        return s
    try:
        return _NAMED_KEYS[s]
    except KeyError:
        raise UnknownKeyError(s) from None


def _parse_modifier(s: str) -> KeyModifiers:
    try:
        return _MODIFIERS[s.lower()]
    except KeyError:
        raise UnknownModifierError(s) from None


def parse_keybinding(s: str) -> Binding:
    """Parse a string such as ``"C-S-c"`` into a key code and modifiers."""
    *mod_parts, key_part = s.split("-")
    keycode = _parse_keycode(key_part)
    mods = KeyModifiers.NONE
    for part in mod_parts:
        mods |= _parse_modifier(part)
    return keycode, mods


class Keybinding(abc.ABC):
    """Interface for a keybinding system."""

    @abc.abstractmethod
    def handle_key_event(self, sh: Any, ctx: Any, rt: Any, key_event: KeyEvent) -> bool:
        """Run matching bindings; return True if the event was handled."""

    @abc.abstractmethod
    def get_info(self) -> dict[str, str]:
        """Map of binding strings to their descriptions."""


class DefaultKeybinding(Keybinding):
    """Keybindings stored as a map from parsed binding to callback."""

    def __init__(
        self, entries: Iterable[tuple[str, BindingFn, str]] | None = None
    ) -> None:
        self.bindings: dict[Binding, BindingFn] = {}
        self.info: dict[str, str] = {}
        for binding, func, description in entries or ():
            self.bind(binding, func, description)

    def bind(self, binding: str, func: BindingFn, description: str) -> None:
        """Register ``func`` for the binding string, replacing any previous one."""
        self.bindings[parse_keybinding(binding)] = func
        self.info[binding] = description

    def handle_key_event(self, sh: Any, ctx: Any, rt: Any, key_event: KeyEvent) -> bool:
        key = (key_event.code, key_event.modifiers)
        func = self.bindings.get(key)
        if func is None:
            return False
        func(sh, ctx, rt)
        return True

    def get_info(self) -> dict[str, str]:
        return self.info