from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

from focus_narrator.exceptions import InvalidKeyBindingError


class Action(Enum):
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    ADJUST_LEFT = "adjust_left"
    ADJUST_RIGHT = "adjust_right"
    CONFIRM = "confirm"
    BACK = "back"
    HELP = "help"
    FIRST = "first"
    LAST = "last"


class Modifier(Enum):
    SHIFT = "shift"
    CTRL = "ctrl"
    ALT = "alt"


Modifiers = FrozenSet[Modifier]
BindingKey = Tuple[str, Modifiers]

NO_MODIFIERS: Modifiers = frozenset()

_MODIFIER_ALIASES = {
    "shift": Modifier.SHIFT,
    "ctrl": Modifier.CTRL,
    "control": Modifier.CTRL,
    "alt": Modifier.ALT,
    "option": Modifier.ALT,
}


def normalize_key(key: object) -> str:
    """Key names are case-insensitive; raw integer key codes become their digits."""
    return str(key).strip().lower().replace(" ", "_")


def normalize_modifiers(modifiers: Optional[Iterable[object]]) -> Modifiers:
    """Accept Modifier members or their names; unknown names raise ValueError."""
    if not modifiers:
        return NO_MODIFIERS
    resolved = set()
    for modifier in modifiers:
        if isinstance(modifier, Modifier):
            resolved.add(modifier)
            continue
        name = str(modifier).strip().lower()
        if name not in _MODIFIER_ALIASES:
            raise ValueError(f"Unknown modifier: {modifier}")
        resolved.add(_MODIFIER_ALIASES[name])
    return frozenset(resolved)


@dataclass(frozen=True)
class KeyEvent:
    key: str
    modifiers: Modifiers = NO_MODIFIERS

    @classmethod
    def create(cls, key: object, modifiers: Optional[Iterable[object]] = None) -> KeyEvent:
        return cls(normalize_key(key), normalize_modifiers(modifiers))

    @property
    def binding(self) -> BindingKey:
        return (self.key, self.modifiers)


DEFAULT_BINDINGS: Dict[BindingKey, Action] = {
    ("up", NO_MODIFIERS): Action.MOVE_UP,
    ("down", NO_MODIFIERS): Action.MOVE_DOWN,
    ("left", NO_MODIFIERS): Action.ADJUST_LEFT,
    ("right", NO_MODIFIERS): Action.ADJUST_RIGHT,
    ("enter", NO_MODIFIERS): Action.CONFIRM,
    ("keypad_enter", NO_MODIFIERS): Action.CONFIRM,
    ("escape", NO_MODIFIERS): Action.BACK,
    ("backspace", NO_MODIFIERS): Action.BACK,
    ("f1", NO_MODIFIERS): Action.HELP,
    ("home", NO_MODIFIERS): Action.FIRST,
    ("end", NO_MODIFIERS): Action.LAST,
}

DEFAULT_REPEATABLE_ACTIONS: FrozenSet[Action] = frozenset(
    {Action.MOVE_UP, Action.MOVE_DOWN, Action.ADJUST_LEFT, Action.ADJUST_RIGHT}
)


def parse_binding(text: str) -> BindingKey:
    """Parse ``"ctrl+shift+up"`` into ``("up", {CTRL, SHIFT})``."""
    parts = [part.strip() for part in text.split("+")]
    if not parts or any(not part for part in parts):
        raise InvalidKeyBindingError(text, "empty key")
    *modifier_names, key = parts
    try:
        modifiers = normalize_modifiers(modifier_names)
    except ValueError as error:
        raise InvalidKeyBindingError(text, str(error)) from error
    return (normalize_key(key), modifiers)


def parse_action(binding: str, name: str) -> Action:
    try:
        return Action(str(name).strip().lower())
    except ValueError as error:
        raise InvalidKeyBindingError(binding, f"unknown action {name!r}") from error


def build_bindings(overrides: Optional[Mapping[str, str]] = None) -> Dict[BindingKey, Action]:
    """Merge ``{"ctrl+up": "first"}`` style overrides into the defaults."""
    bindings = dict(DEFAULT_BINDINGS)
    for text, action_name in (overrides or {}).items():
        bindings[parse_binding(text)] = parse_action(text, action_name)
    return bindings


@dataclass(frozen=True)
class InputConfig:
    """Key table and repeat timing, supplied once to the dispatcher."""

    bindings: Mapping[BindingKey, Action] = field(
        default_factory=lambda: dict(DEFAULT_BINDINGS)
    )
    initial_repeat_delay: float = 0.25
    repeat_interval: float = 0.08
    repeatable_actions: FrozenSet[Action] = DEFAULT_REPEATABLE_ACTIONS

    def action_for(self, event: KeyEvent) -> Optional[Action]:
        return self.bindings.get(event.binding)
