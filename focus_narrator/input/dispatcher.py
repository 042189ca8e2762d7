from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from focus_narrator.focus import contract
from focus_narrator.focus.manager import FocusManager
from focus_narrator.input.keys import Action, InputConfig, KeyEvent, NO_MODIFIERS
from focus_narrator.logging import LoggerFactory

log = LoggerFactory.for_input()
key_log = LoggerFactory.for_keys()


_MENU_ACTIONS = {
    Action.MOVE_UP: "move_up",
    Action.MOVE_DOWN: "move_down",
    Action.ADJUST_LEFT: "adjust_left",
    Action.ADJUST_RIGHT: "adjust_right",
    Action.CONFIRM: "confirm",
    Action.FIRST: "move_first",
    Action.LAST: "move_last",
}


@dataclass
class HeldKey:
    event: KeyEvent
    next_repeat: Optional[float] = None
    generation: int = 0


class InputDispatcher:
    """Turns raw key events into actions on the current focus target.

    The host calls :meth:`key_down` and :meth:`key_up` as events arrive and
    :meth:`update` once per frame with the elapsed time. Held keys repeat
    after ``initial_repeat_delay`` and then every ``repeat_interval``
    seconds. Every repeat resolves the focus target afresh, and any focus
    transition cancels the repeat of keys held across it.
    """

    def __init__(self, focus: FocusManager, config: Optional[InputConfig] = None) -> None:
        self.focus = focus
        self.config = config or InputConfig()
        self._held: Dict[str, HeldKey] = {}
        self._now = 0.0

    @property
    def held_keys(self) -> List[str]:
        return list(self._held)

    def key_down(self, key: object, modifiers: Optional[Iterable[object]] = None) -> None:
        try:
            event = KeyEvent.create(key, modifiers)
        except ValueError as error:
            log.debug(f"Ignoring key event: {error}")
            return
        if event.key in self._held:
            # OS auto-repeat; timing is ours
            return
        key_log.trace(f"Key down {event.key} {sorted(m.value for m in event.modifiers)}")
        held = HeldKey(event=event)
        self._held[event.key] = held
        action = self._handle(event)
        if action in self.config.repeatable_actions:
            held.next_repeat = self._now + self.config.initial_repeat_delay
            held.generation = self.focus.focus_generation

    def key_up(self, key: object) -> None:
        if self._held.pop(KeyEvent.create(key).key, None) is not None:
            key_log.trace(f"Key up {key}")

    def release_all(self) -> None:
        self._held.clear()

    def update(self, dt: float) -> None:
        self._now += max(0.0, dt)
        for held in list(self._held.values()):
            if held.next_repeat is None or self._now < held.next_repeat:
                continue
            # an overlay closed by the host counts as a focus change
            self.focus.prune_invalid()
            if held.generation != self.focus.focus_generation:
                held.next_repeat = None
                key_log.trace(f"Repeat cancelled for {held.event.key}: focus changed")
                continue
            key_log.trace(f"Key repeat {held.event.key}")
            action = self._handle(held.event)
            if action in self.config.repeatable_actions:
                held.next_repeat = self._now + self.config.repeat_interval
                held.generation = self.focus.focus_generation
            else:
                held.next_repeat = None

    def _handle(self, event: KeyEvent) -> Optional[Action]:
        action = self.config.action_for(event)
        if action is None:
            if event.modifiers == NO_MODIFIERS:
                self._try_hotkey(event.key)
            return None
        self.dispatch(action)
        return action

    def _try_hotkey(self, key: str) -> None:
        target = self._resolve_target()
        if target is None:
            return
        if not target.menu.select_hotkey(key):
            key_log.trace(f"Unmapped key {key}")

    def _resolve_target(self):
        self.focus.prune_invalid()
        return self.focus.current_focus_target()

    def dispatch(self, action: Action) -> None:
        target = self._resolve_target()
        if target is None:
            log.debug(f"No focus target for {action.value}")
            return
        method_name = _MENU_ACTIONS.get(action)
        if method_name is not None:
            getattr(target.menu, method_name)()
        elif action is Action.BACK:
            self._back(target)
        elif action is Action.HELP:
            self._help(target)

    def _back(self, target) -> None:
        if contract.has_hook(target, contract.ON_BACK):
            contract.call_hook(target, contract.ON_BACK)
        elif self.focus.is_overlay(target):
            log.debug(f"Back closes overlay {contract.target_name(target)}")
            self.focus.pop_overlay()

    def _help(self, target) -> None:
        if contract.has_hook(target, contract.ON_HELP):
            contract.call_hook(target, contract.ON_HELP)
        elif self.focus.sink is not None:
            self.focus.sink.speak(target.menu.help_text(), True)
