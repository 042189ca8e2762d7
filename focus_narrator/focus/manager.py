from __future__ import annotations

from typing import Any, List, Optional

from focus_narrator.focus import contract
from focus_narrator.focus.contract import FocusTarget
from focus_narrator.logging import LoggerFactory
from focus_narrator.speech import AnnouncementSink

log = LoggerFactory.for_focus()


class FocusManager:
    """Tracks one background screen and a stack of overlays above it.

    The focus target is the top overlay, else the screen, else nothing.
    Screens and overlays are built by the host and handed in; the manager
    only keeps references. No transition raises, whatever the prior state.
    """

    def __init__(self, sink: Optional[AnnouncementSink] = None) -> None:
        self.sink = sink
        self._screen: Optional[FocusTarget] = None
        self._overlays: List[FocusTarget] = []
        self._generation = 0
        self._returning_from_overlay = False

    @property
    def active_screen(self) -> Optional[FocusTarget]:
        return self._screen

    @property
    def overlays(self) -> List[FocusTarget]:
        return list(self._overlays)

    @property
    def focus_generation(self) -> int:
        """Counter bumped whenever the focus target changes."""
        return self._generation

    @property
    def returning_from_overlay(self) -> bool:
        """True while a target regains focus after an overlay above it closed."""
        return self._returning_from_overlay

    def current_focus_target(self) -> Optional[FocusTarget]:
        if self._overlays:
            return self._overlays[-1]
        return self._screen

    def focused_overlay(self) -> Optional[FocusTarget]:
        return self._overlays[-1] if self._overlays else None

    def is_overlay(self, target: Any) -> bool:
        return any(overlay is target for overlay in self._overlays)

    # -- transitions ------------------------------------------------------

    def set_screen(self, screen: FocusTarget) -> None:
        while self._overlays:
            contract.call_hook(self._overlays.pop(), contract.ON_FOCUS_LOST)
        previous = self._screen
        if previous is not None and previous is not screen:
            contract.call_hook(previous, contract.ON_FOCUS_LOST)
        self._screen = screen
        self._generation += 1
        log.info(f"Screen set: {contract.target_name(screen)}")
        self._enter(screen)

    def show_overlay(self, overlay: FocusTarget) -> None:
        self._overlays.append(overlay)
        self._generation += 1
        log.info(
            f"Overlay shown: {contract.target_name(overlay)} "
            f"(depth {len(self._overlays)})"
        )
        self._enter(overlay)

    def hide_overlay(self, overlay: FocusTarget) -> None:
        """Remove ``overlay`` by identity from anywhere in the stack.

        Only the topmost occurrence is removed. The target underneath is
        notified when the top was removed but nothing is announced.
        """
        for position in range(len(self._overlays) - 1, -1, -1):
            if self._overlays[position] is overlay:
                was_top = position == len(self._overlays) - 1
                del self._overlays[position]
                self._leave(overlay, was_top)
                return
        log.debug(f"Overlay not on stack: {contract.target_name(overlay)}")

    def pop_overlay(self) -> Optional[FocusTarget]:
        if not self._overlays:
            return None
        overlay = self._overlays.pop()
        self._leave(overlay, True)
        return overlay

    def refresh(
        self,
        target: Optional[FocusTarget] = None,
        *,
        preserve_index: bool = False,
        announce: bool = True,
    ) -> None:
        """Rebuild a target's menu after it declared itself dirty."""
        target = target if target is not None else self.current_focus_target()
        if target is None:
            return
        index = target.menu.current_index
        contract.build_menu(target)
        if preserve_index:
            target.menu.set_index(index)
        if announce and target is self.current_focus_target():
            target.menu.start_reading(announce_name=True)

    def prune_invalid(self) -> None:
        """Drop overlays and the screen whose ``is_valid`` reports False."""
        for overlay in list(reversed(self._overlays)):
            if not contract.is_valid(overlay):
                log.debug(f"Pruning stale overlay {contract.target_name(overlay)}")
                self.hide_overlay(overlay)
        if self._screen is not None and not contract.is_valid(self._screen):
            log.debug(f"Pruning stale screen {contract.target_name(self._screen)}")
            screen, self._screen = self._screen, None
            contract.call_hook(screen, contract.ON_FOCUS_LOST)
            if not self._overlays:
                self._generation += 1

    # -- helpers ----------------------------------------------------------

    def _enter(self, target: FocusTarget) -> None:
        contract.call_hook(target, contract.ON_FOCUS_GAINED)
        contract.build_menu(target)
        self._announce_title(target)
        target.menu.announce_current(interrupt=False)

    def _leave(self, overlay: FocusTarget, was_top: bool) -> None:
        log.info(f"Overlay hidden: {contract.target_name(overlay)}")
        contract.call_hook(overlay, contract.ON_FOCUS_LOST)
        if not was_top:
            return
        self._generation += 1
        revealed = self.current_focus_target()
        if revealed is None:
            return
        self._returning_from_overlay = True
        try:
            contract.call_hook(revealed, contract.ON_FOCUS_GAINED)
        finally:
            self._returning_from_overlay = False

    def _announce_title(self, target: FocusTarget) -> None:
        name = contract.target_name(target)
        if name and self.sink is not None:
            self.sink.speak(name, True)
