from __future__ import annotations

from typing import Any, Optional, Protocol

from focus_narrator.logging import LoggerFactory
from focus_narrator.menu.navigable import NavigableMenu

log = LoggerFactory.for_focus()

# Optional hooks a screen or overlay may define.
ON_FOCUS_GAINED = "on_focus_gained"
ON_FOCUS_LOST = "on_focus_lost"
ON_BACK = "on_back"
ON_HELP = "on_help"
IS_VALID = "is_valid"


class FocusTarget(Protocol):
    """Capability contract for anything the focus manager can focus.

    Screens and overlays share it. Beyond ``name``, ``menu`` and
    ``build_menu`` a target may define ``on_focus_gained``,
    ``on_focus_lost``, ``on_back``, ``on_help`` and ``is_valid``.
    """

    name: str
    menu: NavigableMenu

    def build_menu(self) -> None:
        ...


def target_name(target: Any) -> str:
    return str(getattr(target, "name", "") or "")


def has_hook(target: Any, hook: str) -> bool:
    return callable(getattr(target, hook, None))


def call_hook(target: Any, hook: str) -> Optional[Any]:
    """Call an optional hook, logging and containing any failure."""
    method = getattr(target, hook, None)
    if not callable(method):
        return None
    log.trace(f"Hook {hook} on {target_name(target)!r}")
    try:
        return method()
    except Exception:
        log.exception(f"{hook} failed on {target_name(target)!r}")
        return None


def build_menu(target: Any) -> None:
    try:
        target.build_menu()
    except Exception:
        log.exception(f"build_menu failed on {target_name(target)!r}")


def is_valid(target: Any) -> bool:
    if not has_hook(target, IS_VALID):
        return True
    return call_hook(target, IS_VALID) is not False
