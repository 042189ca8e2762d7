"""
Keyboard input for focus-narrator.

- Action / Modifier / KeyEvent: abstract actions and normalized raw keys
- InputConfig: key table and repeat timing
- InputDispatcher: routes key events to the focus manager's target
"""

from focus_narrator.input.dispatcher import InputDispatcher
from focus_narrator.input.keys import (
    DEFAULT_BINDINGS,
    Action,
    InputConfig,
    KeyEvent,
    Modifier,
    build_bindings,
    parse_binding,
)

__all__ = [
    "DEFAULT_BINDINGS",
    "Action",
    "InputConfig",
    "InputDispatcher",
    "KeyEvent",
    "Modifier",
    "build_bindings",
    "parse_binding",
]
