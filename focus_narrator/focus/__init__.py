from focus_narrator.focus.contract import FocusTarget
from focus_narrator.focus.manager import FocusManager

__all__ = [
    "FocusManager",
    "FocusTarget",
]
