"""
focus-narrator - keyboard and speech navigation engine
=======================================================

Lets a non-visual user drive an application through the keyboard while
narration goes to a speech backend.

Main Classes:
- FocusManager: one active screen plus a stack of overlays
- NavigableMenu / MenuOption: ordered options with positional narration
- InputDispatcher: raw keys to actions on the focused target

Submodules:
- focus_narrator.menu: options and navigable menus
- focus_narrator.focus: screen/overlay contract and focus manager
- focus_narrator.input: key table, repeat timing, dispatch
- focus_narrator.speech: announcement sinks
"""

from focus_narrator.__version__ import __version__
from focus_narrator.focus import FocusManager, FocusTarget
from focus_narrator.input import Action, InputConfig, InputDispatcher
from focus_narrator.menu import MenuOption, NavigableMenu
from focus_narrator.speech import AnnouncementSink, SpeechOutput

__all__ = [
    "Action",
    "AnnouncementSink",
    "FocusManager",
    "FocusTarget",
    "InputConfig",
    "InputDispatcher",
    "MenuOption",
    "NavigableMenu",
    "SpeechOutput",
    "__version__",
]
