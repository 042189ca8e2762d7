from focus_narrator.menu.model import MenuOption
from focus_narrator.menu.navigable import NavigableMenu

__all__ = [
    "MenuOption",
    "NavigableMenu",
]
