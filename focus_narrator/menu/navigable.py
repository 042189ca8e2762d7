from __future__ import annotations

from typing import Callable, Iterable, List, Optional

from focus_narrator.logging import LoggerFactory
from focus_narrator.menu.model import MenuOption, TextSource
from focus_narrator.speech import AnnouncementSink

log = LoggerFactory.for_menu()


class NavigableMenu:
    """Ordered list of :class:`MenuOption` with a current position.

    ``current_index`` is always within ``[0, count - 1]`` while the menu has
    options and is 0 when it is empty. Every operation on an empty menu is
    a silent no-op. Movement clamps at both ends unless ``wrap`` is set.
    """

    def __init__(
        self,
        name: str = "",
        sink: Optional[AnnouncementSink] = None,
        *,
        wrap: bool = False,
    ) -> None:
        self.name = name
        self.sink = sink
        self.wrap = wrap
        self._options: List[MenuOption] = []
        self._index = 0

    def __len__(self) -> int:
        return len(self._options)

    @property
    def options(self) -> List[MenuOption]:
        return list(self._options)

    @property
    def count(self) -> int:
        return len(self._options)

    @property
    def is_empty(self) -> bool:
        return not self._options

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_option(self) -> Optional[MenuOption]:
        if not self._options:
            return None
        return self._options[self._index]

    # -- building ---------------------------------------------------------

    def add_option(self, option: MenuOption) -> MenuOption:
        self._options.append(option)
        if len(self._options) == 1:
            self._index = 0
        return option

    def add(
        self,
        text: TextSource,
        on_confirm: Optional[Callable[[], None]] = None,
        *,
        on_adjust: Optional[Callable[[int], None]] = None,
        on_read: Optional[Callable[[], None]] = None,
        hotkey: Optional[str] = None,
    ) -> MenuOption:
        return self.add_option(
            MenuOption(
                text_provider=text,
                on_confirm=on_confirm,
                on_adjust=on_adjust,
                on_read=on_read,
                hotkey=hotkey,
            )
        )

    def rebuild(self, options: Iterable[MenuOption], preserve_index: bool = False) -> None:
        """Replace every option at once.

        The index returns to 0 unless ``preserve_index`` is set, in which
        case the previous position is kept and clamped to the new length.
        """
        previous = self._index
        self._options = list(options)
        self._index = previous if preserve_index else 0
        self._clamp()
        log.debug(f"Rebuilt menu {self.name!r} with {len(self._options)} options")

    def clear(self) -> None:
        self._options = []
        self._index = 0

    def set_index(self, index: int) -> None:
        if not self._options:
            return
        self._index = index
        self._clamp()

    def _clamp(self) -> None:
        if not self._options:
            self._index = 0
        else:
            self._index = max(0, min(len(self._options) - 1, self._index))

    # -- navigation -------------------------------------------------------

    def move_up(self) -> None:
        self._move(-1)

    def move_down(self) -> None:
        self._move(1)

    def _move(self, delta: int) -> None:
        if not self._options:
            return
        count = len(self._options)
        if self.wrap:
            self._index = (self._index + delta) % count
        else:
            self._index = max(0, min(count - 1, self._index + delta))
        self.announce_current()

    def move_first(self) -> None:
        if not self._options:
            return
        self._index = 0
        self.announce_current()

    def move_last(self) -> None:
        if not self._options:
            return
        self._index = len(self._options) - 1
        self.announce_current()

    def select_hotkey(self, key: str) -> bool:
        """Jump to the first option bound to ``key`` and announce it."""
        key = key.lower()
        for index, option in enumerate(self._options):
            if option.hotkey == key:
                self._index = index
                self.announce_current()
                return True
        return False

    # -- option behaviour -------------------------------------------------

    def adjust_left(self) -> None:
        self._adjust(-1)

    def adjust_right(self) -> None:
        self._adjust(1)

    def _adjust(self, delta: int) -> None:
        option = self.current_option
        if option is None or not option.has_adjust:
            return
        if self._run(lambda: option.adjust(delta), "adjust"):
            self.announce_current()

    def confirm(self) -> None:
        option = self.current_option
        if option is None:
            return
        self._run(option.confirm, "confirm")

    def _run(self, callback: Callable[[], bool], label: str) -> bool:
        # Host callbacks must never break the key loop.
        try:
            return callback()
        except Exception:
            log.exception(f"Option {label} failed in menu {self.name!r}")
            return False

    # -- narration --------------------------------------------------------

    def narration(self) -> Optional[str]:
        option = self.current_option
        if option is None:
            return None
        try:
            text = option.text
        except Exception:
            log.exception(f"Option text failed in menu {self.name!r}")
            text = ""
        return f"{text}, item {self._index + 1} of {len(self._options)}"

    def announce_current(self, interrupt: bool = True) -> None:
        option = self.current_option
        if option is None:
            return
        if option.on_read is not None:
            self._run(option.read, "read")
            return
        self._speak(self.narration(), interrupt)

    def start_reading(self, announce_name: bool = True) -> None:
        """Speak the menu title, then queue the current option behind it."""
        if announce_name and self.name:
            self._speak(self.name, True)
            self.announce_current(interrupt=False)
        else:
            self.announce_current()

    def help_text(self) -> str:
        parts = ["Up and Down: navigate", "Home and End: first and last"]
        if any(option.has_adjust for option in self._options):
            parts.append("Left and Right: adjust")
        parts.append("Enter: select")
        parts.append("Escape: back")
        if any(option.hotkey for option in self._options):
            parts.append("letters: jump to option")
        return ". ".join(parts) + "."

    def _speak(self, text: Optional[str], interrupt: bool) -> None:
        if not text or self.sink is None:
            return
        self.sink.speak(text, interrupt)
