from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Union

TextSource = Union[str, Callable[[], str], None]


def _empty_text() -> str:
    return ""


def _as_provider(text: TextSource) -> Callable[[], str]:
    if text is None:
        return _empty_text
    if isinstance(text, str):
        return lambda: text
    return text


@dataclass
class MenuOption:
    """A single navigable command.

    ``text_provider`` is called on every read so values such as slider
    levels are always current. Absent behaviour slots make the matching
    operation a no-op.
    """

    text_provider: Callable[[], str] = _empty_text
    on_confirm: Optional[Callable[[], None]] = None
    on_adjust: Optional[Callable[[int], None]] = None
    on_read: Optional[Callable[[], None]] = None
    hotkey: Optional[str] = None

    def __post_init__(self) -> None:
        self.text_provider = _as_provider(self.text_provider)
        if self.hotkey:
            self.hotkey = self.hotkey.lower()

    @property
    def text(self) -> str:
        return self.text_provider() or ""

    @property
    def has_adjust(self) -> bool:
        return self.on_adjust is not None

    def confirm(self) -> bool:
        if self.on_confirm is None:
            return False
        self.on_confirm()
        return True

    def adjust(self, delta: int) -> bool:
        if self.on_adjust is None:
            return False
        self.on_adjust(delta)
        return True

    def read(self) -> bool:
        if self.on_read is None:
            return False
        self.on_read()
        return True
