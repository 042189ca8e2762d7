"""Announcement boundary between the navigation engine and a speech engine.

The engine only ever talks to an :class:`AnnouncementSink`. ``SpeechOutput``
adapts any screen-reader or TTS backend that exposes
``speak(text, interrupt)`` and keeps speech failures from reaching the key
loop. ``LogSink`` and ``RecordingSink`` are backend-free sinks for
development and tests.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Deque, List, Optional, Protocol, Tuple

from focus_narrator.logging import LoggerFactory

log = LoggerFactory.for_speech()

HISTORY_SIZE = 50


class AnnouncementSink(Protocol):
    def speak(self, text: str, interrupt: bool = True) -> None:
        ...


class SpeechOutput:
    """Best-effort speech output around an injected backend.

    Blank text is skipped. Backend errors are logged and swallowed so a
    failing screen reader never stops the user from pressing keys.
    """

    def __init__(self, backend: Any = None, history_size: int = HISTORY_SIZE) -> None:
        self._backend = backend
        self._history: Deque[str] = deque(maxlen=history_size)

    @property
    def available(self) -> bool:
        return self._backend is not None

    @property
    def last_spoken(self) -> Optional[str]:
        return self._history[-1] if self._history else None

    def history(self) -> List[str]:
        return list(self._history)

    def speak(self, text: str, interrupt: bool = True) -> None:
        if not text or not text.strip():
            return
        self._history.append(text)
        if self._backend is None:
            return
        try:
            self._backend.speak(text, interrupt=interrupt)
        except Exception as error:
            log.warning(f"Speech backend failed: {error}")

    def repeat_last(self) -> None:
        """Speak the most recent announcement again, interrupting."""
        text = self.last_spoken
        if text is None or self._backend is None:
            return
        try:
            self._backend.speak(text, interrupt=True)
        except Exception as error:
            log.warning(f"Speech backend failed: {error}")

    def silence(self) -> None:
        silence = getattr(self._backend, "silence", None)
        if silence is None:
            return
        try:
            silence()
        except Exception as error:
            log.debug(f"Ignoring silence failure: {error}")

    def shutdown(self) -> None:
        shutdown = getattr(self._backend, "shutdown", None)
        if shutdown is not None:
            try:
                shutdown()
            except Exception as error:
                log.debug(f"Ignoring shutdown failure: {error}")
        self._backend = None


class LogSink:
    """Sink that writes every announcement to the log instead of speaking."""

    def speak(self, text: str, interrupt: bool = True) -> None:
        if not text:
            return
        marker = "!" if interrupt else " "
        log.info(f"{marker} {text}")


class RecordingSink:
    """In-memory sink keeping ``(text, interrupt)`` pairs in order."""

    def __init__(self) -> None:
        self.messages: List[Tuple[str, bool]] = []

    def speak(self, text: str, interrupt: bool = True) -> None:
        self.messages.append((text, interrupt))

    @property
    def texts(self) -> List[str]:
        return [text for text, _ in self.messages]

    @property
    def last(self) -> Optional[str]:
        return self.messages[-1][0] if self.messages else None

    def clear(self) -> None:
        self.messages.clear()
