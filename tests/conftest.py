"""
Pytest configuration and shared fixtures for focus-narrator tests.

This module provides common fixtures and stand-in screens/overlays used
across all test modules.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from focus_narrator.focus import FocusManager
from focus_narrator.input import InputConfig, InputDispatcher
from focus_narrator.menu import MenuOption, NavigableMenu
from focus_narrator.speech import RecordingSink


# ==============================================================================
# Stand-in Targets
# ==============================================================================


class FakeTarget:
    """Minimal screen/overlay satisfying the focus contract.

    Records every lifecycle call in ``events`` so tests can assert order.
    """

    def __init__(self, name: str, sink, labels: Optional[List[str]] = None) -> None:
        self.name = name
        self.menu = NavigableMenu(name, sink)
        self.labels = list(labels if labels is not None else ["First", "Second"])
        self.events: List[str] = []
        self.build_count = 0

    def build_menu(self) -> None:
        self.build_count += 1
        self.events.append("build_menu")
        self.menu.rebuild(MenuOption(label) for label in self.labels)


class HookedTarget(FakeTarget):
    """Target defining every optional hook."""

    def __init__(self, name: str, sink, labels: Optional[List[str]] = None) -> None:
        super().__init__(name, sink, labels)
        self.valid = True
        self.returning_flags: List[bool] = []
        self.manager: Optional[FocusManager] = None

    def on_focus_gained(self) -> None:
        self.events.append("on_focus_gained")
        if self.manager is not None:
            self.returning_flags.append(self.manager.returning_from_overlay)

    def on_focus_lost(self) -> None:
        self.events.append("on_focus_lost")

    def on_back(self) -> None:
        self.events.append("on_back")

    def on_help(self) -> None:
        self.events.append("on_help")

    def is_valid(self) -> bool:
        return self.valid


# ==============================================================================
# Engine Fixtures
# ==============================================================================


@pytest.fixture
def sink() -> RecordingSink:
    """Fixture providing an in-memory announcement sink."""
    return RecordingSink()


@pytest.fixture
def focus(sink) -> FocusManager:
    """Fixture providing a focus manager speaking into ``sink``."""
    return FocusManager(sink)


@pytest.fixture
def input_config() -> InputConfig:
    """Fixture providing default bindings with round repeat timings."""
    return InputConfig(initial_repeat_delay=0.5, repeat_interval=0.1)


@pytest.fixture
def dispatcher(focus, input_config) -> InputDispatcher:
    """Fixture providing a dispatcher bound to ``focus``."""
    return InputDispatcher(focus, input_config)


@pytest.fixture
def main_menu_labels() -> List[str]:
    return ["Play", "Options", "Quit"]


@pytest.fixture
def main_menu(sink, main_menu_labels) -> NavigableMenu:
    """Fixture providing the Play/Options/Quit menu."""
    menu = NavigableMenu("Main Menu", sink)
    for label in main_menu_labels:
        menu.add(label)
    return menu


@pytest.fixture
def make_target(sink):
    """Factory fixture building FakeTarget instances."""

    def _make(name: str, labels: Optional[List[str]] = None) -> FakeTarget:
        return FakeTarget(name, sink, labels)

    return _make


@pytest.fixture
def make_hooked_target(sink, focus):
    """Factory fixture building HookedTarget instances wired to ``focus``."""

    def _make(name: str, labels: Optional[List[str]] = None) -> HookedTarget:
        target = HookedTarget(name, sink, labels)
        target.manager = focus
        return target

    return _make


# ==============================================================================
# Settings Fixtures
# ==============================================================================


@pytest.fixture
def temp_settings_file(tmp_path) -> Path:
    """
    Fixture providing a temporary settings file path.

    Returns:
        Path to a settings file inside a fresh temp directory.
    """
    settings_dir = tmp_path / "config"
    settings_dir.mkdir()
    return settings_dir / "settings.json"


@pytest.fixture
def sample_settings_data() -> Dict[str, Any]:
    """Fixture providing sample settings data."""
    return {
        "initial_repeat_delay": 0.4,
        "repeat_interval": 0.05,
        "wrap_navigation": True,
        "key_bindings": {"ctrl+up": "first", "ctrl+down": "last"},
    }


@pytest.fixture
def write_settings(temp_settings_file, monkeypatch):
    """Factory fixture writing settings JSON and pointing the loader at it."""

    def _write(data: Any) -> Path:
        text = data if isinstance(data, str) else json.dumps(data)
        temp_settings_file.write_text(text)
        monkeypatch.setattr(
            "focus_narrator.config.settings.SETTINGS_PATH", temp_settings_file
        )
        return temp_settings_file

    return _write
