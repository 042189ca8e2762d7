"""Settings storage for input configuration."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from focus_narrator.input.keys import InputConfig, build_bindings

SETTINGS_PATH = Path(
    os.environ.get(
        "FOCUS_NARRATOR_SETTINGS_PATH",
        Path.home() / ".config" / "focus-narrator" / "settings.json",
    )
)

# Default values - use these constants instead of hardcoding values elsewhere
DEFAULT_INITIAL_REPEAT_DELAY = 0.25
DEFAULT_REPEAT_INTERVAL = 0.08

DEFAULT_SETTINGS: dict[str, Any] = {
    "initial_repeat_delay": DEFAULT_INITIAL_REPEAT_DELAY,
    "repeat_interval": DEFAULT_REPEAT_INTERVAL,
    "wrap_navigation": False,
    "key_bindings": {},
}


@dataclass
class SettingsStore:
    values: dict[str, Any] = field(default_factory=dict)


settings_store = SettingsStore()


def load_settings() -> None:
    settings_store.values = dict(DEFAULT_SETTINGS)
    if not SETTINGS_PATH.exists():
        return
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return
    if isinstance(data, dict):
        settings_store.values.update(data)


def get_setting(key: str, default: Any | None = None) -> Any:
    return settings_store.values.get(key, default)


def get_bool(key: str, default: bool = False) -> bool:
    return bool(get_setting(key, default))


def get_float(key: str, default: float) -> float:
    try:
        value = float(get_setting(key, default))
    except (TypeError, ValueError):
        return default
    return value if value >= 0 else default


def build_input_config() -> InputConfig:
    """Build the dispatcher configuration from the loaded settings.

    Raises InvalidKeyBindingError when ``key_bindings`` names an unknown
    key modifier or action.
    """
    overrides = get_setting("key_bindings") or {}
    if not isinstance(overrides, dict):
        overrides = {}
    return InputConfig(
        bindings=build_bindings(overrides),
        initial_repeat_delay=get_float("initial_repeat_delay", DEFAULT_INITIAL_REPEAT_DELAY),
        repeat_interval=get_float("repeat_interval", DEFAULT_REPEAT_INTERVAL),
    )


load_settings()
