"""Custom exceptions for focus-narrator.

Navigation misses (empty menu, no focus target, unknown overlay, unmapped
key) are never exceptions; they degrade to silent no-ops. Exceptions are
reserved for configuration mistakes that a host should fix at startup.

Exception Hierarchy:
    NarratorError (base)
        └── ConfigError
            └── InvalidKeyBindingError

Usage:
    from focus_narrator.exceptions import InvalidKeyBindingError

    if action_name not in Action.__members__:
        raise InvalidKeyBindingError(binding, f"unknown action {action_name!r}")
"""


class NarratorError(Exception):
    """Base exception for all focus-narrator errors."""


class ConfigError(NarratorError):
    """Configuration could not be turned into a usable setup."""


class InvalidKeyBindingError(ConfigError):
    """A key binding string or its target action is malformed."""

    def __init__(self, binding: str, reason: str = ""):
        self.binding = binding
        self.reason = reason
        msg = f"Invalid key binding: {binding!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
