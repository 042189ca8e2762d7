from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from loguru import Logger

from loguru import logger

DEFAULT_LOG_DIR = Path(
    os.environ.get(
        "FOCUS_NARRATOR_LOG_DIR",
        Path.home() / ".local" / "state" / "focus-narrator" / "logs",
    )
)


def _should_log_key(record) -> bool:
    """Filter per-key input logs - only show in TRACE mode."""
    tags = record["extra"].get("tags", [])

    # Key presses and repeats fire many times per second
    if "key" in tags:
        return record["level"].no <= logger.level("TRACE").no

    return True


def _should_log_hook(record) -> bool:
    """Filter routine hook lookups, keeping hook failures visible."""
    message = record["message"].lower()
    tags = record["extra"].get("tags", [])

    if record["level"].no >= logger.level("WARNING").no:
        return True

    if "focus" in tags and message.startswith("hook "):
        return record["level"].no <= logger.level("TRACE").no

    return True


def _combined_filter(record) -> bool:
    """Combined filter for all log suppression rules."""
    return _should_log_key(record) and _should_log_hook(record)


_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[source]: <10} | {message}"
_TAGGED_FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[source]: <10} | {extra[tags]} | {message}"
)
_TRACE_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {extra[source]: <10} | {message}"
_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[source]: <10}</cyan> | "
    "{message}"
)


def _add_file_sink(
    path: Path,
    level: str,
    *,
    rotation: str,
    retention: str,
    format: str = _FILE_FORMAT,
    verbose_tracebacks: bool = False,
    filter=None,
) -> None:
    logger.add(
        path,
        level=level,
        rotation=rotation,
        retention=retention,
        compression="zip",
        backtrace=verbose_tracebacks,
        diagnose=verbose_tracebacks,
        filter=filter,
        format=format,
    )


def setup_logging(
    *,
    debug: bool = False,
    trace: bool = False,
    log_dir: Path | None = None,
) -> Logger:
    """
    Install the console sink and one log file per verbosity tier.

    The console and operations.log always carry screen and overlay
    transitions plus any host hook or speech backend that failed.
    ``debug`` adds debug.log with menu rebuilds, dropped key events and
    dispatch decisions; key traffic stays out of it. ``trace`` adds
    trace.log with every key down, key up, repeat tick and hook call.

    Args:
        debug: Enable DEBUG level logging
        trace: Enable TRACE level logging (very verbose)
        log_dir: Custom log directory (defaults to ~/.local/state/focus-narrator/logs)
    """
    logger.remove()
    logger.configure(extra={"tags": [], "source": "APP"})

    console_level = "TRACE" if trace else "DEBUG" if debug else "INFO"
    logger.add(
        sys.stderr,
        level=console_level,
        backtrace=False,
        diagnose=False,
        filter=_combined_filter,
        colorize=True,
        format=_CONSOLE_FORMAT,
    )

    log_dir = log_dir or DEFAULT_LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    _add_file_sink(log_dir / "operations.log", "INFO", rotation="5 MB", retention="7 days")
    if debug or trace:
        _add_file_sink(
            log_dir / "debug.log",
            "DEBUG",
            rotation="10 MB",
            retention="3 days",
            format=_TAGGED_FILE_FORMAT,
            verbose_tracebacks=True,
            filter=_should_log_key,
        )
    if trace:
        _add_file_sink(
            log_dir / "trace.log",
            "TRACE",
            rotation="50 MB",
            retention="1 day",
            format=_TRACE_FILE_FORMAT,
        )

    return logger


def get_logger(
    *,
    tags: Iterable[str] | None = None,
    source: str | None = None,
) -> Logger:
    """
    Get a logger with bound context.

    Args:
        tags: Tags for filtering (e.g., ["input", "key"])
        source: Source component (e.g., "menu", "focus", "input")

    Returns:
        Logger with bound context
    """
    extras: dict[str, object] = {}
    if tags is not None:
        extras["tags"] = list(tags)
    if source is not None:
        extras["source"] = source
    return logger.bind(**extras)


class LoggerFactory:
    """
    Factory for creating domain-specific loggers with automatic context.

    Each factory method returns a logger pre-configured with appropriate
    source and tags for the component.
    """

    @staticmethod
    def for_menu() -> Logger:
        """Logger for navigable menus and option callbacks."""
        return logger.bind(source="menu", tags=["ui", "menu"])

    @staticmethod
    def for_focus() -> Logger:
        """Logger for screen and overlay transitions."""
        return logger.bind(source="focus", tags=["ui", "focus"])

    @staticmethod
    def for_input() -> Logger:
        """Logger for dispatch decisions."""
        return logger.bind(source="input", tags=["input"])

    @staticmethod
    def for_keys() -> Logger:
        """Logger for individual key events and repeats."""
        return logger.bind(source="input", tags=["input", "key"])

    @staticmethod
    def for_speech() -> Logger:
        """Logger for the announcement boundary."""
        return logger.bind(source="speech", tags=["speech"])

    @staticmethod
    def for_system() -> Logger:
        """Logger for system operations (startup, shutdown, config)."""
        return logger.bind(source="system", tags=["system"])
