"""Logging setup for the formguard CLI."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TextIO

from .config import ConfigError, LoggingConfig

FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
MAIN_LOG_NAME = "formguard.log"
DEBUG_LOG_NAME = "debug.log"
MAX_LOG_BYTES = 5_000_000
LOG_BACKUPS = 5

LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class ConsoleFormatter(logging.Formatter):
    """Single-letter level marker, optionally coloured, before each message.

    With ``show_names`` the emitting logger name is included.
    """

    MARKERS: dict[int, tuple[str, str]] = {
        logging.DEBUG: ("D", "\x1b[36m"),
        logging.INFO: ("I", "\x1b[32m"),
        logging.WARNING: ("!", "\x1b[33m"),
        logging.ERROR: ("X", "\x1b[31m"),
        logging.CRITICAL: ("X", "\x1b[35m"),
    }
    RESET = "\x1b[0m"

    def __init__(self, use_color: bool, *, show_names: bool = False) -> None:
        super().__init__("[%(name)s] %(message)s" if show_names else "%(message)s")
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        marker, color = self.MARKERS.get(record.levelno, ("?", "\x1b[37m"))
        if self.use_color:
            marker = f"{color}{marker}{self.RESET}"
        return f"{marker} {super().format(record)}"


def configure_logging(logging_config: LoggingConfig) -> None:
    """Route formguard logs to stderr and, when configured, to rotating files.

    stdout is left alone so ``score --json`` output stays parseable.
    """

    level = level_from_string(logging_config.level)
    stream = sys.stderr
    console = logging.StreamHandler(stream)
    console.setFormatter(
        ConsoleFormatter(_is_tty(stream), show_names=level <= logging.DEBUG)
    )
    handlers: list[logging.Handler] = [console]

    log_dir = logging_config.log_dir
    if log_dir is not None:
        log_dir = log_dir.expanduser()
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(_rotating_handler(log_dir / MAIN_LOG_NAME, logging.INFO))
        if logging_config.debug_file:
            handlers.append(_rotating_handler(log_dir / DEBUG_LOG_NAME, logging.DEBUG))

    logging.basicConfig(level=level, handlers=handlers, force=True)


def level_from_string(level: str) -> int:
    try:
        return LEVELS[level.strip().upper()]
    except KeyError as exc:
        raise ConfigError(f"Unknown log level: {level}") from exc


def _rotating_handler(path: Path, level: int) -> logging.Handler:
    handler = RotatingFileHandler(path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def _is_tty(stream: TextIO) -> bool:
    return bool(getattr(stream, "isatty", lambda: False)())


__all__ = ["ConsoleFormatter", "configure_logging", "level_from_string"]
