"""Logging helpers for chatgate."""

from __future__ import annotations

import logging
from typing import Final

DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_LEVELS: Final[dict[str, int]] = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

logging.getLogger("chatgate").addHandler(logging.NullHandler())


def configure_logging(level: str = "WARNING", fmt: str | None = None) -> None:
    """Configure process-wide logging for CLI use.

    Library code never calls this; embedding applications own their handlers.

    Args:
        level: Logging level name (e.g., "INFO", "DEBUG"). Unknown names fall back to WARNING.
        fmt: Optional logging format string.
    """

    logging.basicConfig(
        level=_normalize_level(level),
        format=fmt or DEFAULT_LOG_FORMAT,
    )


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the ``chatgate`` namespace."""

    if name == "chatgate" or name.startswith("chatgate."):
        return logging.getLogger(name)
    return logging.getLogger(f"chatgate.{name}")


def _normalize_level(level: str) -> int:
    normalized = level.strip().upper()
    return _LEVELS.get(normalized, logging.WARNING)
