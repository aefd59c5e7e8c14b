"""Utility helpers package."""

from chatgate.util.logging import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
