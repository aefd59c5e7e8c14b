"""Status helpers for the chatgate CLI."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from chatgate.ui.console import get_error_console


@contextmanager
def status_spinner(message: str) -> Iterator[object]:
    # Spinner goes to stderr so piped stdout carries only the reply.
    console = get_error_console()
    with console.status(message, spinner="dots", spinner_style="accent") as status:
        yield status
