"""Load ``KEY=value`` pairs from a .env file into the process environment."""

from __future__ import annotations

import os
from pathlib import Path
from typing import MutableMapping

from chatgate.util.logging import get_logger

_logger = get_logger(__name__)


def load_dotenv(path: str | Path = ".env", *, environ: MutableMapping[str, str] | None = None) -> list[str]:
    """Populate unset variables from ``path`` and return the names that were set.

    Existing variables always win. Blank lines, comments and ``export`` prefixes
    are tolerated; a missing or unreadable file loads nothing.
    """

    target = os.environ if environ is None else environ
    env_path = Path(path)
    if not env_path.is_file():
        return []
    try:
        text = env_path.read_text(encoding="utf-8")
    except OSError as exc:
        _logger.warning("Could not read %s: %s", env_path, exc)
        return []

    loaded: list[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        if stripped.startswith("export "):
            stripped = stripped[len("export ") :].lstrip()
        key, value = (part.strip() for part in stripped.split("=", 1))
        if not key:
            continue
        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]
        if value == "" or key in target:
            continue
        target[key] = value
        loaded.append(key)
    _logger.debug("Loaded %d variables from %s", len(loaded), env_path)
    return loaded
