"""Strict field accessors for decoding JSON payloads into typed records."""

from __future__ import annotations

from typing import Any


class SchemaError(ValueError):
    """Raised when a JSON payload does not match the expected shape."""


def require_object(payload: Any, where: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise SchemaError(f"{where} must be a JSON object, got {type(payload).__name__}.")
    return payload


def require_str(payload: dict[str, Any], key: str, where: str) -> str:
    value = _require(payload, key, where)
    if not isinstance(value, str):
        raise SchemaError(f"{where}.{key} must be a string.")
    return value


def optional_str(payload: dict[str, Any], key: str, where: str) -> str | None:
    value = payload.get(key)
    if value is not None and not isinstance(value, str):
        raise SchemaError(f"{where}.{key} must be a string when present.")
    return value


def require_int(payload: dict[str, Any], key: str, where: str) -> int:
    value = _require(payload, key, where)
    # bool is an int subclass; JSON true/false is never a count.
    if isinstance(value, bool) or not isinstance(value, int):
        raise SchemaError(f"{where}.{key} must be an integer.")
    return value


def require_list(payload: dict[str, Any], key: str, where: str) -> list[Any]:
    value = _require(payload, key, where)
    if not isinstance(value, list):
        raise SchemaError(f"{where}.{key} must be an array.")
    return value


def _require(payload: dict[str, Any], key: str, where: str) -> Any:
    if key not in payload:
        raise SchemaError(f"{where} is missing '{key}'.")
    return payload[key]
