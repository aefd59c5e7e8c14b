"""Error taxonomy and API error payload types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from chatgate.schema import SchemaError, require_object, require_str


@dataclass(frozen=True)
class ApiErrorDetail:
    message: str
    type: str
    # Upstream leaves these unconstrained: strings, ints or null all occur.
    param: Any = None
    code: Any = None

    @classmethod
    def from_dict(cls, payload: Any) -> "ApiErrorDetail":
        data = require_object(payload, "error")
        return cls(
            message=require_str(data, "message", "error"),
            type=require_str(data, "type", "error"),
            param=data.get("param"),
            code=data.get("code"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "type": self.type,
            "param": self.param,
            "code": self.code,
        }


@dataclass(frozen=True)
class ApiErrorResponse:
    error: ApiErrorDetail

    @classmethod
    def from_dict(cls, payload: Any) -> "ApiErrorResponse":
        data = require_object(payload, "response")
        if "error" not in data:
            raise SchemaError("response is missing 'error'.")
        return cls(error=ApiErrorDetail.from_dict(data["error"]))


class ChatGateError(Exception):
    """Base class for every error raised by chatgate."""


class NetworkError(ChatGateError):
    """Connection, TLS, timeout or read failure below the HTTP layer."""


@dataclass(eq=False)
class ApiError(ChatGateError):
    """The service answered with a non-success status and a decodable error body."""

    status_code: int
    error: ApiErrorDetail

    def __str__(self) -> str:
        return f"ApiError(status={self.status_code}, type={self.error.type}): {self.error.message}"


@dataclass(eq=False)
class ResponseDecodeError(ChatGateError):
    """A response body did not match the schema selected by its status code."""

    status_code: int
    body: bytes
    reason: str

    def __str__(self) -> str:
        return f"failed to deserialize api response (status={self.status_code}): {self.reason}"


class InvalidArgumentError(ChatGateError):
    """A builder was finalized with values that violate the target shape."""


class StreamError(ChatGateError):
    """Reserved for incremental response failures."""


class ConfigurationError(ChatGateError):
    """Client settings are incomplete for the selected provider."""
