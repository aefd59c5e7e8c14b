"""Turn a pending HTTP exchange into a typed value or a typed error."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, TypeVar

import httpx

from chatgate.errors import ApiError, ApiErrorResponse, NetworkError, ResponseDecodeError
from chatgate.util.logging import get_logger

if TYPE_CHECKING:
    from chatgate.transport import PendingExchange

T = TypeVar("T")

_logger = get_logger(__name__)


async def resolve_response(exchange: PendingExchange, response_type: type[T]) -> T:
    """Await ``exchange`` and decode its body by status code.

    A non-2xx status is decoded as the API error schema and raised as
    :class:`ApiError`. A 2xx status is decoded as ``response_type``, which is
    either ``dict`` or a class exposing ``from_dict``. Any body that fails its
    schema raises :class:`ResponseDecodeError`; transport faults raise
    :class:`NetworkError`.
    """

    try:
        response = await exchange.send()
        try:
            body = await response.aread()
        finally:
            await response.aclose()
    except httpx.HTTPError as exc:
        _logger.warning("Network failure for %s: %s", exchange.request.url, exc)
        raise NetworkError(f"http error: {exc}") from exc

    status = response.status_code
    _logger.debug("Received status %s from %s", status, exchange.request.url)

    if not response.is_success:
        api_error = _decode(body, ApiErrorResponse, status)
        _logger.warning("API error %s (%s): %s", status, api_error.error.type, api_error.error.message)
        raise ApiError(status_code=status, error=api_error.error)

    return _decode(body, response_type, status)


def _decode(body: bytes, response_type: type[T], status: int) -> T:
    try:
        payload: Any = json.loads(body)
        if response_type is dict:
            if not isinstance(payload, dict):
                raise ValueError("expected a JSON object")
            return payload  # type: ignore[return-value]
        return response_type.from_dict(payload)  # type: ignore[attr-defined]
    except (ValueError, KeyError, TypeError) as exc:
        _logger.warning("Could not decode status %s body as %s: %s", status, response_type.__name__, exc)
        raise ResponseDecodeError(status_code=status, body=body, reason=str(exc)) from exc
