from __future__ import annotations

import copy
from typing import Any, Callable

import httpx

SUCCESS_BODY: dict[str, Any] = {
    "id": "chatcmpl-123",
    "object": "chat.completion",
    "created": 1677652288,
    "choices": [
        {
            "index": 0,
            "message": {"role": "assistant", "content": "Hello there."},
            "finish_reason": "stop",
        }
    ],
    "usage": {"prompt_tokens": 9, "completion_tokens": 3, "total_tokens": 12},
}

RATE_LIMIT_BODY: dict[str, Any] = {
    "error": {
        "message": "Rate limit reached for requests",
        "type": "requests",
        "param": None,
        "code": "rate_limit_exceeded",
    }
}


def success_body() -> dict[str, Any]:
    return copy.deepcopy(SUCCESS_BODY)


def recording_client(
    seen: list[httpx.Request],
    *,
    status: int = 200,
    json_body: Any = None,
    content: bytes | None = None,
) -> httpx.AsyncClient:
    """AsyncClient whose transport records each request and replies with a fixed response."""

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if content is not None:
            return httpx.Response(status, content=content)
        return httpx.Response(status, json=success_body() if json_body is None else json_body)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def raising_client(exc_factory: Callable[[httpx.Request], Exception]) -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc_factory(request)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))
