"""Deterministic offline transport for demos and tests."""

from __future__ import annotations

import hashlib
import json
from typing import Any

import httpx

MOCK_CREATED = 1_700_000_000


class MockTransport(httpx.MockTransport):
    """Answer chat completion calls without touching the network.

    Replies are derived from a hash of the model and messages, so identical
    requests always get identical bodies. Setting ``error_status`` makes every
    call fail with a well-formed API error body instead.
    """

    def __init__(
        self,
        *,
        error_status: int | None = None,
        error_type: str = "mock_error",
        error_message: str = "MockTransport simulated error.",
    ) -> None:
        self.requests: list[httpx.Request] = []
        self._error_status = error_status
        self._error_type = error_type
        self._error_message = error_message
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._error_status is not None:
            return _error_response(self._error_status, self._error_type, self._error_message)
        if request.method != "POST" or not request.url.path.endswith("/chat/completions"):
            return _error_response(404, "invalid_request_error", f"Unknown route: {request.url.path}")
        try:
            body = json.loads(request.content)
        except ValueError:
            return _error_response(400, "invalid_request_error", "Request body is not valid JSON.")
        return httpx.Response(200, json=_completion_body(body))


def create_mock_http_client(**kwargs: Any) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=MockTransport(**kwargs))


def _completion_body(body: dict[str, Any]) -> dict[str, Any]:
    model = str(body.get("model", ""))
    messages = body.get("messages") or []
    digest = _stable_seed(model, messages)
    text = _mock_text(digest, model)
    choice_count = body.get("n") or 1
    usage = _mock_usage(messages, text, choice_count)
    return {
        "id": f"chatcmpl-mock-{digest.hex()[:12]}",
        "object": "chat.completion",
        "created": MOCK_CREATED,
        "model": model,
        "choices": [
            {
                "index": index,
                "message": {"role": "assistant", "content": text},
                "finish_reason": "stop",
            }
            for index in range(choice_count)
        ],
        "usage": usage,
    }


def _error_response(status: int, error_type: str, message: str) -> httpx.Response:
    return httpx.Response(
        status,
        json={"error": {"message": message, "type": error_type, "param": None, "code": None}},
    )


def _stable_seed(model: str, messages: list[Any]) -> bytes:
    hasher = hashlib.sha256()
    hasher.update(model.encode("utf-8"))
    for message in messages:
        hasher.update(json.dumps(message, sort_keys=True).encode("utf-8"))
    return hasher.digest()


def _mock_text(digest: bytes, model: str) -> str:
    label = "YES" if digest[0] % 2 == 0 else "NO"
    return f"Decision: {label}\nRationale: mock response for {model}."


def _mock_usage(messages: list[Any], text: str, choice_count: int) -> dict[str, int]:
    prompt_text = " ".join(str(message.get("content", "")) for message in messages if isinstance(message, dict))
    prompt_tokens = max(1, len(prompt_text) // 4)
    completion_tokens = max(1, len(text) // 4) * choice_count
    return {
        "prompt_tokens": prompt_tokens,
        "completion_tokens": completion_tokens,
        "total_tokens": prompt_tokens + completion_tokens,
    }
