"""Accumulate-then-validate builders for chat request values."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Mapping

from chatgate.chat.types import ChatCompletionMessage, CreateChatRequest, Role, Stop
from chatgate.errors import InvalidArgumentError

MAX_STOP_SEQUENCES = 4


class ChatCompletionMessageBuilder:
    def __init__(self) -> None:
        self._role: Role | str = Role.USER
        self._content: str | None = None
        self._name: str | None = None

    def role(self, value: Role | str) -> "ChatCompletionMessageBuilder":
        self._role = value
        return self

    def content(self, value: str) -> "ChatCompletionMessageBuilder":
        self._content = value
        return self

    def name(self, value: str) -> "ChatCompletionMessageBuilder":
        self._name = value
        return self

    def build(self) -> ChatCompletionMessage:
        try:
            role = Role(self._role)
        except ValueError as exc:
            raise InvalidArgumentError(
                f"role must be one of system, user, assistant; got {self._role!r}."
            ) from exc
        if self._content is None:
            raise InvalidArgumentError("content is required to build a ChatCompletionMessage.")
        if not isinstance(self._content, str):
            raise InvalidArgumentError("content must be a string.")
        if self._name is not None and not self._name:
            raise InvalidArgumentError("name must be non-empty when provided.")
        return ChatCompletionMessage(role=role, content=self._content, name=self._name)


class CreateChatRequestBuilder:
    """Collect request fields and produce a frozen :class:`CreateChatRequest`.

    Every setter returns the builder. Unset optional fields stay ``None`` and are
    omitted from the serialized body.
    """

    def __init__(self) -> None:
        self._model: str | None = None
        self._messages: list[ChatCompletionMessage] = []
        self._options: dict[str, Any] = {}

    def model(self, value: str) -> "CreateChatRequestBuilder":
        self._model = value
        return self

    def messages(self, value: Iterable[ChatCompletionMessage]) -> "CreateChatRequestBuilder":
        self._messages = list(value)
        return self

    def message(self, value: ChatCompletionMessage) -> "CreateChatRequestBuilder":
        self._messages.append(value)
        return self

    def temperature(self, value: float) -> "CreateChatRequestBuilder":
        return self._set("temperature", value)

    def top_p(self, value: float) -> "CreateChatRequestBuilder":
        return self._set("top_p", value)

    def n(self, value: int) -> "CreateChatRequestBuilder":
        return self._set("n", value)

    def stream(self, value: bool) -> "CreateChatRequestBuilder":
        return self._set("stream", value)

    def stop(self, value: Stop) -> "CreateChatRequestBuilder":
        return self._set("stop", value)

    def max_tokens(self, value: int) -> "CreateChatRequestBuilder":
        return self._set("max_tokens", value)

    def presence_penalty(self, value: float) -> "CreateChatRequestBuilder":
        return self._set("presence_penalty", value)

    def frequency_penalty(self, value: float) -> "CreateChatRequestBuilder":
        return self._set("frequency_penalty", value)

    def logit_bias(self, value: Mapping[str, Any]) -> "CreateChatRequestBuilder":
        return self._set("logit_bias", value)

    def user(self, value: str) -> "CreateChatRequestBuilder":
        return self._set("user", value)

    def build(self) -> CreateChatRequest:
        if not self._model:
            raise InvalidArgumentError("model is required to build a CreateChatRequest.")
        if not self._messages:
            raise InvalidArgumentError("messages must contain at least one message.")
        for index, message in enumerate(self._messages):
            if not isinstance(message, ChatCompletionMessage):
                raise InvalidArgumentError(
                    f"messages[{index}] must be a ChatCompletionMessage, got {type(message).__name__}."
                )

        options = dict(self._options)
        _check_range(options, "temperature", 0.0, 2.0)
        _check_range(options, "top_p", 0.0, 1.0)
        _check_range(options, "presence_penalty", -2.0, 2.0)
        _check_range(options, "frequency_penalty", -2.0, 2.0)
        _check_positive_int(options, "n")
        _check_positive_int(options, "max_tokens")
        _check_stop(options)
        _freeze_logit_bias(options)
        if "stream" in options and not isinstance(options["stream"], bool):
            raise InvalidArgumentError("stream must be a boolean.")

        return CreateChatRequest(model=self._model, messages=tuple(self._messages), **options)

    def _set(self, key: str, value: Any) -> "CreateChatRequestBuilder":
        self._options[key] = value
        return self


def _check_range(options: dict[str, Any], key: str, low: float, high: float) -> None:
    value = options.get(key)
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgumentError(f"{key} must be a number.")
    if not low <= value <= high:
        raise InvalidArgumentError(f"{key} must be between {low} and {high}, got {value}.")


def _check_positive_int(options: dict[str, Any], key: str) -> None:
    value = options.get(key)
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidArgumentError(f"{key} must be a positive integer, got {value!r}.")


def _check_stop(options: dict[str, Any]) -> None:
    value = options.get("stop")
    if value is None or isinstance(value, str):
        return
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise InvalidArgumentError("stop must be a string or a list of strings.")
    if len(value) > MAX_STOP_SEQUENCES:
        raise InvalidArgumentError(f"stop accepts at most {MAX_STOP_SEQUENCES} sequences.")
    options["stop"] = tuple(value)


def _freeze_logit_bias(options: dict[str, Any]) -> None:
    value = options.get("logit_bias")
    if value is None:
        return
    if not isinstance(value, Mapping) or not all(isinstance(key, str) for key in value):
        raise InvalidArgumentError("logit_bias must map token id strings to bias values.")
    # Each built request gets its own read-only copy.
    options["logit_bias"] = MappingProxyType(dict(value))
