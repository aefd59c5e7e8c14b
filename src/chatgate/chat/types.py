"""Request and response shapes for the chat completion endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Sequence, Union

from chatgate.schema import (
    SchemaError,
    optional_str,
    require_int,
    require_list,
    require_object,
    require_str,
)

Stop = Union[str, Sequence[str]]


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ChatCompletionMessage:
    role: Role
    content: str
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"role": self.role.value, "content": self.content}
        if self.name is not None:
            data["name"] = self.name
        return data

    @classmethod
    def from_dict(cls, payload: Any) -> "ChatCompletionMessage":
        data = require_object(payload, "message")
        raw_role = require_str(data, "role", "message")
        try:
            role = Role(raw_role)
        except ValueError as exc:
            raise SchemaError(f"message.role '{raw_role}' is not one of system, user, assistant.") from exc
        return cls(
            role=role,
            content=require_str(data, "content", "message"),
            name=optional_str(data, "name", "message"),
        )


@dataclass(frozen=True)
class Message:
    """Unvalidated transcript entry; the role is kept as the raw string."""

    role: str
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class CreateChatRequest:
    model: str
    messages: tuple[ChatCompletionMessage, ...]
    temperature: float | None = None
    top_p: float | None = None
    n: int | None = None
    stream: bool | None = None
    stop: Stop | None = None
    max_tokens: int | None = None
    presence_penalty: float | None = None
    frequency_penalty: float | None = None
    logit_bias: Mapping[str, Any] | None = None
    user: str | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "model": self.model,
            "messages": [message.to_dict() for message in self.messages],
        }

        def add_optional(key: str, value: Any) -> None:
            if value is not None:
                body[key] = value

        add_optional("temperature", self.temperature)
        add_optional("top_p", self.top_p)
        add_optional("n", self.n)
        add_optional("stream", self.stream)
        add_optional("stop", list(self.stop) if isinstance(self.stop, (list, tuple)) else self.stop)
        add_optional("max_tokens", self.max_tokens)
        add_optional("presence_penalty", self.presence_penalty)
        add_optional("frequency_penalty", self.frequency_penalty)
        add_optional("logit_bias", dict(self.logit_bias) if self.logit_bias is not None else None)
        add_optional("user", self.user)
        return body


@dataclass(frozen=True)
class ChatUsage:
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int

    @classmethod
    def from_dict(cls, payload: Any) -> "ChatUsage":
        data = require_object(payload, "usage")
        return cls(
            prompt_tokens=require_int(data, "prompt_tokens", "usage"),
            completion_tokens=require_int(data, "completion_tokens", "usage"),
            total_tokens=require_int(data, "total_tokens", "usage"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }


@dataclass(frozen=True)
class ChatChoice:
    message: ChatCompletionMessage
    finish_reason: str
    index: int

    @classmethod
    def from_dict(cls, payload: Any) -> "ChatChoice":
        data = require_object(payload, "choice")
        if "message" not in data:
            raise SchemaError("choice is missing 'message'.")
        return cls(
            message=ChatCompletionMessage.from_dict(data["message"]),
            finish_reason=require_str(data, "finish_reason", "choice"),
            index=require_int(data, "index", "choice"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message.to_dict(),
            "finish_reason": self.finish_reason,
            "index": self.index,
        }


@dataclass(frozen=True)
class ChatResponse:
    id: str
    object: str
    created: int
    choices: tuple[ChatChoice, ...]
    usage: ChatUsage

    @classmethod
    def from_dict(cls, payload: Any) -> "ChatResponse":
        data = require_object(payload, "response")
        if "usage" not in data:
            raise SchemaError("response is missing 'usage'.")
        return cls(
            id=require_str(data, "id", "response"),
            object=require_str(data, "object", "response"),
            created=require_int(data, "created", "response"),
            choices=tuple(ChatChoice.from_dict(item) for item in require_list(data, "choices", "response")),
            usage=ChatUsage.from_dict(data["usage"]),
        )

    @property
    def text(self) -> str:
        """Content of the first choice, or an empty string when there are none."""

        if not self.choices:
            return ""
        return self.choices[0].message.content

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "object": self.object,
            "created": self.created,
            "choices": [choice.to_dict() for choice in self.choices],
            "usage": self.usage.to_dict(),
        }
