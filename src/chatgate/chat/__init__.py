"""Chat completion types, builders and endpoint."""

from chatgate.chat.api import CHAT_COMPLETIONS_ROUTE, Chat, build_template_request
from chatgate.chat.builders import ChatCompletionMessageBuilder, CreateChatRequestBuilder
from chatgate.chat.types import (
    ChatChoice,
    ChatCompletionMessage,
    ChatResponse,
    ChatUsage,
    CreateChatRequest,
    Message,
    Role,
    Stop,
)

__all__ = [
    "CHAT_COMPLETIONS_ROUTE",
    "Chat",
    "ChatChoice",
    "ChatCompletionMessage",
    "ChatCompletionMessageBuilder",
    "ChatResponse",
    "ChatUsage",
    "CreateChatRequest",
    "CreateChatRequestBuilder",
    "Message",
    "Role",
    "Stop",
    "build_template_request",
]
