"""Async client for hosted chat completion APIs, direct or gateway-routed."""

from chatgate.backends import AzureOpenAI, OpenAI, ReqClient
from chatgate.chat import (
    Chat,
    ChatChoice,
    ChatCompletionMessage,
    ChatCompletionMessageBuilder,
    ChatResponse,
    ChatUsage,
    CreateChatRequest,
    CreateChatRequestBuilder,
    Message,
    Role,
)
from chatgate.client import Client
from chatgate.errors import (
    ApiError,
    ApiErrorDetail,
    ApiErrorResponse,
    ChatGateError,
    ConfigurationError,
    InvalidArgumentError,
    NetworkError,
    ResponseDecodeError,
    StreamError,
)
from chatgate.prompt import Field, PromptTemplate

__all__ = [
    "ApiError",
    "ApiErrorDetail",
    "ApiErrorResponse",
    "AzureOpenAI",
    "Chat",
    "ChatChoice",
    "ChatCompletionMessage",
    "ChatCompletionMessageBuilder",
    "ChatGateError",
    "ChatResponse",
    "ChatUsage",
    "Client",
    "ConfigurationError",
    "CreateChatRequest",
    "CreateChatRequestBuilder",
    "Field",
    "InvalidArgumentError",
    "Message",
    "NetworkError",
    "OpenAI",
    "PromptTemplate",
    "ReqClient",
    "ResponseDecodeError",
    "Role",
    "StreamError",
]
