"""Chat completion endpoint family."""

from __future__ import annotations

from typing import Mapping

from chatgate.chat.builders import ChatCompletionMessageBuilder, CreateChatRequestBuilder
from chatgate.chat.types import ChatResponse, CreateChatRequest, Role
from chatgate.client import Client
from chatgate.errors import InvalidArgumentError
from chatgate.prompt import PromptTemplate

CHAT_COMPLETIONS_ROUTE = "/chat/completions"


class Chat:
    def __init__(self, client: Client) -> None:
        self._client = client

    async def create(self, request: CreateChatRequest) -> ChatResponse:
        return await self._client.post(CHAT_COMPLETIONS_ROUTE, request, ChatResponse)

    async def create_with_template(
        self,
        template: PromptTemplate,
        values: Mapping[str, str],
        model: str,
    ) -> ChatResponse:
        """Render ``template`` into a single user message and complete it."""

        request = build_template_request(template, values, model)
        return await self.create(request)


def build_template_request(
    template: PromptTemplate,
    values: Mapping[str, str],
    model: str,
) -> CreateChatRequest:
    prompt = template.generate_prompt(values)
    try:
        message = ChatCompletionMessageBuilder().role(Role.USER).content(prompt).build()
        return CreateChatRequestBuilder().model(model).message(message).build()
    except InvalidArgumentError as exc:
        raise InvalidArgumentError(f"Failed to build CreateChatRequest: {exc}") from exc
