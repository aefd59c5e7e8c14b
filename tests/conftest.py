from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from chatgate.chat import ChatCompletionMessage, Role
from chatgate.client import Client
from tests.utils import recording_client


@pytest.fixture
def seen() -> list[httpx.Request]:
    return []


@pytest_asyncio.fixture
async def openai_client(seen: list[httpx.Request]):
    client = Client.openai("sk-test", http_client=recording_client(seen))
    yield client
    await client.aclose()


@pytest_asyncio.fixture
async def azure_client(seen: list[httpx.Request]):
    client = Client.azure("az-key", "acme", "gpt-x", "2023-05-15", http_client=recording_client(seen))
    yield client
    await client.aclose()


@pytest.fixture
def user_message() -> ChatCompletionMessage:
    return ChatCompletionMessage(role=Role.USER, content="Say hello.")
