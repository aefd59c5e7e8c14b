from __future__ import annotations

import asyncio

import httpx
import pytest

from chatgate.backends import AzureOpenAI, OpenAI
from chatgate.chat import ChatResponse
from chatgate.client import Client
from chatgate.transport import ClientBase


@pytest.mark.asyncio
async def test_wrapper_forwards_configuration_calls() -> None:
    async with Client.openai("sk-test", "org-1", http_client=httpx.AsyncClient()) as direct:
        assert isinstance(direct.backend, OpenAI)
        assert direct.api_key() == "sk-test"
        assert direct.api_base() == "https://api.openai.com/v1"
        assert direct.headers() == {"OpenAI-Organization": "org-1"}

    async with Client.azure("az-key", "acme", "gpt-x", "2023-05-15", http_client=httpx.AsyncClient()) as gateway:
        assert isinstance(gateway.backend, AzureOpenAI)
        assert gateway.api_key() == "az-key"
        assert gateway.api_base() == "https://acme.openai.azure.com"
        assert gateway.headers() == {}


@pytest.mark.asyncio
async def test_wrapper_rejects_backends_outside_the_closed_set() -> None:
    base = ClientBase("key", "https://example.test")
    with pytest.raises(TypeError):
        Client(base)  # type: ignore[arg-type]
    await base.aclose()


@pytest.mark.asyncio
async def test_same_call_site_works_for_both_topologies(openai_client: Client, azure_client: Client, seen) -> None:
    for client in (openai_client, azure_client):
        response = await client.post("/chat/completions", {"model": "gpt-4"}, ChatResponse)
        assert response.id == "chatcmpl-123"
    assert [request.url.host for request in seen] == ["api.openai.com", "acme.openai.azure.com"]


@pytest.mark.asyncio
async def test_concurrent_calls_share_one_client(openai_client: Client, seen) -> None:
    results = await asyncio.gather(
        *(openai_client.post("/chat/completions", {"model": f"m{i}"}, ChatResponse) for i in range(5))
    )
    assert len(results) == 5
    assert len(seen) == 5


@pytest.mark.asyncio
async def test_cancelling_one_call_leaves_others_running() -> None:
    arrived = asyncio.Event()
    release = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        if request.url.params.get("slow") == "1":
            arrived.set()
            await release.wait()
        return httpx.Response(200, json={"ok": True})

    client = Client.openai("sk-test", http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    slow = asyncio.create_task(client.get("/ping", {"slow": "1"}, dict))
    await asyncio.wait_for(arrived.wait(), timeout=5)
    slow.cancel()
    fast = await client.get("/ping", None, dict)
    assert fast == {"ok": True}
    with pytest.raises(asyncio.CancelledError):
        await slow
    assert not release.is_set()
    await client.aclose()


@pytest.mark.asyncio
async def test_async_context_manager_closes_pool() -> None:
    http_client = httpx.AsyncClient()
    async with Client.openai("sk-test", http_client=http_client):
        pass
    assert http_client.is_closed
