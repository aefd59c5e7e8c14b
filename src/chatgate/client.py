"""Single call surface over the supported backend topologies."""

from __future__ import annotations

from typing import Any, Mapping, TypeVar, Union

import httpx

from chatgate.backends import AzureOpenAI, OpenAI
from chatgate.transport import SupportsToDict

T = TypeVar("T")

Backend = Union[OpenAI, AzureOpenAI]


class Client:
    """Forward every capability call to whichever backend is held.

    The set of backends is closed: adding a topology means adding one class to
    ``Backend`` and one entry to the constructor check.
    """

    def __init__(self, backend: Backend) -> None:
        if not isinstance(backend, (OpenAI, AzureOpenAI)):
            raise TypeError(f"Unsupported backend: {type(backend).__name__}")
        self._inner = backend

    @classmethod
    def openai(
        cls,
        api_key: str,
        org_id: str | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout_s: float = 60.0,
    ) -> "Client":
        return cls(OpenAI(api_key, org_id, http_client=http_client, timeout_s=timeout_s))

    @classmethod
    def azure(
        cls,
        api_key: str,
        resource_name: str,
        deployment_id: str,
        api_version: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout_s: float = 60.0,
    ) -> "Client":
        return cls(
            AzureOpenAI(
                api_key,
                resource_name,
                deployment_id,
                api_version,
                http_client=http_client,
                timeout_s=timeout_s,
            )
        )

    @property
    def backend(self) -> Backend:
        return self._inner

    def headers(self) -> dict[str, str]:
        return self._inner.headers()

    def api_key(self) -> str:
        return self._inner.api_key()

    def api_base(self) -> str:
        return self._inner.api_base()

    async def get(self, route: str, query: Mapping[str, Any] | None, response_type: type[T]) -> T:
        return await self._inner.get(route, query, response_type)

    async def post(
        self,
        route: str,
        body: Mapping[str, Any] | SupportsToDict,
        response_type: type[T],
    ) -> T:
        return await self._inner.post(route, body, response_type)

    async def aclose(self) -> None:
        await self._inner.aclose()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
