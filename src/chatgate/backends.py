"""Backend topologies for reaching the completion service."""

from __future__ import annotations

from typing import Any, Mapping, Protocol, TypeVar, runtime_checkable

import httpx

from chatgate.transport import ClientBase, SupportsToDict

T = TypeVar("T")

OPENAI_API_BASE = "https://api.openai.com/v1"
AZURE_API_BASE_TEMPLATE = "https://{resource_name}.openai.azure.com"
ORGANIZATION_HEADER = "OpenAI-Organization"


@runtime_checkable
class ReqClient(Protocol):
    def headers(self) -> dict[str, str]:
        """Extra headers attached to every request."""

    def api_key(self) -> str:
        ...

    def api_base(self) -> str:
        ...

    async def get(self, route: str, query: Mapping[str, Any] | None, response_type: type[T]) -> T:
        """Issue a GET for ``route`` and decode the body as ``response_type``."""

    async def post(
        self,
        route: str,
        body: Mapping[str, Any] | SupportsToDict,
        response_type: type[T],
    ) -> T:
        """Issue a POST with a JSON body and decode the reply as ``response_type``."""

    async def aclose(self) -> None:
        """Release the underlying connection pool."""


class OpenAI:
    """Direct multi-tenant endpoint."""

    def __init__(
        self,
        api_key: str,
        org_id: str | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout_s: float = 60.0,
    ) -> None:
        self._base = ClientBase(api_key, OPENAI_API_BASE, http_client=http_client, timeout_s=timeout_s)
        self._org_id = org_id

    @property
    def org_id(self) -> str | None:
        return self._org_id

    def headers(self) -> dict[str, str]:
        headers = self._base.headers()
        if self._org_id is not None:
            headers[ORGANIZATION_HEADER] = self._org_id
        return headers

    def api_key(self) -> str:
        return self._base.api_key()

    def api_base(self) -> str:
        return self._base.api_base()

    async def get(self, route: str, query: Mapping[str, Any] | None, response_type: type[T]) -> T:
        return await self._base.get(route, query, response_type, headers=self.headers())

    async def post(
        self,
        route: str,
        body: Mapping[str, Any] | SupportsToDict,
        response_type: type[T],
    ) -> T:
        return await self._base.post(route, body, response_type, headers=self.headers())

    async def aclose(self) -> None:
        await self._base.aclose()


class AzureOpenAI:
    """Gateway-routed deployment endpoint; every route is scoped to one deployment."""

    def __init__(
        self,
        api_key: str,
        resource_name: str,
        deployment_id: str,
        api_version: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout_s: float = 60.0,
    ) -> None:
        base_url = AZURE_API_BASE_TEMPLATE.format(resource_name=resource_name)
        self._base = ClientBase(api_key, base_url, http_client=http_client, timeout_s=timeout_s)
        self._resource_name = resource_name
        self._deployment_id = deployment_id
        self._api_version = api_version

    @property
    def resource_name(self) -> str:
        return self._resource_name

    @property
    def deployment_id(self) -> str:
        return self._deployment_id

    @property
    def api_version(self) -> str:
        return self._api_version

    def route_with_deployment(self, route: str) -> str:
        suffix = route.lstrip("/")
        return f"/openai/deployments/{self._deployment_id}/{suffix}?api-version={self._api_version}"

    def headers(self) -> dict[str, str]:
        return self._base.headers()

    def api_key(self) -> str:
        return self._base.api_key()

    def api_base(self) -> str:
        return self._base.api_base()

    async def get(self, route: str, query: Mapping[str, Any] | None, response_type: type[T]) -> T:
        return await self._base.get(
            self.route_with_deployment(route),
            query,
            response_type,
            headers=self.headers(),
        )

    async def post(
        self,
        route: str,
        body: Mapping[str, Any] | SupportsToDict,
        response_type: type[T],
    ) -> T:
        return await self._base.post(
            self.route_with_deployment(route),
            body,
            response_type,
            headers=self.headers(),
        )

    async def aclose(self) -> None:
        await self._base.aclose()
