"""Request assembly shared by every backend."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Protocol, TypeVar

import httpx

from chatgate.errors import NetworkError
from chatgate.resolver import resolve_response
from chatgate.util.logging import get_logger

T = TypeVar("T")

RequestCustomizer = Callable[[dict[str, Any]], dict[str, Any]]

_logger = get_logger(__name__)


class SupportsToDict(Protocol):
    def to_dict(self) -> dict[str, Any]:
        ...


@dataclass(frozen=True)
class PendingExchange:
    """A fully built request bound to the client that will send it."""

    client: httpx.AsyncClient
    request: httpx.Request

    async def send(self) -> httpx.Response:
        _logger.debug("%s %s", self.request.method, self.request.url)
        return await self.client.send(self.request)


class ClientBase:
    def __init__(
        self,
        api_key: str,
        base_url: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout_s: float = 60.0,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._client = http_client or httpx.AsyncClient(timeout=timeout_s)

    def headers(self) -> dict[str, str]:
        return {}

    def api_key(self) -> str:
        return self._api_key

    def api_base(self) -> str:
        return self._base_url

    def request(
        self,
        method: str,
        route: str,
        customize: RequestCustomizer,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> PendingExchange:
        merged = dict(self.headers())
        if headers:
            merged.update(headers)
        merged["Authorization"] = f"Bearer {self._api_key}"
        options: dict[str, Any] = {
            "method": method,
            "url": f"{self._base_url}{route}",
            "headers": merged,
        }
        try:
            options = customize(options)
            request = self._client.build_request(**options)
        except (httpx.InvalidURL, UnicodeEncodeError) as exc:
            # Malformed URLs and non-ASCII header values surface at call time like any other send failure.
            _logger.warning("Could not build %s %s: %s", method, route, exc)
            raise NetworkError(f"http error: {exc}") from exc
        return PendingExchange(client=self._client, request=request)

    async def get(
        self,
        route: str,
        query: Mapping[str, Any] | None,
        response_type: type[T],
        *,
        headers: Mapping[str, str] | None = None,
    ) -> T:
        def attach_query(options: dict[str, Any]) -> dict[str, Any]:
            # Merge into the URL; a ``params`` argument would replace a query already in the route.
            if query:
                options["url"] = httpx.URL(options["url"]).copy_merge_params(dict(query))
            return options

        exchange = self.request("GET", route, attach_query, headers=headers)
        return await resolve_response(exchange, response_type)

    async def post(
        self,
        route: str,
        body: Mapping[str, Any] | SupportsToDict,
        response_type: type[T],
        *,
        headers: Mapping[str, str] | None = None,
    ) -> T:
        payload = to_payload(body)

        def attach_json(options: dict[str, Any]) -> dict[str, Any]:
            options["json"] = payload
            return options

        exchange = self.request("POST", route, attach_json, headers=headers)
        return await resolve_response(exchange, response_type)

    async def aclose(self) -> None:
        await self._client.aclose()


def to_payload(body: Mapping[str, Any] | SupportsToDict) -> dict[str, Any]:
    if hasattr(body, "to_dict"):
        return body.to_dict()
    return dict(body)
