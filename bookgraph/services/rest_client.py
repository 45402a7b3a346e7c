"""
REST Client Adapter

Issues HTTP calls to the REST resource store through httpx and turns every
response into a uniform result.

Each call returns its own RestResponse holding the decoded body and the
pagination headers of that response: the Link relations (parsed by httpx
into a rel -> url mapping) and X-Total-Count. Nothing is kept on the client
between calls, so sibling requests issued concurrently with asyncio.gather()
can never read each other's headers.

Failure mapping:
- 404 -> NotFound
- any other non-2xx -> UpstreamFailure (with the status code)
- transport errors and undecodable bodies -> UpstreamFailure

No retries are attempted.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from bookgraph.errors import NotFound, UpstreamFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaginationHeaders:
    """Pagination-relevant headers captured from a single response."""

    links: dict[str, str] = field(default_factory=dict)
    total_count: str | None = None


@dataclass(frozen=True)
class RestResponse:
    """Decoded body plus the pagination headers of the same response."""

    body: Any
    pagination: PaginationHeaders = field(default_factory=PaginationHeaders)


class RestClient:
    """
    Thin async wrapper around httpx.AsyncClient bound to the store's base URL.

    Usage:
        async with httpx.AsyncClient(base_url=settings.rest_api_base_url) as http:
            rest = RestClient(http)
            response = await rest.get("/books?_page=1")
            response.body, response.pagination.total_count
    """

    def __init__(self, http: httpx.AsyncClient):
        self._http = http

    async def request(
        self,
        method: str,
        path: str,
        data: dict[str, Any] | None = None,
    ) -> RestResponse:
        try:
            response = await self._http.request(method, path, json=data)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise UpstreamFailure(f"REST store unreachable: {e}") from e

        logger.debug(f"{method} {path} -> {response.status_code}")

        if response.status_code == 404:
            raise NotFound(f"{response.status_code}: Not Found")

        if response.is_error:
            logger.warning(f"{method} {path} returned {response.status_code}")
            raise UpstreamFailure(
                f"{response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
            )

        return RestResponse(
            body=self._decode(method, path, response),
            pagination=PaginationHeaders(
                links={rel: link["url"] for rel, link in response.links.items()},
                total_count=response.headers.get("X-Total-Count"),
            ),
        )

    @staticmethod
    def _decode(method: str, path: str, response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"{method} {path} returned a non-JSON body")
            raise UpstreamFailure(
                "REST store returned an invalid body",
                status_code=response.status_code,
            ) from e

    async def get(self, path: str) -> RestResponse:
        return await self.request("GET", path)

    async def post(self, path: str, data: dict[str, Any]) -> RestResponse:
        return await self.request("POST", path, data)

    async def patch(self, path: str, data: dict[str, Any]) -> RestResponse:
        return await self.request("PATCH", path, data)

    async def delete(self, path: str) -> RestResponse:
        return await self.request("DELETE", path)
