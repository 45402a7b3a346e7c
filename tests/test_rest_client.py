"""
Tests for the REST Client Adapter

Covers the failure mapping and the per-call capture of pagination headers.
Handlers are plain functions served through httpx.MockTransport.
"""

import asyncio

import httpx
import pytest

from bookgraph.errors import NotFound, UpstreamFailure
from bookgraph.services.rest_client import RestClient


def make_client(handler) -> RestClient:
    return RestClient(
        httpx.AsyncClient(base_url="http://store.test", transport=httpx.MockTransport(handler))
    )


class TestSuccessfulResponses:
    @pytest.mark.asyncio
    async def test_body_and_pagination_headers(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json=[{"id": 1}],
                headers={"X-Total-Count": "7", "Link": '<http://x?_page=2>; rel="next"'},
            )

        response = await make_client(handler).get("/books?_page=1")

        assert response.body == [{"id": 1}]
        assert response.pagination.total_count == "7"
        assert response.pagination.links == {"next": "http://x?_page=2"}

    @pytest.mark.asyncio
    async def test_missing_headers_are_none(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"id": 1})

        response = await make_client(handler).get("/books/1")

        assert response.pagination.total_count is None
        assert response.pagination.links == {}

    @pytest.mark.asyncio
    async def test_link_header_relations(self):
        link = (
            '<http://store/books?_page=1&_limit=2>; rel="first", '
            '<http://store/books?_page=1&_limit=2>; rel="prev", '
            '<http://store/books?_page=3&_limit=2>; rel="next", '
            '<http://store/books?_page=5&_limit=2>; rel="last"'
        )

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[], headers={"X-Total-Count": "9", "Link": link})

        response = await make_client(handler).get("/books?_page=2&_limit=2")

        assert response.pagination.links == {
            "first": "http://store/books?_page=1&_limit=2",
            "prev": "http://store/books?_page=1&_limit=2",
            "next": "http://store/books?_page=3&_limit=2",
            "last": "http://store/books?_page=5&_limit=2",
        }

    @pytest.mark.asyncio
    async def test_json_body_is_sent(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["body"] = request.content
            return httpx.Response(201, json={"id": 9, "name": "Neil Gaiman"})

        response = await make_client(handler).post("/authors", {"name": "Neil Gaiman"})

        assert seen["method"] == "POST"
        assert b'"name"' in seen["body"]
        assert response.body["id"] == 9

    @pytest.mark.asyncio
    async def test_empty_body_decodes_to_none(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200)

        response = await make_client(handler).delete("/reviews/1")

        assert response.body is None


class TestFailureMapping:
    @pytest.mark.asyncio
    async def test_404_is_not_found(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={})

        with pytest.raises(NotFound) as exc_info:
            await make_client(handler).get("/books/99")

        assert exc_info.value.extensions == {"code": "NOT_FOUND"}

    @pytest.mark.asyncio
    async def test_other_errors_are_upstream_failures(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, json={})

        with pytest.raises(UpstreamFailure) as exc_info:
            await make_client(handler).get("/books")

        assert exc_info.value.status_code == 503
        assert exc_info.value.extensions == {"code": "UPSTREAM_FAILURE", "statusCode": 503}

    @pytest.mark.asyncio
    async def test_transport_error_is_upstream_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UpstreamFailure) as exc_info:
            await make_client(handler).get("/books")

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_invalid_json_is_upstream_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>oops</html>")

        with pytest.raises(UpstreamFailure):
            await make_client(handler).get("/books")


class TestConcurrentCalls:
    @pytest.mark.asyncio
    async def test_sibling_requests_keep_their_own_headers(self):
        """The slower response must not overwrite the faster one's headers."""

        async def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/authors":
                await asyncio.sleep(0.05)
                return httpx.Response(200, json=[], headers={"X-Total-Count": "4"})
            return httpx.Response(200, json=[], headers={"X-Total-Count": "12"})

        rest = make_client(handler)
        authors, books = await asyncio.gather(
            rest.get("/authors?_page=1"), rest.get("/books?_page=1")
        )

        assert authors.pagination.total_count == "4"
        assert books.pagination.total_count == "12"
