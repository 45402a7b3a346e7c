"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers (and into
the GraphQL context getter). FastAPI's Depends() manages their lifecycle.

The REST client is created per request, mirroring a per-request database
session: it is opened before the GraphQL operation runs and closed after
the response is sent. Tests replace it through app.dependency_overrides.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

import httpx
from fastapi import Depends

from bookgraph.config import get_settings
from bookgraph.services.rest_client import RestClient

settings = get_settings()


async def get_rest_client() -> AsyncGenerator[RestClient, None]:
    """
    Provide a RestClient bound to the REST store for one request.

    Usage:
        async def handler(rest: Rest):
            response = await rest.get("/books")
    """
    async with httpx.AsyncClient(base_url=settings.rest_api_base_url) as http:
        yield RestClient(http)


Rest = Annotated[RestClient, Depends(get_rest_client)]
