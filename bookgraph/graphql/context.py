"""
GraphQL Context

Provides request context to all GraphQL resolvers including:
- REST client for the resource store
- Identity decoded from the session token (None if anonymous)

The context is created fresh for each GraphQL request and passed
to all resolvers via the `info` parameter.

Token handling:
- no token supplied -> anonymous
- expired token -> anonymous
- malformed or tampered token -> 401, the operation never runs
"""

import logging

from fastapi import HTTPException, Request, status
from strawberry.fastapi import BaseContext

from bookgraph.config import get_settings
from bookgraph.dependencies import Rest
from bookgraph.services.rest_client import RestClient
from bookgraph.services.security import Identity, InvalidToken, decode_token

logger = logging.getLogger(__name__)
settings = get_settings()


class GraphQLContext(BaseContext):
    """
    Context object available to all GraphQL resolvers.

    Attributes:
        rest: RestClient for the REST store
        identity: Identity of the authenticated user (None if anonymous)
    """

    def __init__(self, rest: RestClient, identity: Identity | None = None):
        super().__init__()
        self.rest = rest
        self.identity = identity


def get_token(request: Request) -> str | None:
    """
    Read the session token from the configured location.

    The Authorization header wins over the cookie when both are enabled.
    """
    if settings.reads_token_from_header:
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            return auth_header[7:]

    if settings.reads_token_from_cookie:
        return request.cookies.get(settings.token_cookie_name) or None

    return None


def get_identity_from_token(token: str | None) -> Identity | None:
    """
    Decode the identity carried by a token.

    Raises:
        HTTPException: 401 if a token was supplied but is invalid
    """
    if not token:
        return None

    try:
        return decode_token(token)
    except InvalidToken:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_context(request: Request, rest: Rest) -> GraphQLContext:
    """
    Create GraphQL context for each request.

    Called by Strawberry for every GraphQL request. The REST client comes
    from the get_rest_client dependency.
    """
    identity = get_identity_from_token(get_token(request))
    return GraphQLContext(rest=rest, identity=identity)
