"""
GraphQL Permissions

Declarative authorization policy evaluated before a resolver calls into the
mediation layer.

POLICY maps an operation name to the rules it requires. Resolvers call
authorize() first; the first failing rule raises Forbidden and the
mediation operation is never invoked, so an unauthorized call has no side
effects. Operations missing from the table are public.

Rules are async callables receiving the caller's identity, the operation
arguments and the REST client (ownership checks may need to read the store).
"""

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from bookgraph.errors import Forbidden
from bookgraph.services.rest_client import RestClient
from bookgraph.services.reviews import get_review
from bookgraph.services.security import Identity

logger = logging.getLogger(__name__)

Rule = Callable[[Identity | None, Mapping[str, Any], RestClient], Awaitable[bool]]


def _same_user(identity: Identity | None, user_id: Any) -> bool:
    return identity is not None and str(identity.user_id) == str(user_id)


async def is_authenticated(identity, args, rest) -> bool:
    return identity is not None


async def is_reviewer(identity, args, rest) -> bool:
    """The review is submitted in the caller's own name."""
    return _same_user(identity, args.get("reviewer_id"))


async def owns_review(identity, args, rest) -> bool:
    """
    The caller wrote the review being changed.

    A review that does not exist passes, so the store reports NotFound.
    """
    review = await get_review(rest, args["review_id"])
    if review is None:
        return True
    return _same_user(identity, review.get("userId"))


async def owns_library(identity, args, rest) -> bool:
    """The library being changed belongs to the caller."""
    return _same_user(identity, args.get("user_id"))


async def is_self(identity, args, rest) -> bool:
    """The field belongs to the caller's own user record."""
    return _same_user(identity, args.get("user_id"))


POLICY: dict[str, tuple[Rule, ...]] = {
    "createAuthor": (is_authenticated,),
    "createBook": (is_authenticated,),
    "createReview": (is_authenticated, is_reviewer),
    "updateReview": (is_authenticated, owns_review),
    "deleteReview": (is_authenticated, owns_review),
    "addBooksToLibrary": (is_authenticated, owns_library),
    "removeBooksFromLibrary": (is_authenticated, owns_library),
    "User.email": (is_authenticated, is_self),
}


async def authorize(
    operation: str,
    identity: Identity | None,
    args: Mapping[str, Any],
    rest: RestClient,
) -> None:
    """
    Enforce the policy for an operation.

    Raises:
        Forbidden: If any rule for the operation fails
    """
    for rule in POLICY.get(operation, ()):
        if not await rule(identity, args, rest):
            who = f"user {identity.user_id}" if identity else "anonymous caller"
            logger.info(f"Denied {operation} for {who} ({rule.__name__})")
            raise Forbidden("Not authorised!")
