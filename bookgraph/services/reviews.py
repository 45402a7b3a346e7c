"""
Reviews Service

Mediation operations for book reviews.

Invariant: a user may review a given book at most once. The store does not
enforce this, so create_review checks for an existing (bookId, userId) row
right before inserting. The check and the insert are two separate calls,
so two concurrent requests can still both pass the check.
"""

import logging
from typing import Any

from bookgraph.errors import Forbidden
from bookgraph.services.catalog import get_record_or_none, list_page
from bookgraph.services.pagination import Page
from bookgraph.services.query import build_query_string
from bookgraph.services.rest_client import RestClient
from bookgraph.utils import parse_id, utc_timestamp

logger = logging.getLogger(__name__)


async def get_review(rest: RestClient, review_id: int | str) -> dict[str, Any] | None:
    """Get a single review by ID (None if the store has no such review)."""
    return await get_record_or_none(rest, f"/reviews/{review_id}")


async def list_book_reviews(
    rest: RestClient,
    book_id: int | str,
    limit: int | None = None,
    page: int | None = None,
    order_by: str = "createdAt_desc",
) -> Page:
    """Get a page of reviews for a book, newest first by default."""
    return await list_page(
        rest, "/reviews", limit=limit, page=page, order_by=order_by, bookId=book_id
    )


async def list_user_reviews(
    rest: RestClient,
    user_id: int | str,
    limit: int | None = None,
    page: int | None = None,
    order_by: str = "createdAt_desc",
) -> Page:
    """Get a page of reviews written by a user, newest first by default."""
    return await list_page(
        rest, "/reviews", limit=limit, page=page, order_by=order_by, userId=user_id
    )


async def find_review(
    rest: RestClient, book_id: int | str, user_id: int | str
) -> dict[str, Any] | None:
    """Find the review a user wrote for a book, if any."""
    query_string = build_query_string({"bookId": book_id, "userId": user_id})
    response = await rest.get(f"/reviews{query_string}")
    matches = response.body or []
    return matches[0] if matches else None


async def create_review(
    rest: RestClient,
    book_id: int | str,
    reviewer_id: int | str,
    rating: int,
    text: str | None = None,
) -> dict[str, Any]:
    """
    Create a review stamped with the current time.

    Raises:
        InvalidArgument: If the book or reviewer ID is not numeric
        Forbidden: If the user already reviewed this book
    """
    book_id = parse_id(book_id)
    reviewer_id = parse_id(reviewer_id)

    if await find_review(rest, book_id, reviewer_id) is not None:
        raise Forbidden("Users can only submit one review per book")

    data: dict[str, Any] = {
        "bookId": book_id,
        "rating": rating,
        "userId": reviewer_id,
    }
    if text:
        data["text"] = text
    data["createdAt"] = utc_timestamp()

    response = await rest.post("/reviews", data)
    logger.info(f"User {reviewer_id} reviewed book {book_id}")
    return response.body


async def update_review(
    rest: RestClient,
    review_id: int | str,
    rating: int,
    text: str | None = None,
) -> dict[str, Any]:
    """
    Partially update a review.

    The rating is always sent; text only when supplied. There is no
    existence check: a missing review surfaces as NotFound from the store.
    """
    data: dict[str, Any] = {"rating": rating}
    if text:
        data["text"] = text

    response = await rest.patch(f"/reviews/{review_id}", data)
    return response.body


async def delete_review(rest: RestClient, review_id: int | str) -> int | str:
    """Delete a review and acknowledge with its ID."""
    await rest.delete(f"/reviews/{review_id}")
    logger.info(f"Deleted review {review_id}")
    return review_id
