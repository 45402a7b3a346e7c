"""
Library Service

Mediation operations for a user's personal library, the UserBook link table
between users and books.

Adding is idempotent: rows already present for (userId, bookId) are not
inserted again, so repeating a request leaves exactly one row per book.
Removing ignores books that are not in the library. Both operations return
the refreshed user record rather than the affected rows.
"""

import asyncio
import logging
from typing import Any

from bookgraph.services.auth import public_user
from bookgraph.services.catalog import list_page
from bookgraph.services.pagination import Page
from bookgraph.services.query import build_query_string
from bookgraph.services.rest_client import RestClient
from bookgraph.utils import parse_id, utc_timestamp

logger = logging.getLogger(__name__)


async def get_user_library(
    rest: RestClient,
    user_id: int | str,
    limit: int | None = None,
    page: int | None = None,
    order_by: str = "createdAt_desc",
) -> Page:
    """
    Get a page of the books in a user's library.

    Reads /userBooks with _expand=book, so ordering (by the date each book
    was added) and pagination apply to the link rows.
    """
    link_rows = await list_page(
        rest,
        "/userBooks",
        limit=limit,
        page=page,
        order_by=order_by,
        userId=user_id,
        _expand="book",
    )
    books = [row["book"] for row in link_rows.results if row.get("book")]
    return Page(results=books, page_info=link_rows.page_info)


async def _find_library_rows(
    rest: RestClient, user_id: int | str, book_ids: list[int]
) -> list[dict[str, Any]]:
    responses = await asyncio.gather(
        *(
            rest.get(
                f"/userBooks{build_query_string({'userId': user_id, 'bookId': book_id})}"
            )
            for book_id in book_ids
        )
    )
    return [row for response in responses for row in response.body or []]


def _unique_ids(ids: list[int | str]) -> list[int]:
    return list(dict.fromkeys(parse_id(value) for value in ids))


async def _get_owner(rest: RestClient, user_id: int | str) -> dict[str, Any]:
    response = await rest.get(f"/users/{user_id}")
    return public_user(response.body)


async def add_books_to_library(
    rest: RestClient, user_id: int | str, book_ids: list[int | str]
) -> dict[str, Any]:
    """
    Add books to a user's library.

    1. Look up existing UserBook rows for every requested book (in parallel)
    2. Keep only the books not already present (compared by numeric bookId)
    3. Insert the new rows in parallel, stamped with the current time

    Returns:
        The refreshed user record
    """
    user_id = parse_id(user_id)
    requested = _unique_ids(book_ids)
    existing = await _find_library_rows(rest, user_id, requested)
    present = {int(row["bookId"]) for row in existing}
    new_book_ids = [book_id for book_id in requested if book_id not in present]

    await asyncio.gather(
        *(
            rest.post(
                "/userBooks",
                {
                    "bookId": book_id,
                    "createdAt": utc_timestamp(),
                    "userId": user_id,
                },
            )
            for book_id in new_book_ids
        )
    )
    if new_book_ids:
        logger.info(f"Added books {new_book_ids} to the library of user {user_id}")

    return await _get_owner(rest, user_id)


async def remove_books_from_library(
    rest: RestClient, user_id: int | str, book_ids: list[int | str]
) -> dict[str, Any]:
    """
    Remove books from a user's library.

    Deletes every UserBook row found for the requested books in parallel.
    Books that are not in the library are silently skipped.

    Returns:
        The refreshed user record
    """
    user_id = parse_id(user_id)
    existing = await _find_library_rows(rest, user_id, _unique_ids(book_ids))

    await asyncio.gather(*(rest.delete(f"/userBooks/{row['id']}") for row in existing))
    if existing:
        removed = [row["bookId"] for row in existing]
        logger.info(f"Removed books {removed} from the library of user {user_id}")

    return await _get_owner(rest, user_id)
