"""
Catalog Service

Mediation operations for authors and books.

Each function takes the per-request RestClient first and translates one
domain action into REST calls against the store:
- get-by-id swallows NotFound into None; every other failure propagates
- list operations build the query string, fetch, and attach PageInfo
- relation expansion reads the BookAuthor link table with the store's own
  _expand parameter, keeping the store's order
"""

import asyncio
import logging
from typing import Any

from bookgraph.errors import NotFound
from bookgraph.services.pagination import Page, parse_page_info
from bookgraph.services.query import build_query_string
from bookgraph.services.rest_client import RestClient
from bookgraph.utils import parse_id

logger = logging.getLogger(__name__)


async def get_record_or_none(rest: RestClient, path: str) -> dict[str, Any] | None:
    """Fetch a single record, translating a missing resource into None."""
    try:
        response = await rest.get(path)
    except NotFound:
        return None
    return response.body


async def list_page(
    rest: RestClient,
    path: str,
    *,
    limit: int | None,
    page: int | None,
    order_by: str | None,
    **filters: Any,
) -> Page:
    """
    Fetch one page of a collection and derive its PageInfo.

    The PageInfo is computed from the headers of this very response.
    """
    query_string = build_query_string(
        {"limit": limit, "page": page, "order_by": order_by, **filters}
    )
    response = await rest.get(f"{path}{query_string}")
    page_info = parse_page_info(response.pagination, limit=limit, page=page)
    return Page(results=response.body or [], page_info=page_info)


# =============================================================================
# Authors
# =============================================================================


async def get_author(rest: RestClient, author_id: int | str) -> dict[str, Any] | None:
    """Get a single author by ID (None if the store has no such author)."""
    return await get_record_or_none(rest, f"/authors/{author_id}")


async def list_authors(
    rest: RestClient,
    limit: int | None = None,
    page: int | None = None,
    order_by: str = "name_asc",
) -> Page:
    """Get a page of authors, ordered by name by default."""
    return await list_page(rest, "/authors", limit=limit, page=page, order_by=order_by)


async def get_author_books(rest: RestClient, author_id: int | str) -> list[dict[str, Any]]:
    """
    Get the books written by an author.

    Reads /bookAuthors?authorId=..&_expand=book and maps each link row to
    its expanded book record.
    """
    query_string = build_query_string({"authorId": author_id, "_expand": "book"})
    response = await rest.get(f"/bookAuthors{query_string}")
    return [row["book"] for row in response.body or [] if row.get("book")]


async def create_author(rest: RestClient, name: str) -> dict[str, Any]:
    """Create an author."""
    response = await rest.post("/authors", {"name": name})
    logger.info(f"Created author {response.body.get('id')}: '{name}'")
    return response.body


# =============================================================================
# Books
# =============================================================================


async def get_book(rest: RestClient, book_id: int | str) -> dict[str, Any] | None:
    """Get a single book by ID (None if the store has no such book)."""
    return await get_record_or_none(rest, f"/books/{book_id}")


async def list_books(
    rest: RestClient,
    limit: int | None = None,
    page: int | None = None,
    order_by: str = "title_asc",
) -> Page:
    """Get a page of books, ordered by title by default."""
    return await list_page(rest, "/books", limit=limit, page=page, order_by=order_by)


async def get_book_authors(rest: RestClient, book_id: int | str) -> list[dict[str, Any]]:
    """Get the authors of a book through the BookAuthor link table."""
    query_string = build_query_string({"bookId": book_id, "_expand": "author"})
    response = await rest.get(f"/bookAuthors{query_string}")
    return [row["author"] for row in response.body or [] if row.get("author")]


async def create_book(
    rest: RestClient,
    title: str,
    author_ids: list[int | str] | None = None,
    cover: str | None = None,
    genre: str | None = None,
    summary: str | None = None,
) -> dict[str, Any]:
    """
    Create a book and link it to its authors.

    The Book row is inserted first. Link rows are then created in parallel,
    one per author ID. There is no rollback: if a link insert fails the
    error propagates and the book remains with partial author linkage.

    Args:
        rest: REST client
        title: Book title
        author_ids: IDs of the book's authors (optional)
        cover: Cover image URL (omitted from the record when absent)
        genre: Genre name (omitted when absent)
        summary: Summary text (omitted when absent)

    Returns:
        The created book record

    Raises:
        InvalidArgument: If an author ID is not numeric (nothing is written)
    """
    # Reject malformed author IDs before anything is written
    author_ids = [parse_id(author_id) for author_id in author_ids or []]

    data: dict[str, Any] = {"title": title}
    if cover:
        data["cover"] = cover
    if genre:
        data["genre"] = genre
    if summary:
        data["summary"] = summary

    response = await rest.post("/books", data)
    book = response.body
    logger.info(f"Created book {book['id']}: '{title}'")

    if author_ids:
        try:
            await asyncio.gather(
                *(
                    rest.post(
                        "/bookAuthors",
                        {"authorId": author_id, "bookId": book["id"]},
                    )
                    for author_id in author_ids
                )
            )
        except Exception:
            logger.warning(
                f"Book {book['id']} was created but linking its authors failed"
            )
            raise

    return book
