"""
Search Service

Searches two REST collections at once and merges the results.

- search_people: authors + users, matched on name
- search_books: authors + books, matched on name / title

An exact search filters with field equality (name=..., title=...); a
non-exact search uses the store's full-text `q` parameter. Both collections
are queried in parallel and every row is tagged with its kind immediately
after the fetch, so later stages never have to guess what a row is.

The merged list is sorted by the title of books and the name of everything
else, using a case- and accent-insensitive comparison. Rows with equal keys
keep their merge order (first collection, then second).
"""

import asyncio
import unicodedata
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from bookgraph.services.query import build_query_string
from bookgraph.services.rest_client import RestClient

SEARCH_PAGE_SIZE = 50


class ResultKind(StrEnum):
    """What a search result row represents."""

    AUTHOR = "author"
    BOOK = "book"
    USER = "user"


@dataclass(frozen=True)
class SearchResult:
    """A search result row tagged with its kind."""

    kind: ResultKind
    value: dict[str, Any]

    @property
    def sort_value(self) -> str:
        if self.kind is ResultKind.BOOK:
            return self.value.get("title") or ""
        return self.value.get("name") or ""


def collation_key(value: str) -> str:
    """
    Comparison key approximating a locale-aware collation.

    Accents are stripped and case is folded so "émile" sorts next to
    "Emile" rather than after "Zoe".
    """
    decomposed = unicodedata.normalize("NFKD", value)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return stripped.casefold()


def sort_results(results: list[SearchResult], direction: str = "asc") -> list[SearchResult]:
    """Sort merged results by their comparison key; ties keep merge order."""
    return sorted(
        results,
        key=lambda result: collation_key(result.sort_value),
        reverse=direction == "desc",
    )


async def _search_collection(
    rest: RestClient,
    path: str,
    kind: ResultKind,
    field: str,
    query: str,
    exact: bool,
) -> list[SearchResult]:
    params = {field: query} if exact else {"q": query}
    query_string = build_query_string({**params, "limit": SEARCH_PAGE_SIZE})
    response = await rest.get(f"{path}{query_string}")
    return [SearchResult(kind=kind, value=row) for row in response.body or []]


async def search_people(
    rest: RestClient,
    query: str,
    exact: bool = False,
    direction: str = "asc",
) -> list[SearchResult]:
    """
    Search authors and users by name.

    Args:
        rest: REST client
        query: Text to search for
        exact: Match the name exactly instead of a full-text search
        direction: "asc" or "desc"

    Returns:
        Tagged authors and users sorted by name
    """
    authors, users = await asyncio.gather(
        _search_collection(rest, "/authors", ResultKind.AUTHOR, "name", query, exact),
        _search_collection(rest, "/users", ResultKind.USER, "name", query, exact),
    )
    return sort_results(authors + users, direction)


async def search_books(
    rest: RestClient,
    query: str,
    exact: bool = False,
    direction: str = "asc",
) -> list[SearchResult]:
    """
    Search authors by name and books by title.

    Returns:
        Tagged authors and books sorted by name/title
    """
    authors, books = await asyncio.gather(
        _search_collection(rest, "/authors", ResultKind.AUTHOR, "name", query, exact),
        _search_collection(rest, "/books", ResultKind.BOOK, "title", query, exact),
    )
    return sort_results(authors + books, direction)
