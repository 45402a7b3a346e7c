"""
Pagination Translator

Converts the pagination headers captured from one REST response into the
PageInfo object attached to GraphQL list results.

The store signals pagination with:
- X-Total-Count: total number of matching rows
- Link: RFC 8288 style relations, e.g.
  <http://store/books?_page=1>; rel="first", <http://store/books?_page=3>; rel="next"

The Link header arrives already parsed into a {rel: url} mapping by httpx.
A response without X-Total-Count is treated as unpaginated: no PageInfo.
"""

from dataclasses import dataclass
from typing import Any

from bookgraph.services.rest_client import PaginationHeaders


@dataclass(frozen=True)
class PageInfo:
    """Derived pagination metadata for one list response."""

    has_next_page: bool
    has_prev_page: bool
    page: int
    per_page: int | None
    total_count: int


@dataclass(frozen=True)
class Page:
    """A page of records together with its PageInfo (None when unpaginated)."""

    results: list[dict[str, Any]]
    page_info: PageInfo | None


def parse_page_info(
    headers: PaginationHeaders,
    *,
    limit: int | None = None,
    page: int | None = None,
) -> PageInfo | None:
    """
    Build PageInfo from the headers of the response it describes.

    Args:
        headers: Headers captured from that specific response
        limit: Page size the caller requested (reported as perPage)
        page: Page the caller requested (defaults to 1)

    Returns:
        PageInfo, or None when the response carried no total count
    """
    if not headers.total_count:
        return None

    return PageInfo(
        has_next_page="next" in headers.links,
        has_prev_page="prev" in headers.links,
        page=page or 1,
        per_page=limit,
        total_count=int(headers.total_count),
    )
