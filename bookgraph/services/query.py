"""
Query-String Builder

Turns a structured set of filter, sort and pagination parameters into the
REST store's query-string dialect:

    {"limit": 10, "page": 2, "order_by": "title_asc", "genre": "FANTASY"}
    -> "?_sort=title&_order=asc&_limit=10&_page=2&genre=FANTASY"

Control keys:
- limit: page size, emitted as _limit; anything above MAX_PAGE_SIZE is rejected
- page: page number, emitted as _page (defaults to 1)
- order_by: compound "field_direction" token split into _sort/_order

Every other key is a filter appended as key=value in insertion order.

Pagination is not emitted unconditionally. _page appears only when the
parameters carry a limit or page key (list operations always pass one), and
_limit only when a limit value is given, so the store applies its own default
page size otherwise. An empty parameter set yields "", and filter-only
lookups (uniqueness checks, review and library row lookups) carry no
pagination at all, so they see every matching row.
"""

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from bookgraph.errors import InvalidArgument

MAX_PAGE_SIZE = 100

CONTROL_KEYS = ("limit", "page", "order_by")


def split_order_by(order_by: str) -> tuple[str, str | None]:
    """
    Split "field_direction" into its parts.

    The direction is the text after the last underscore so that
    multi-word fields stay intact ("createdAt_desc" -> ("createdAt", "desc")).
    """
    field, separator, direction = order_by.rpartition("_")
    if not separator:
        return order_by, None
    return field, direction


def build_query_string(params: Mapping[str, Any]) -> str:
    """
    Build a query string for the REST store.

    Args:
        params: limit/page/order_by control keys plus arbitrary filters

    Returns:
        "?..." query string, or "" when there is nothing to send

    Raises:
        InvalidArgument: If limit exceeds MAX_PAGE_SIZE
    """
    limit = params.get("limit")
    page = params.get("page")
    order_by = params.get("order_by")

    if limit is not None and limit > MAX_PAGE_SIZE:
        raise InvalidArgument(f"Maximum of {MAX_PAGE_SIZE} results per page")

    parts: list[str] = []

    if order_by:
        sort, order = split_order_by(order_by)
        parts.append(f"_sort={sort}")
        if order:
            parts.append(f"_order={order}")

    if "limit" in params or "page" in params:
        if limit is not None:
            parts.append(f"_limit={limit}")
        parts.append(f"_page={page or 1}")

    for key, value in params.items():
        if key in CONTROL_KEYS or value is None:
            continue
        parts.append(f"{key}={quote(str(value), safe='')}")

    return f"?{'&'.join(parts)}" if parts else ""
