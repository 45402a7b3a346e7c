"""
GraphQL Common Types

PageInfo and the enums shared by several types.

Order-by enums map GraphQL names to the store's "field_direction" tokens,
e.g. TITLE_ASC -> "title_asc".
"""

from enum import Enum

import strawberry

from bookgraph.services.pagination import PageInfo


@strawberry.type(name="PageInfo")
class PageInfoType:
    """
    Pagination metadata for a list result.

    Derived from the REST store's Link and X-Total-Count headers.
    """

    has_next_page: bool
    has_prev_page: bool
    page: int
    per_page: int | None = None
    total_count: int = 0

    @classmethod
    def from_page_info(cls, page_info: PageInfo | None) -> "PageInfoType | None":
        if page_info is None:
            return None
        return cls(
            has_next_page=page_info.has_next_page,
            has_prev_page=page_info.has_prev_page,
            page=page_info.page,
            per_page=page_info.per_page,
            total_count=page_info.total_count,
        )


@strawberry.enum
class Genre(Enum):
    """Book genres."""

    ADVENTURE = "ADVENTURE"
    CHILDREN = "CHILDREN"
    CLASSICS = "CLASSICS"
    COMIC_GRAPHIC_NOVEL = "COMIC_GRAPHIC_NOVEL"
    DETECTIVE_MYSTERY = "DETECTIVE_MYSTERY"
    DYSTOPIA = "DYSTOPIA"
    FANTASY = "FANTASY"
    HORROR = "HORROR"
    HUMOR = "HUMOR"
    NON_FICTION = "NON_FICTION"
    SCIENCE_FICTION = "SCIENCE_FICTION"
    ROMANCE = "ROMANCE"
    THRILLER = "THRILLER"
    WESTERN = "WESTERN"


@strawberry.enum
class AuthorOrderBy(Enum):
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"


@strawberry.enum
class BookOrderBy(Enum):
    TITLE_ASC = "title_asc"
    TITLE_DESC = "title_desc"


@strawberry.enum
class LibraryOrderBy(Enum):
    ADDED_ON_ASC = "createdAt_asc"
    ADDED_ON_DESC = "createdAt_desc"


@strawberry.enum
class ReviewOrderBy(Enum):
    REVIEWED_ON_ASC = "createdAt_asc"
    REVIEWED_ON_DESC = "createdAt_desc"


@strawberry.enum
class SearchOrderBy(Enum):
    RESULT_ASC = "asc"
    RESULT_DESC = "desc"
