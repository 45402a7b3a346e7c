"""
GraphQL Book Type

Defines the Book type and related types for GraphQL queries.
"""

from typing import Any

import strawberry
from strawberry.types import Info

from bookgraph.graphql.context import GraphQLContext
from bookgraph.graphql.types.author import AuthorType
from bookgraph.graphql.types.common import Genre, PageInfoType, ReviewOrderBy
from bookgraph.graphql.types.review import ReviewConnection
from bookgraph.services.catalog import get_book_authors
from bookgraph.services.pagination import Page
from bookgraph.services.reviews import list_book_reviews


@strawberry.type(name="Book")
class BookType:
    """
    GraphQL type representing a book.

    Authors and reviews are resolved from the REST store on demand.
    """

    id: strawberry.ID
    title: str
    cover: str | None = None
    summary: str | None = None
    genre: Genre | None = None

    @strawberry.field(description="Authors of this book")
    async def authors(self, info: Info[GraphQLContext, None]) -> list[AuthorType]:
        records = await get_book_authors(info.context.rest, self.id)
        return [AuthorType.from_record(record) for record in records]

    @strawberry.field(description="Paginated reviews of this book")
    async def reviews(
        self,
        info: Info[GraphQLContext, None],
        limit: int | None = None,
        page: int | None = None,
        order_by: ReviewOrderBy = ReviewOrderBy.REVIEWED_ON_DESC,
    ) -> ReviewConnection:
        result = await list_book_reviews(
            info.context.rest,
            self.id,
            limit=limit,
            page=page,
            order_by=order_by.value,
        )
        return ReviewConnection.from_page(result)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "BookType":
        genre = record.get("genre")
        return cls(
            id=strawberry.ID(str(record["id"])),
            title=record["title"],
            cover=record.get("cover"),
            summary=record.get("summary"),
            genre=Genre(genre) if genre else None,
        )


@strawberry.type(name="Books")
class BookConnection:
    """Paginated list of books."""

    results: list[BookType]
    page_info: PageInfoType | None = None

    @classmethod
    def from_page(cls, page: Page) -> "BookConnection":
        return cls(
            results=[BookType.from_record(record) for record in page.results],
            page_info=PageInfoType.from_page_info(page.page_info),
        )


@strawberry.input
class CreateBookInput:
    """
    Input type for creating a book.

    cover, genre and summary are left out of the stored record when absent.
    """

    title: str
    author_ids: list[strawberry.ID] | None = None
    cover: str | None = None
    genre: Genre | None = None
    summary: str | None = None
