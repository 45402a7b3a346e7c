"""
GraphQL Author Type

Defines the Author type for GraphQL queries.
"""

from typing import TYPE_CHECKING, Annotated, Any

import strawberry
from strawberry.types import Info

from bookgraph.graphql.context import GraphQLContext
from bookgraph.graphql.types.common import PageInfoType
from bookgraph.services.catalog import get_author_books
from bookgraph.services.pagination import Page

if TYPE_CHECKING:
    from bookgraph.graphql.types.book import BookType


@strawberry.type(name="Author")
class AuthorType:
    """
    GraphQL type representing a book author.

    Maps to an /authors record of the REST store.
    """

    id: strawberry.ID
    name: str

    @strawberry.field(description="Books written by this author")
    async def books(
        self, info: Info[GraphQLContext, None]
    ) -> list[Annotated["BookType", strawberry.lazy("bookgraph.graphql.types.book")]]:
        # Import here to avoid circular imports
        from bookgraph.graphql.types.book import BookType

        records = await get_author_books(info.context.rest, self.id)
        return [BookType.from_record(record) for record in records]

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "AuthorType":
        return cls(id=strawberry.ID(str(record["id"])), name=record["name"])


@strawberry.type(name="Authors")
class AuthorConnection:
    """Paginated list of authors."""

    results: list[AuthorType]
    page_info: PageInfoType | None = None

    @classmethod
    def from_page(cls, page: Page) -> "AuthorConnection":
        return cls(
            results=[AuthorType.from_record(record) for record in page.results],
            page_info=PageInfoType.from_page_info(page.page_info),
        )
