"""
GraphQL Review Type

Defines the Review type and review inputs.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated, Any

import strawberry
from strawberry.types import Info

from bookgraph.graphql.context import GraphQLContext
from bookgraph.graphql.scalars import Rating
from bookgraph.graphql.types.common import PageInfoType
from bookgraph.services.catalog import get_book
from bookgraph.services.pagination import Page
from bookgraph.utils import parse_timestamp

if TYPE_CHECKING:
    from bookgraph.graphql.types.book import BookType
    from bookgraph.graphql.types.user import UserType


@strawberry.type(name="Review")
class ReviewType:
    """
    GraphQL type representing a book review.

    The reviewed book and the reviewer are fetched on demand.
    """

    id: strawberry.ID
    rating: Rating
    book_id: strawberry.Private[int]
    user_id: strawberry.Private[int]
    text: str | None = None
    reviewed_on: datetime | None = None

    @strawberry.field(description="The reviewed book")
    async def book(
        self, info: Info[GraphQLContext, None]
    ) -> Annotated["BookType", strawberry.lazy("bookgraph.graphql.types.book")] | None:
        from bookgraph.graphql.types.book import BookType

        record = await get_book(info.context.rest, self.book_id)
        return BookType.from_record(record) if record else None

    @strawberry.field(description="The user who wrote the review")
    async def reviewer(
        self, info: Info[GraphQLContext, None]
    ) -> Annotated["UserType", strawberry.lazy("bookgraph.graphql.types.user")] | None:
        from bookgraph.graphql.types.user import UserType
        from bookgraph.services.auth import get_user

        record = await get_user(info.context.rest, self.user_id)
        return UserType.from_record(record) if record else None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "ReviewType":
        return cls(
            id=strawberry.ID(str(record["id"])),
            rating=record["rating"],
            text=record.get("text"),
            reviewed_on=parse_timestamp(record.get("createdAt")),
            book_id=record["bookId"],
            user_id=record["userId"],
        )


@strawberry.type(name="Reviews")
class ReviewConnection:
    """Paginated list of reviews."""

    results: list[ReviewType]
    page_info: PageInfoType | None = None

    @classmethod
    def from_page(cls, page: Page) -> "ReviewConnection":
        return cls(
            results=[ReviewType.from_record(record) for record in page.results],
            page_info=PageInfoType.from_page_info(page.page_info),
        )


@strawberry.input
class CreateReviewInput:
    """Input type for creating a review."""

    book_id: strawberry.ID
    rating: Rating
    reviewer_id: strawberry.ID
    text: str | None = None


@strawberry.input
class UpdateReviewInput:
    """
    Input type for updating a review.

    The rating is required; text is only changed when supplied.
    """

    id: strawberry.ID
    rating: Rating
    text: str | None = None
