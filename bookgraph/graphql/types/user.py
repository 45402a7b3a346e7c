"""
GraphQL User Type

Defines the User type, the authentication payload and user inputs.

The stored password hash is never part of the type. The email address is
only visible to the user it belongs to.
"""

from typing import Any

import strawberry
from strawberry.types import Info

from bookgraph.graphql.context import GraphQLContext
from bookgraph.graphql.permissions import authorize
from bookgraph.graphql.scalars import Password
from bookgraph.graphql.types.book import BookConnection
from bookgraph.graphql.types.common import LibraryOrderBy, ReviewOrderBy
from bookgraph.graphql.types.review import ReviewConnection
from bookgraph.services.library import get_user_library
from bookgraph.services.reviews import list_user_reviews


@strawberry.type(name="User")
class UserType:
    """
    GraphQL type representing a registered user.

    Library and reviews are resolved from the REST store on demand.
    """

    id: strawberry.ID
    name: str
    username: str
    email_address: strawberry.Private[str | None] = None

    @strawberry.field(description="Email address (visible to its owner only)")
    async def email(self, info: Info[GraphQLContext, None]) -> str | None:
        await authorize(
            "User.email",
            info.context.identity,
            {"user_id": self.id},
            info.context.rest,
        )
        return self.email_address

    @strawberry.field(description="Books in this user's library")
    async def library(
        self,
        info: Info[GraphQLContext, None],
        limit: int | None = None,
        page: int | None = None,
        order_by: LibraryOrderBy = LibraryOrderBy.ADDED_ON_DESC,
    ) -> BookConnection:
        result = await get_user_library(
            info.context.rest,
            self.id,
            limit=limit,
            page=page,
            order_by=order_by.value,
        )
        return BookConnection.from_page(result)

    @strawberry.field(description="Reviews written by this user")
    async def reviews(
        self,
        info: Info[GraphQLContext, None],
        limit: int | None = None,
        page: int | None = None,
        order_by: ReviewOrderBy = ReviewOrderBy.REVIEWED_ON_DESC,
    ) -> ReviewConnection:
        result = await list_user_reviews(
            info.context.rest,
            self.id,
            limit=limit,
            page=page,
            order_by=order_by.value,
        )
        return ReviewConnection.from_page(result)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "UserType":
        return cls(
            id=strawberry.ID(str(record["id"])),
            name=record["name"],
            username=record["username"],
            email_address=record.get("email"),
        )


@strawberry.type(name="AuthPayload")
class AuthPayloadType:
    """
    Response type for sign-up and login.

    Contains the session token and the authenticated user.
    """

    token: str
    viewer: UserType


@strawberry.input
class SignUpInput:
    """Input type for user registration."""

    email: str
    name: str
    password: Password
    username: str


@strawberry.input
class UpdateLibraryBooksInput:
    """Input type for adding books to or removing books from a library."""

    book_ids: list[strawberry.ID]
    user_id: strawberry.ID
