"""
GraphQL Mutation Resolvers

Defines all write operations (mutations) for the GraphQL API.

Every mutation listed in the authorization policy calls authorize() before
touching the mediation layer; a rejected call performs no REST writes.
Sign-up and login also store the session token in a cookie, and logout
clears it.
"""

import logging

import strawberry
from strawberry.types import Info

from bookgraph.config import get_settings
from bookgraph.graphql.context import GraphQLContext
from bookgraph.graphql.permissions import authorize
from bookgraph.graphql.types.author import AuthorType
from bookgraph.graphql.types.book import BookType, CreateBookInput
from bookgraph.graphql.types.review import (
    CreateReviewInput,
    ReviewType,
    UpdateReviewInput,
)
from bookgraph.graphql.types.user import (
    AuthPayloadType,
    SignUpInput,
    UpdateLibraryBooksInput,
    UserType,
)
from bookgraph.services import auth, catalog, library, reviews
from bookgraph.services.security import ACCESS_TOKEN_EXPIRE_DAYS, Identity

logger = logging.getLogger(__name__)
settings = get_settings()


def start_session(info: Info[GraphQLContext, None], payload: auth.AuthPayload) -> AuthPayloadType:
    """
    Attach a new session to the current request.

    Sets the token cookie on the HTTP response and makes the new user the
    identity for the remaining fields of this operation.
    """
    response = info.context.response
    if response is not None:
        response.set_cookie(
            key=settings.token_cookie_name,
            value=payload.token,
            max_age=ACCESS_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
            httponly=True,
            secure=settings.is_production,
            samesite="lax",
        )

    viewer = payload.viewer
    logger.info(f"Session started for user {viewer['id']}")
    info.context.identity = Identity(user_id=int(viewer["id"]), username=viewer["username"])

    return AuthPayloadType(token=payload.token, viewer=UserType.from_record(viewer))


@strawberry.type
class Mutation:
    """
    GraphQL Mutation type containing all write operations.

    Most mutations require a session token.
    """

    # =========================================================================
    # Authentication Mutations
    # =========================================================================

    @strawberry.mutation(description="Register a new user account")
    async def sign_up(
        self, info: Info[GraphQLContext, None], input: SignUpInput
    ) -> AuthPayloadType:
        """
        Create a new user account.

        Returns a session token on success.
        """
        payload = await auth.sign_up(
            info.context.rest,
            email=input.email,
            name=input.name,
            password=input.password,
            username=input.username,
        )
        return start_session(info, payload)

    @strawberry.mutation(description="Login with username and password")
    async def login(
        self, info: Info[GraphQLContext, None], username: str, password: str
    ) -> AuthPayloadType:
        payload = await auth.login(info.context.rest, username=username, password=password)
        return start_session(info, payload)

    @strawberry.mutation(description="End the current session")
    def logout(self, info: Info[GraphQLContext, None]) -> bool:
        """
        Clear the session cookie.

        Tokens carry their own expiry, so there is nothing to revoke.
        """
        response = info.context.response
        if response is not None:
            response.delete_cookie(key=settings.token_cookie_name)
        return True

    # =========================================================================
    # Catalog Mutations
    # =========================================================================

    @strawberry.mutation(description="Create a new author")
    async def create_author(
        self, info: Info[GraphQLContext, None], name: str
    ) -> AuthorType:
        await authorize("createAuthor", info.context.identity, {"name": name}, info.context.rest)
        record = await catalog.create_author(info.context.rest, name)
        return AuthorType.from_record(record)

    @strawberry.mutation(description="Create a new book")
    async def create_book(
        self, info: Info[GraphQLContext, None], input: CreateBookInput
    ) -> BookType:
        """
        Create a new book and link it to its authors.

        Requires authentication.
        """
        await authorize("createBook", info.context.identity, {"title": input.title}, info.context.rest)
        record = await catalog.create_book(
            info.context.rest,
            title=input.title,
            author_ids=input.author_ids,
            cover=input.cover,
            genre=input.genre.value if input.genre else None,
            summary=input.summary,
        )
        return BookType.from_record(record)

    # =========================================================================
    # Review Mutations
    # =========================================================================

    @strawberry.mutation(description="Create a review for a book")
    async def create_review(
        self, info: Info[GraphQLContext, None], input: CreateReviewInput
    ) -> ReviewType:
        """
        Create a review for a book.

        Requires authentication as the reviewer. Users can only create one
        review per book.
        """
        await authorize(
            "createReview",
            info.context.identity,
            {"book_id": input.book_id, "reviewer_id": input.reviewer_id},
            info.context.rest,
        )
        record = await reviews.create_review(
            info.context.rest,
            book_id=input.book_id,
            reviewer_id=input.reviewer_id,
            rating=input.rating,
            text=input.text,
        )
        return ReviewType.from_record(record)

    @strawberry.mutation(description="Update a review")
    async def update_review(
        self, info: Info[GraphQLContext, None], input: UpdateReviewInput
    ) -> ReviewType:
        """
        Update a review.

        Requires authentication. Users can only update their own reviews.
        """
        await authorize(
            "updateReview", info.context.identity, {"review_id": input.id}, info.context.rest
        )
        record = await reviews.update_review(
            info.context.rest, input.id, rating=input.rating, text=input.text
        )
        return ReviewType.from_record(record)

    @strawberry.mutation(description="Delete a review")
    async def delete_review(
        self, info: Info[GraphQLContext, None], id: strawberry.ID
    ) -> strawberry.ID:
        """
        Delete a review.

        Requires authentication. Users can only delete their own reviews.
        Returns the ID of the deleted review.
        """
        await authorize("deleteReview", info.context.identity, {"review_id": id}, info.context.rest)
        return await reviews.delete_review(info.context.rest, id)

    # =========================================================================
    # Library Mutations
    # =========================================================================

    @strawberry.mutation(description="Add books to a user's library")
    async def add_books_to_library(
        self, info: Info[GraphQLContext, None], input: UpdateLibraryBooksInput
    ) -> UserType:
        await authorize(
            "addBooksToLibrary",
            info.context.identity,
            {"user_id": input.user_id, "book_ids": input.book_ids},
            info.context.rest,
        )
        record = await library.add_books_to_library(
            info.context.rest, input.user_id, input.book_ids
        )
        return UserType.from_record(record)

    @strawberry.mutation(description="Remove books from a user's library")
    async def remove_books_from_library(
        self, info: Info[GraphQLContext, None], input: UpdateLibraryBooksInput
    ) -> UserType:
        await authorize(
            "removeBooksFromLibrary",
            info.context.identity,
            {"user_id": input.user_id, "book_ids": input.book_ids},
            info.context.rest,
        )
        record = await library.remove_books_from_library(
            info.context.rest, input.user_id, input.book_ids
        )
        return UserType.from_record(record)
