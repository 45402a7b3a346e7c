"""
GraphQL Query Resolvers

Defines all read operations (queries) for the GraphQL API.
Each resolver hands its arguments to a mediation operation using the REST
client from the context and converts the records it gets back.
"""

import strawberry
from strawberry.types import Info

from bookgraph.graphql.context import GraphQLContext
from bookgraph.graphql.types.author import AuthorConnection, AuthorType
from bookgraph.graphql.types.book import BookConnection, BookType
from bookgraph.graphql.types.common import AuthorOrderBy, BookOrderBy, SearchOrderBy
from bookgraph.graphql.types.review import ReviewType
from bookgraph.graphql.types.search import BookResult, Person, search_result_to_graphql
from bookgraph.graphql.types.user import UserType
from bookgraph.services import auth, catalog, reviews, search


@strawberry.type
class Query:
    """
    GraphQL Query type containing all read operations.

    All resolvers receive an `info` parameter that contains the
    GraphQL context with the REST client and the caller's identity.
    """

    @strawberry.field(description="Get a single author by ID")
    async def author(
        self, info: Info[GraphQLContext, None], id: strawberry.ID
    ) -> AuthorType | None:
        record = await catalog.get_author(info.context.rest, id)
        return AuthorType.from_record(record) if record else None

    @strawberry.field(description="Get a paginated list of authors")
    async def authors(
        self,
        info: Info[GraphQLContext, None],
        limit: int | None = None,
        page: int | None = None,
        order_by: AuthorOrderBy = AuthorOrderBy.NAME_ASC,
    ) -> AuthorConnection:
        """
        Get authors with pagination.

        Args:
            limit: Number of authors per page (max 100)
            page: Page number (defaults to 1)
            order_by: Sort order (by name)
        """
        result = await catalog.list_authors(
            info.context.rest, limit=limit, page=page, order_by=order_by.value
        )
        return AuthorConnection.from_page(result)

    @strawberry.field(description="Get a single book by ID")
    async def book(
        self, info: Info[GraphQLContext, None], id: strawberry.ID
    ) -> BookType | None:
        record = await catalog.get_book(info.context.rest, id)
        return BookType.from_record(record) if record else None

    @strawberry.field(description="Get a paginated list of books")
    async def books(
        self,
        info: Info[GraphQLContext, None],
        limit: int | None = None,
        page: int | None = None,
        order_by: BookOrderBy = BookOrderBy.TITLE_ASC,
    ) -> BookConnection:
        """
        Get books with pagination.

        Args:
            limit: Number of books per page (max 100)
            page: Page number (defaults to 1)
            order_by: Sort order (by title)
        """
        result = await catalog.list_books(
            info.context.rest, limit=limit, page=page, order_by=order_by.value
        )
        return BookConnection.from_page(result)

    @strawberry.field(description="Get a single review by ID")
    async def review(
        self, info: Info[GraphQLContext, None], id: strawberry.ID
    ) -> ReviewType | None:
        record = await reviews.get_review(info.context.rest, id)
        return ReviewType.from_record(record) if record else None

    @strawberry.field(description="Search authors and users by name")
    async def search_people(
        self,
        info: Info[GraphQLContext, None],
        query: str,
        exact: bool = False,
        order_by: SearchOrderBy = SearchOrderBy.RESULT_ASC,
    ) -> list[Person]:
        results = await search.search_people(
            info.context.rest, query, exact=exact, direction=order_by.value
        )
        return [search_result_to_graphql(result) for result in results]

    @strawberry.field(description="Search books by title and authors by name")
    async def search_books(
        self,
        info: Info[GraphQLContext, None],
        query: str,
        exact: bool = False,
        order_by: SearchOrderBy = SearchOrderBy.RESULT_ASC,
    ) -> list[BookResult]:
        results = await search.search_books(
            info.context.rest, query, exact=exact, direction=order_by.value
        )
        return [search_result_to_graphql(result) for result in results]

    @strawberry.field(description="Get a user by username")
    async def user(
        self, info: Info[GraphQLContext, None], username: str
    ) -> UserType | None:
        record = await auth.get_user_by_username(info.context.rest, username)
        return UserType.from_record(record) if record else None

    @strawberry.field(description="Get the currently authenticated user")
    async def viewer(self, info: Info[GraphQLContext, None]) -> UserType | None:
        """
        Get the current authenticated user.

        Returns None if not authenticated.
        """
        identity = info.context.identity
        if identity is None:
            return None

        record = await auth.get_user_by_username(info.context.rest, identity.username)
        return UserType.from_record(record) if record else None
