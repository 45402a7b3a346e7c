"""
GraphQL Types Package

This package contains all GraphQL type definitions mapping REST store
records to the schema. Types are defined using Strawberry's decorator syntax.

Types defined here:
- BookType: Book with authors and reviews
- AuthorType: Author with their books
- UserType: User with library and reviews
- ReviewType: Book review with book and reviewer
- Connection types for pagination (Authors, Books, Reviews) and PageInfo
- Search unions (Person, BookResult)
- Enums, inputs and the authentication payload
"""

from bookgraph.graphql.types.author import AuthorConnection, AuthorType
from bookgraph.graphql.types.book import BookConnection, BookType, CreateBookInput
from bookgraph.graphql.types.common import (
    AuthorOrderBy,
    BookOrderBy,
    Genre,
    LibraryOrderBy,
    PageInfoType,
    ReviewOrderBy,
    SearchOrderBy,
)
from bookgraph.graphql.types.review import (
    CreateReviewInput,
    ReviewConnection,
    ReviewType,
    UpdateReviewInput,
)
from bookgraph.graphql.types.search import BookResult, Person, search_result_to_graphql
from bookgraph.graphql.types.user import (
    AuthPayloadType,
    SignUpInput,
    UpdateLibraryBooksInput,
    UserType,
)

__all__ = [
    # Book types
    "BookType",
    "BookConnection",
    "CreateBookInput",
    "Genre",
    "BookOrderBy",
    # Author types
    "AuthorType",
    "AuthorConnection",
    "AuthorOrderBy",
    # User types
    "UserType",
    "AuthPayloadType",
    "SignUpInput",
    "UpdateLibraryBooksInput",
    "LibraryOrderBy",
    # Review types
    "ReviewType",
    "ReviewConnection",
    "CreateReviewInput",
    "UpdateReviewInput",
    "ReviewOrderBy",
    # Search types
    "Person",
    "BookResult",
    "SearchOrderBy",
    "search_result_to_graphql",
    # Pagination
    "PageInfoType",
]
