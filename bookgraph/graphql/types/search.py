"""
GraphQL Search Types

Unions returned by the search queries:
- Person: Author | User
- BookResult: Book | Author

The mediation layer tags every search row with its kind, so converting a
result only dispatches on that tag.
"""

from typing import Annotated

import strawberry

from bookgraph.graphql.types.author import AuthorType
from bookgraph.graphql.types.book import BookType
from bookgraph.graphql.types.user import UserType
from bookgraph.services.search import ResultKind, SearchResult

Person = Annotated[AuthorType | UserType, strawberry.union("Person")]
BookResult = Annotated[BookType | AuthorType, strawberry.union("BookResult")]

_CONVERTERS = {
    ResultKind.AUTHOR: AuthorType.from_record,
    ResultKind.BOOK: BookType.from_record,
    ResultKind.USER: UserType.from_record,
}


def search_result_to_graphql(result: SearchResult) -> AuthorType | BookType | UserType:
    """Convert a tagged search row into its GraphQL type."""
    return _CONVERTERS[result.kind](result.value)
