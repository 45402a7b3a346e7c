"""
GraphQL Package

This package provides the GraphQL API using Strawberry GraphQL. Every field
is resolved through the data-source mediation layer in bookgraph.services,
which talks to the REST resource store.

Features:
- Typed schema for authors, books, reviews, users and personal libraries
- Paginated list fields with PageInfo derived from REST headers
- Merged search over several collections
- Session tokens via Authorization header or cookie
- Declarative authorization policy checked before every write

Usage:
    The GraphQL endpoint is available at /graphql with an
    interactive IDE for development.

Example Query:
    query {
        books(limit: 10, orderBy: TITLE_ASC) {
            results {
                id
                title
                authors { name }
            }
            pageInfo { hasNextPage totalCount }
        }
    }
"""

import strawberry
from strawberry.fastapi import GraphQLRouter

from bookgraph.config import get_settings
from bookgraph.graphql.context import get_context
from bookgraph.graphql.mutations import Mutation
from bookgraph.graphql.queries import Query

settings = get_settings()

# Create the GraphQL schema
schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
)


def create_graphql_router() -> GraphQLRouter:
    """
    Create the GraphQL router for FastAPI.

    Returns:
        GraphQLRouter configured with schema and context
    """
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="apollo-sandbox" if settings.graphql_ide else None,
    )


__all__ = ["schema", "create_graphql_router"]
