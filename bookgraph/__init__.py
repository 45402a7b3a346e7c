"""
Bookgraph Application Package

GraphQL facade in front of a generic REST resource store that backs a
book-cataloguing application (books, authors, users, reviews and personal
libraries).

Package Structure:
- config.py: Application configuration using Pydantic Settings
- dependencies.py: Dependency injection functions (REST client per request)
- errors.py: Error taxonomy shared by the mediation layer and GraphQL
- main.py: FastAPI application factory and configuration
- services/: Data-source mediation layer (REST calls, query strings,
  pagination, authentication)
- graphql/: Strawberry schema, context, authorization gate and resolvers
- utils/: Helper functions
"""

__version__ = "0.1.0"
