"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application that serves the
GraphQL API.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() returns a configured app
   - Tests build the app once and override the REST client dependency

2. Lifespan Events
   - startup: log the configuration the gateway runs with
   - shutdown: log the stop (REST clients are closed per request)

3. Middleware Stack
   - CORS: allow the configured browser origins, with credentials so the
     session cookie is sent along

4. Exception Handlers
   - GraphQL errors are reported inside the GraphQL response
   - Anything escaping the GraphQL layer becomes a 500 with details hidden
     unless debug mode is on
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bookgraph import __version__
from bookgraph.config import get_settings
from bookgraph.graphql import create_graphql_router

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield runs on startup, code after yield on shutdown.
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"REST store: {settings.rest_api_base_url}")
    logger.info(f"Session tokens read from: {settings.token_location}")

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## Bookgraph

A GraphQL gateway over a REST resource store of books, authors, reviews
and users.

### Features
- **Catalog**: Authors and books with paginated listings
- **Reviews**: One review per user and book, editable by its author
- **Libraries**: Personal book collections
- **Search**: Merged, sorted search across collections

### Authentication
Session tokens are issued by `signUp` and `login` and accepted from the
`Authorization: Bearer` header or the session cookie.
        """,
        version=__version__,
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        # The session cookie needs credentials
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In debug mode, show more details.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        if settings.debug:
            return JSONResponse(
                status_code=500,
                content={"detail": str(exc)},
            )

        return JSONResponse(
            status_code=500,
            content={"detail": "An internal error occurred."},
        )

    # -------------------------------------------------------------------------
    # GraphQL Endpoint
    # -------------------------------------------------------------------------
    graphql_router = create_graphql_router()
    app.include_router(graphql_router, prefix="/graphql", tags=["GraphQL"])

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the gateway is running.",
    )
    async def health_check() -> dict:
        """
        Health check endpoint.

        Does not contact the REST store; it only reports that this process
        is serving requests.
        """
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": __version__,
            "rest_store": settings.rest_api_base_url,
            "graphql": {
                "endpoint": "/graphql",
                "ide_enabled": settings.graphql_ide,
            },
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="Welcome message and API information.",
    )
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": __version__,
            "graphql": "/graphql",
            "health": "/health",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn bookgraph.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# python -m bookgraph.main

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bookgraph.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
