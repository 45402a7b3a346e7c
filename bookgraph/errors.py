"""
Error Classes

Typed failures raised by the mediation layer and the GraphQL resolvers.

Each error carries a machine-readable code. Strawberry (through graphql-core)
copies the `extensions` attribute of a raised exception onto the GraphQL
error, so clients receive `{"extensions": {"code": "FORBIDDEN"}}` and can
branch on the kind of failure without parsing messages.
"""


class BookgraphError(Exception):
    """Base class for all errors surfaced to GraphQL clients."""

    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def extensions(self) -> dict:
        return {"code": self.code}


class NotFound(BookgraphError):
    """Raised when the REST store reports that a resource does not exist."""

    code = "NOT_FOUND"


class InvalidArgument(BookgraphError):
    """Raised when an argument is outside the accepted range or format."""

    code = "BAD_USER_INPUT"


class AuthenticationFailed(BookgraphError):
    """Raised on bad credentials or an unusable session token."""

    code = "UNAUTHENTICATED"


class Forbidden(BookgraphError):
    """Raised when the authorization gate or a write invariant rejects a call."""

    code = "FORBIDDEN"


class UpstreamFailure(BookgraphError):
    """Raised for any other non-2xx response or transport error from the store."""

    code = "UPSTREAM_FAILURE"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def extensions(self) -> dict:
        extensions = {"code": self.code}
        if self.status_code is not None:
            extensions["statusCode"] = self.status_code
        return extensions
