"""Error handling at the API boundary.

Domain exceptions raised inside resolvers become GraphQL errors carrying an
``extensions.code``. Anything that is not a domain exception is logged with
its traceback and masked before it reaches the client.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from graphql import GraphQLError
from strawberry.extensions import SchemaExtension

from repo_insights.domain.exceptions import (
    MalformedDataError,
    RepoInsightsError,
    RepositoryNotFoundError,
    UpstreamAccessDeniedError,
    UpstreamAuthenticationError,
    UpstreamRateLimitError,
    UpstreamResponseError,
    UpstreamTransportError,
)

logger = logging.getLogger(__name__)

# Most specific first.
_ERROR_CODES: list[tuple[type[RepoInsightsError], str]] = [
    (RepositoryNotFoundError, "NOT_FOUND"),
    (UpstreamAuthenticationError, "UPSTREAM_UNAUTHENTICATED"),
    (UpstreamAccessDeniedError, "UPSTREAM_FORBIDDEN"),
    (UpstreamRateLimitError, "UPSTREAM_RATE_LIMITED"),
    (UpstreamTransportError, "UPSTREAM_UNAVAILABLE"),
    (UpstreamResponseError, "UPSTREAM_ERROR"),
    (MalformedDataError, "MALFORMED_UPSTREAM_DATA"),
]

_UNEXPECTED_MESSAGE = "An unexpected error occurred. Please try again later."


def error_code(exc: BaseException | None) -> str:
    """Return the GraphQL error code for the exception behind an error."""
    if exc is None:
        return "GRAPHQL_VALIDATION_FAILED"
    for exc_type, code in _ERROR_CODES:
        if isinstance(exc, exc_type):
            return code
    if isinstance(exc, RepoInsightsError):
        return "UPSTREAM_ERROR"
    return "INTERNAL_SERVER_ERROR"


def log_graphql_errors(errors: list[GraphQLError]) -> None:
    for error in errors:
        original = error.original_error
        if original is None:
            logger.info("Rejected GraphQL request: %s", error.message)
        elif isinstance(original, RepoInsightsError):
            logger.warning("%s: %s", type(original).__name__, original)
        else:
            logger.error("Unhandled exception", exc_info=original)


def _coded(error: GraphQLError) -> GraphQLError:
    original = error.original_error
    code = error_code(original)
    message = _UNEXPECTED_MESSAGE if code == "INTERNAL_SERVER_ERROR" else error.message
    return GraphQLError(
        message,
        nodes=error.nodes,
        source=error.source,
        positions=error.positions,
        path=error.path,
        original_error=original,
        extensions={**(error.extensions or {}), "code": code},
    )


class ErrorCodeExtension(SchemaExtension):
    """Attach ``extensions.code`` to every error and mask unexpected ones."""

    def on_operation(self) -> Iterator[None]:
        yield
        result = self.execution_context.result
        errors = getattr(result, "errors", None)
        if errors:
            result.errors = [_coded(error) for error in errors]


def register_error_handlers(app: FastAPI) -> None:
    """Attach the catch-all handler for errors outside GraphQL execution."""

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return JSONResponse(
            status_code=500,
            content={"status": "error", "message": _UNEXPECTED_MESSAGE},
        )
