"""Error boundary — the only place domain errors are serialized.

Resolvers convert :class:`RepoInspectorError` into a ``GraphQLError`` whose
message describes the cause and whose ``extensions`` keep the error kind and
the full cause chain.  Plain HTTP failures outside GraphQL get the standard
``{"status": "error", "message": "..."}`` envelope.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from graphql import GraphQLError

from repo_inspector.domain.exceptions import (
    AggregationFailedError,
    HostRejectedError,
    RepoInspectorError,
)

logger = logging.getLogger(__name__)


def _cause_chain(exc: RepoInspectorError) -> Iterator[RepoInspectorError]:
    current: RepoInspectorError | None = exc
    while current is not None:
        yield current
        current = current.cause if isinstance(current, AggregationFailedError) else None


def _describe(exc: RepoInspectorError) -> dict[str, Any]:
    info: dict[str, Any] = {"kind": exc.kind, "message": str(exc)}
    if isinstance(exc, HostRejectedError):
        info["status"] = exc.status_code
    return info


def to_graphql_error(exc: RepoInspectorError) -> GraphQLError:
    """Serialize a domain error for transport across the GraphQL boundary."""
    causes = [_describe(err) for err in _cause_chain(exc)]
    logger.warning("%s: %s", exc.kind, exc)
    return GraphQLError(
        str(exc),
        original_error=exc,
        extensions={"code": exc.kind, "causes": causes},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "message": "An unexpected error occurred. Please try again later.",
            },
        )
