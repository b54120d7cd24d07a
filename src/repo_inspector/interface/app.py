"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from strawberry.fastapi import GraphQLRouter

from repo_inspector.infrastructure.config import get_settings
from repo_inspector.interface.dependencies import get_context, shutdown, startup
from repo_inspector.interface.error_handlers import register_error_handlers
from repo_inspector.interface.schema import schema


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup / shutdown of shared resources."""
    await startup()
    yield
    await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title="Repo Inspector",
        version="1.0.0",
        description=(
            "GraphQL API listing a user's GitHub repositories and aggregating "
            "per-repository details: size, visibility, root file count, first "
            "YAML file content, and active webhooks."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    graphql_app: GraphQLRouter = GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if settings.graphiql else None,
    )
    app.include_router(graphql_app, prefix="/graphql")

    # ── Health check (simple liveness probe) ────────────────────────────

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
