"""
fragql HTTP service.

Serves the compiled blog schema:
- POST /graphql: run one operation (GraphQL document or structured form)
- GET /schema: SDL document
- GET /schema/shape: JSON shape of the compiled types
- GET /health

Usage:
    uvicorn fragql.api.app:create_app --factory --port 8080
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..blog import build_registry
from ..config import Settings
from ..execution import ContextFactory, Executor
from ..main import build_schema
from ..schema import TypeRegistry
from ..store import PostStore, create_store
from .routes import router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the record store and wire the executor."""
    settings: Settings = app.state.settings
    store: PostStore = app.state.store or create_store(settings)
    await store.initialize()

    app.state.store = store
    app.state.executor = Executor(app.state.schema, ContextFactory(store))
    logger.info(
        "fragql ready",
        extra={"fingerprint": app.state.schema.fingerprint, "store_backend": settings.store_backend},
    )

    yield

    await store.close()
    logger.info("fragql stopped")


def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[TypeRegistry] = None,
    store: Optional[PostStore] = None,
) -> FastAPI:
    """Create the fragql FastAPI app.

    The schema is compiled here, so registration and validation errors
    surface before the server accepts connections.

    Args:
        settings: Settings (default: loaded from the environment)
        registry: Fragment registry (default: the blog fragments)
        store: Record store (default: chosen by settings.store_backend)
    """
    settings = settings or Settings()
    registry = registry or build_registry()
    schema = build_schema(registry, settings.sdl_path)

    app = FastAPI(
        title="fragql",
        description="GraphQL schema composed from independently declared fragments",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.schema = schema
    app.state.store = store
    app.state.executor = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    return app
