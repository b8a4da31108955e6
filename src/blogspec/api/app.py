"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ..bootstrap import build_container
from ..persistence import seed_demo_data
from ..primitives.exceptions import (
    BlogSpecError,
    EntityNotFoundError,
    StorageUnavailableError,
)
from ..specifications.exceptions import SpecificationError
from .middleware import CorrelationIdMiddleware
from .routes import router

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from ..bootstrap import Container

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    container: Container = app.state.container
    if container.config.create_schema:
        await container.database.create_schema()
    if container.config.seed_demo:
        await seed_demo_data(container.database)
    logger.info("blogspec started")
    try:
        yield
    finally:
        await container.database.dispose()
        logger.info("blogspec stopped")


async def _entity_not_found(_request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": "NOT_FOUND", "message": str(exc)},
    )


async def _specification_error(_request: Request, exc: SpecificationError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=exc.to_dict())


async def _storage_unavailable(_request: Request, exc: Exception) -> JSONResponse:
    logger.error("Storage unavailable: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"error": "STORAGE_UNAVAILABLE", "message": "Storage is unavailable"},
    )


async def _internal_error(_request: Request, exc: Exception) -> JSONResponse:
    logger.error("%s: %s", type(exc).__name__, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": type(exc).__name__, "message": str(exc)},
    )


def create_app(container: Container | None = None) -> FastAPI:
    """Build the FastAPI app around *container* (or one built from the environment)."""
    app = FastAPI(title="blogspec", lifespan=lifespan)
    app.state.container = container or build_container()

    app.add_middleware(CorrelationIdMiddleware)
    app.add_exception_handler(EntityNotFoundError, _entity_not_found)
    app.add_exception_handler(SpecificationError, _specification_error)  # type: ignore[arg-type]
    app.add_exception_handler(StorageUnavailableError, _storage_unavailable)
    app.add_exception_handler(BlogSpecError, _internal_error)

    app.include_router(router)
    return app
