"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from photoshoot.api.photoshoot import router as photoshoot_router
from photoshoot.api.ui import router as ui_router
from photoshoot.app_logging import configure_logging
from photoshoot.containers import AppContainer
from photoshoot.domain.errors import (
    GenerationInProgressError,
    InputValidationError,
    PersistenceError,
    SessionNotFoundError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Photo shoot studio started: provider=%s history=%s",
            app.state.container.settings.ai_provider,
            app.state.container.settings.history_backend,
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(photoshoot_router)
    app.include_router(ui_router)

    @app.exception_handler(InputValidationError)
    async def input_error(_: Request, exc: InputValidationError) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, exc)

    @app.exception_handler(GenerationInProgressError)
    async def busy_error(_: Request, exc: GenerationInProgressError) -> JSONResponse:
        return _error_response(status.HTTP_409_CONFLICT, exc)

    @app.exception_handler(SessionNotFoundError)
    async def not_found_error(_: Request, exc: SessionNotFoundError) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, exc)

    @app.exception_handler(PersistenceError)
    async def persistence_error(_: Request, exc: PersistenceError) -> JSONResponse:
        return _error_response(status.HTTP_507_INSUFFICIENT_STORAGE, exc)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})
