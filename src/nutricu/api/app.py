"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from nutricu.api.mixtures import router as mixtures_router
from nutricu.api.patients import router as patients_router
from nutricu.app_logging import configure_logging
from nutricu.containers import AppContainer
from nutricu.domain.errors import (
    MixtureNameExistsError,
    MixtureNotFoundError,
    NutricuError,
    PatientExistsError,
    PatientNotFoundError,
    UnsupportedLanguageError,
)

_ERROR_STATUS: dict[type[NutricuError], int] = {
    PatientExistsError: status.HTTP_409_CONFLICT,
    MixtureNameExistsError: status.HTTP_409_CONFLICT,
    PatientNotFoundError: status.HTTP_404_NOT_FOUND,
    MixtureNotFoundError: status.HTTP_404_NOT_FOUND,
    UnsupportedLanguageError: status.HTTP_400_BAD_REQUEST,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if app.state.container.settings.seed_default_mixtures:
            try:
                app.state.container.mixture_service.seed_defaults()
            except Exception:
                logger.exception("Failed to seed default mixtures")
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(patients_router)
    app.include_router(mixtures_router)

    @app.exception_handler(NutricuError)
    async def handle_domain_error(request: Request, exc: NutricuError) -> JSONResponse:
        status_code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
        logger.info("Request failed: path=%s error=%s", request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
