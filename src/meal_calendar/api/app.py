"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from meal_calendar.api.generation import router as generation_router
from meal_calendar.api.materials import router as materials_router
from meal_calendar.api.meals import router as meals_router
from meal_calendar.api.plans import router as plans_router
from meal_calendar.app_logging import configure_logging
from meal_calendar.containers import AppContainer
from meal_calendar.domain.errors import (
    DuplicatePlanError,
    InsufficientMaterialsError,
    InvalidDateRangeError,
    MealCalendarError,
    NoValidCombinationError,
    NotFoundError,
    PersistenceError,
    UnknownEnumValueError,
)

_UNPROCESSABLE = 422

_ERROR_STATUS: tuple[tuple[type[MealCalendarError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InsufficientMaterialsError, _UNPROCESSABLE),
    (NoValidCombinationError, _UNPROCESSABLE),
    (InvalidDateRangeError, status.HTTP_400_BAD_REQUEST),
    (UnknownEnumValueError, status.HTTP_400_BAD_REQUEST),
    (DuplicatePlanError, status.HTTP_409_CONFLICT),
    (PersistenceError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        if state_container.settings.seed_on_startup:
            try:
                state_container.seed_service.initialize()
            except MealCalendarError:
                logger.exception("Failed to seed default data")
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(materials_router)
    app.include_router(meals_router)
    app.include_router(generation_router)
    app.include_router(plans_router)

    @app.exception_handler(MealCalendarError)
    async def meal_calendar_error(
        request: Request, exc: MealCalendarError
    ) -> JSONResponse:
        status_code = error_status(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("Request failed: path=%s error=%s", request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def error_status(exc: MealCalendarError) -> int:
    """Return the HTTP status for a core error."""
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR
