"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import HTMLResponse, JSONResponse

from calorie_tracker.api.page import PAGE_HTML
from calorie_tracker.api.schemas import ImageRequest, ManualMealRequest, ProfileRequest
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.models import DailyProgress
from calorie_tracker.errors import (
    AnalysisInProgressError,
    FormValidationError,
    MealAnalysisError,
    MissingImageError,
    PersistenceError,
    StaleAnalysisError,
)
from calorie_tracker.services.ledger import entry_to_record, profile_to_record
from calorie_tracker.services.tracker import TrackerService


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.container.tracker_service.load()
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(PersistenceError)
    async def persistence_error(request: Request, exc: PersistenceError) -> JSONResponse:
        logger.error("Failed to persist tracker state", exc_info=exc)
        return _error_response(
            request.app.state.container,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to save changes",
            exc,
        )

    @app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        """Tracker UI."""
        return HTMLResponse(PAGE_HTML)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/analyze-meal", response_model=None)
    async def analyze_meal(
        payload: ImageRequest, request: Request
    ) -> dict[str, object] | JSONResponse:
        """Estimate a meal name and calories from a photo data URI."""
        state_container: AppContainer = request.app.state.container
        try:
            estimate = await state_container.estimation_service.estimate(payload.image)
        except MissingImageError as exc:
            return _error_response(
                state_container,
                status.HTTP_400_BAD_REQUEST,
                "Image not provided",
                exc,
            )
        except MealAnalysisError as exc:
            logger.exception("Meal analysis failed")
            return _error_response(
                state_container,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Failed to analyze image",
                exc,
            )
        return estimate.model_dump(by_alias=True)

    @app.get("/api/state")
    async def get_state(request: Request) -> dict[str, object]:
        """Return the profile, today's meals and progress."""
        state_container: AppContainer = request.app.state.container
        return _state_payload(state_container.tracker_service)

    @app.put("/api/profile", response_model=None)
    async def save_profile(
        payload: ProfileRequest, request: Request
    ) -> dict[str, object] | JSONResponse:
        """Replace the profile."""
        state_container: AppContainer = request.app.state.container
        try:
            profile = state_container.tracker_service.save_profile(
                payload.model_dump(by_alias=True)
            )
        except FormValidationError as exc:
            return _error_response(
                state_container, status.HTTP_400_BAD_REQUEST, str(exc), exc
            )
        return {"profile": profile_to_record(profile)}

    @app.post("/api/meals", status_code=status.HTTP_201_CREATED, response_model=None)
    async def add_manual_meal(
        payload: ManualMealRequest, request: Request
    ) -> dict[str, object] | JSONResponse:
        """Log a manually entered meal."""
        state_container: AppContainer = request.app.state.container
        try:
            entry = state_container.tracker_service.add_manual_meal(
                payload.name, payload.calories
            )
        except FormValidationError as exc:
            return _error_response(
                state_container, status.HTTP_400_BAD_REQUEST, str(exc), exc
            )
        return {"meal": entry_to_record(entry)}

    @app.post(
        "/api/meals/photo", status_code=status.HTTP_201_CREATED, response_model=None
    )
    async def add_photo_meal(
        payload: ImageRequest, request: Request
    ) -> dict[str, object] | JSONResponse:
        """Analyze a meal photo and log the estimate."""
        state_container: AppContainer = request.app.state.container
        try:
            entry = await state_container.tracker_service.add_photo_meal(payload.image)
        except MissingImageError as exc:
            return _error_response(
                state_container, status.HTTP_400_BAD_REQUEST, str(exc), exc
            )
        except (AnalysisInProgressError, StaleAnalysisError) as exc:
            return _error_response(
                state_container, status.HTTP_409_CONFLICT, str(exc), exc
            )
        except MealAnalysisError as exc:
            logger.exception("Meal photo analysis failed")
            return _error_response(
                state_container,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Failed to analyze photo. Try adding it manually.",
                exc,
            )
        return {"meal": entry_to_record(entry)}

    @app.post("/api/day/reset")
    async def reset_day(request: Request) -> dict[str, object]:
        """Clear today's meals."""
        state_container: AppContainer = request.app.state.container
        state_container.tracker_service.reset_day()
        return _state_payload(state_container.tracker_service)

    return app


def _state_payload(tracker: TrackerService) -> dict[str, object]:
    profile = tracker.profile
    return {
        "profile": profile_to_record(profile) if profile else None,
        "meals": [entry_to_record(meal) for meal in tracker.meals],
        "progress": _progress_payload(tracker.progress()),
        "greeting": tracker.greeting(),
        "analyzing": tracker.analyzing,
    }


def _progress_payload(progress: DailyProgress) -> dict[str, object]:
    return {
        "consumed": progress.consumed,
        "goal": progress.goal,
        "percent": progress.percent,
        "remaining": progress.remaining,
        "mealCount": progress.meal_count,
    }


def _error_response(
    state_container: AppContainer, status_code: int, message: str, exc: Exception
) -> JSONResponse:
    """Return an error body, with debug detail when running locally."""
    content: dict[str, str] = {"error": message}
    if state_container.settings.environment == "local":
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            content["debug"] = detail
    return JSONResponse(status_code=status_code, content=content)
