"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

from supabase import create_client

from calorie_tracker.adapters.json_file_state_store import JsonFileStateStore
from calorie_tracker.adapters.openai_vision_client import OpenAIVisionClient
from calorie_tracker.adapters.supabase_state_store import SupabaseStateStore
from calorie_tracker.config import Settings
from calorie_tracker.services.estimation import MealEstimationService
from calorie_tracker.services.ledger import Ledger, StateStore
from calorie_tracker.services.tracker import TrackerService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    estimation_service: MealEstimationService
    tracker_service: TrackerService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    vision_client = OpenAIVisionClient.create(
        resolved_settings.openai_api_key,
        timeout_seconds=resolved_settings.openai_timeout_seconds,
    )
    estimation_service = MealEstimationService(
        client=vision_client,
        model=resolved_settings.openai_model,
        max_tokens=resolved_settings.openai_max_tokens,
        temperature=resolved_settings.openai_temperature,
        timeout_seconds=resolved_settings.openai_timeout_seconds,
        language=resolved_settings.meal_name_language,
    )
    timezone = ZoneInfo(resolved_settings.timezone)
    tracker_service = TrackerService(
        ledger=Ledger(build_state_store(resolved_settings)),
        estimation_service=estimation_service,
        default_daily_goal=resolved_settings.default_daily_goal,
        clock=lambda: datetime.now(tz=timezone),
    )

    async def close_resources() -> None:
        await vision_client.close()

    return AppContainer(
        settings=resolved_settings,
        estimation_service=estimation_service,
        tracker_service=tracker_service,
        close_resources=close_resources,
    )


def build_state_store(settings: Settings) -> StateStore:
    """Select the configured persistence backend."""
    if settings.state_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_KEY are required "
                "for the supabase state backend"
            )
        return SupabaseStateStore(
            create_client(settings.supabase_url, settings.supabase_service_key)
        )
    return JsonFileStateStore(Path(settings.state_dir))
