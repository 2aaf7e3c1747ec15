"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.services.estimation import MealEstimationService
from calorie_tracker.services.ledger import Ledger, StateStore
from calorie_tracker.services.tracker import TrackerService
from calorie_tracker.services.vision import VisionClient

IMAGE = "data:image/png;base64,AAA"
FIXED_NOW = datetime(2026, 10, 17, 12, 30, tzinfo=ZoneInfo("America/Sao_Paulo"))


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning fixed text or raising a fixed error."""

    text: str = '{"mealName": "Grilled chicken with rice", "calories": 520}'
    error: Exception | None = None
    release: asyncio.Event | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        prompt: str,
        image_data_url: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        self.calls.append(
            {
                "model": model,
                "prompt": prompt,
                "image_data_url": image_data_url,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        if self.release is not None:
            await self.release.wait()
        if self.error is not None:
            raise self.error
        return self.text


@dataclass
class InMemoryStateStore(StateStore):
    """In-memory state store that records every write."""

    values: dict[str, object] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)

    def read(self, key: str) -> object | None:
        return self.values.get(key)

    def write(self, key: str, value: object) -> None:
        self.writes.append(key)
        self.values[key] = value


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="openai-key", environment="test")


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def state_store() -> InMemoryStateStore:
    return InMemoryStateStore()


@pytest.fixture
def estimation_service(vision_client: FakeVisionClient) -> MealEstimationService:
    return MealEstimationService(client=vision_client, model="gpt-4o")


@pytest.fixture
def tracker_service(
    state_store: InMemoryStateStore, estimation_service: MealEstimationService
) -> TrackerService:
    return TrackerService(
        ledger=Ledger(state_store),
        estimation_service=estimation_service,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def container(
    settings: Settings,
    estimation_service: MealEstimationService,
    tracker_service: TrackerService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        estimation_service=estimation_service,
        tracker_service=tracker_service,
        close_resources=close_resources,
    )
