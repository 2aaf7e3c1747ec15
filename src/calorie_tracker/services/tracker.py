"""Application state operations behind the tracker UI."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime

from pydantic import ValidationError

from calorie_tracker.domain.forms import (
    ManualMealForm,
    ProfileForm,
    describe_validation_error,
)
from calorie_tracker.domain.models import (
    DEFAULT_DAILY_GOAL,
    DailyProgress,
    MealEntry,
    MealSource,
    Profile,
    build_meal_entry,
    compute_progress,
)
from calorie_tracker.errors import (
    AnalysisInProgressError,
    FormValidationError,
    MissingImageError,
    StaleAnalysisError,
)
from calorie_tracker.services.estimation import MealEstimationService
from calorie_tracker.services.ledger import Ledger

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class TrackerService:
    """Owns the profile, the ledger and the pending-analysis flag.

    Every mutation goes through a named operation that flushes the ledger.
    At most one photo analysis runs at a time; a reset while one is running
    bumps the generation so its late result is discarded.
    """

    ledger: Ledger
    estimation_service: MealEstimationService
    default_daily_goal: int = DEFAULT_DAILY_GOAL
    clock: Callable[[], datetime] = field(default=_local_now)
    analyzing: bool = False
    generation: int = 0

    @property
    def profile(self) -> Profile | None:
        return self.ledger.profile

    @property
    def meals(self) -> list[MealEntry]:
        return list(self.ledger.meals)

    def load(self) -> None:
        """Restore persisted state."""
        self.ledger.load()
        logger.info(
            "Loaded tracker state",
            extra={
                "has_profile": self.ledger.profile is not None,
                "meal_count": len(self.ledger.meals),
            },
        )

    def save_profile(self, form: Mapping[str, object]) -> Profile:
        """Validate the profile form and replace the stored profile."""
        try:
            parsed = ProfileForm.model_validate(dict(form))
        except ValidationError as exc:
            raise FormValidationError(describe_validation_error(exc)) from exc
        return self.ledger.save_profile(parsed.to_profile())

    def add_manual_meal(self, name: object, calories: object) -> MealEntry:
        """Validate and log a manually entered meal."""
        if _is_blank(name) or _is_blank(calories):
            raise FormValidationError("Fill in all fields")
        try:
            form = ManualMealForm.model_validate({"name": name, "calories": calories})
        except ValidationError as exc:
            raise FormValidationError(describe_validation_error(exc)) from exc
        entry = build_meal_entry(
            name=form.name,
            calories=form.calories,
            source=MealSource.MANUAL,
            now=self.clock(),
        )
        return self.ledger.append(entry)

    async def add_photo_meal(self, image: str | None) -> MealEntry:
        """Estimate a meal from a photo and log it.

        Raises AnalysisInProgressError while another analysis is pending and
        StaleAnalysisError when the day was reset before the result arrived.
        """
        if not image or not image.strip():
            raise MissingImageError("Select a photo of the meal")
        if self.analyzing:
            raise AnalysisInProgressError("A photo is already being analyzed")
        self.analyzing = True
        started_generation = self.generation
        try:
            entry = await self.estimation_service.create_entry(image, now=self.clock())
        finally:
            self.analyzing = False
        if self.generation != started_generation:
            logger.info("Discarding estimate that finished after a day reset")
            raise StaleAnalysisError("The day was reset while analyzing the photo")
        return self.ledger.append(entry)

    def reset_day(self) -> None:
        """Clear every meal logged today."""
        self.ledger.reset()
        self.generation += 1

    def progress(self) -> DailyProgress:
        return compute_progress(
            self.ledger.meals, self.ledger.profile, self.default_daily_goal
        )

    def greeting(self) -> str:
        if self.ledger.profile is None:
            return "Set up your profile to get started"
        return f"Hello, {self.ledger.profile.name}! 👋"


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
