"""Domain models for profiles and the daily meal ledger."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum

DEFAULT_DAILY_GOAL = 2000


class MealSource(StrEnum):
    """How a meal entry was created."""

    MANUAL = "manual"
    AI_ESTIMATED = "ai-estimated"


@dataclass(frozen=True)
class Profile:
    """The single user profile."""

    name: str
    weight: float
    height: float
    age: int
    daily_goal: int

    def __post_init__(self) -> None:
        if self.daily_goal <= 0:
            raise ValueError("daily goal must be positive")


@dataclass(frozen=True)
class MealEntry:
    """A meal logged for the day. Never mutated after creation."""

    id: str
    name: str
    calories: int
    time: str
    logged_on: date
    source: MealSource
    image_reference: str | None = None

    def __post_init__(self) -> None:
        if self.calories < 0:
            raise ValueError("calories must be non-negative")
        if self.source is MealSource.AI_ESTIMATED and not self.image_reference:
            raise ValueError("AI-estimated meals require an image reference")


@dataclass(frozen=True)
class DailyProgress:
    """Aggregate calories consumed against the daily goal."""

    consumed: int
    goal: int
    percent: float
    remaining: int
    meal_count: int


def build_meal_entry(
    name: str,
    calories: int,
    source: MealSource,
    now: datetime,
    image_reference: str | None = None,
) -> MealEntry:
    """Create an entry stamped with an id and clock time derived from now."""
    return MealEntry(
        id=str(int(now.timestamp() * 1000)),
        name=name,
        calories=calories,
        time=now.strftime("%H:%M"),
        logged_on=now.date(),
        source=source,
        image_reference=image_reference,
    )


def compute_progress(
    meals: list[MealEntry],
    profile: Profile | None,
    default_goal: int = DEFAULT_DAILY_GOAL,
) -> DailyProgress:
    """Sum the ledger and compare it with the profile goal."""
    consumed = sum(meal.calories for meal in meals)
    goal = profile.daily_goal if profile else default_goal
    return DailyProgress(
        consumed=consumed,
        goal=goal,
        percent=min(consumed * 100 / goal, 100.0),
        remaining=max(goal - consumed, 0),
        meal_count=len(meals),
    )
