"""Persisted profile and daily meal ledger."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Protocol, TypeVar

from calorie_tracker.domain.models import MealEntry, MealSource, Profile
from calorie_tracker.errors import PersistenceError

logger = logging.getLogger(__name__)

PROFILE_KEY = "calorieTrackerProfile"
MEALS_KEY = "calorieTrackerMeals"

T = TypeVar("T")


class StateStore(Protocol):
    """Key-value storage for whole state records."""

    def read(self, key: str) -> object | None:
        """Return the stored value for a key, or None when absent."""

    def write(self, key: str, value: object) -> None:
        """Overwrite the value stored under a key."""


@dataclass
class Ledger:
    """The profile and today's meals, flushed to the store on every change."""

    store: StateStore
    profile: Profile | None = None
    meals: list[MealEntry] = field(default_factory=list)

    def load(self) -> None:
        """Load persisted state, treating unreadable records as absent."""
        self.profile = self._load_record(PROFILE_KEY, _profile_from_record)
        self.meals = self._load_record(MEALS_KEY, _meals_from_record) or []

    def save_profile(self, profile: Profile) -> Profile:
        """Replace the profile wholesale."""
        self.store.write(PROFILE_KEY, profile_to_record(profile))
        self.profile = profile
        return profile

    def append(self, entry: MealEntry) -> MealEntry:
        """Append an entry, bumping its id if it collides with an existing one."""
        taken = {meal.id for meal in self.meals}
        unique = _with_unique_id(entry, taken)
        meals = [*self.meals, unique]
        self.store.write(MEALS_KEY, [entry_to_record(meal) for meal in meals])
        self.meals = meals
        return unique

    def reset(self) -> None:
        """Remove every meal entry."""
        self.store.write(MEALS_KEY, [])
        self.meals = []

    def _load_record(self, key: str, decode: Callable[[object], T]) -> T | None:
        try:
            raw = self.store.read(key)
            return None if raw is None else decode(raw)
        except (PersistenceError, KeyError, TypeError, ValueError):
            logger.warning(
                "Ignoring unreadable stored state", exc_info=True, extra={"key": key}
            )
            return None


def profile_to_record(profile: Profile) -> dict[str, object]:
    return {
        "name": profile.name,
        "weight": profile.weight,
        "height": profile.height,
        "age": profile.age,
        "dailyGoal": profile.daily_goal,
    }


def entry_to_record(entry: MealEntry) -> dict[str, object]:
    record: dict[str, object] = {
        "id": entry.id,
        "name": entry.name,
        "calories": entry.calories,
        "time": entry.time,
        "loggedOn": entry.logged_on.isoformat(),
        "sourceTag": entry.source.value,
    }
    if entry.image_reference is not None:
        record["imageReference"] = entry.image_reference
    return record


def _profile_from_record(raw: object) -> Profile:
    if not isinstance(raw, dict):
        raise TypeError("profile record must be an object")
    return Profile(
        name=str(raw["name"]),
        weight=float(raw["weight"]),
        height=float(raw["height"]),
        age=int(raw["age"]),
        daily_goal=int(raw["dailyGoal"]),
    )


def _meals_from_record(raw: object) -> list[MealEntry]:
    if not isinstance(raw, list):
        raise TypeError("meals record must be a list")
    return [_entry_from_record(item) for item in raw]


def _entry_from_record(raw: dict[str, object]) -> MealEntry:
    return MealEntry(
        id=str(raw["id"]),
        name=str(raw["name"]),
        calories=int(raw["calories"]),
        time=str(raw["time"]),
        logged_on=date.fromisoformat(str(raw["loggedOn"])),
        source=MealSource(raw["sourceTag"]),
        image_reference=raw.get("imageReference"),
    )


def _with_unique_id(entry: MealEntry, taken: set[str]) -> MealEntry:
    if entry.id not in taken:
        return entry
    candidate = int(entry.id) if entry.id.isdigit() else 0
    while str(candidate) in taken:
        candidate += 1
    return replace(entry, id=str(candidate))
