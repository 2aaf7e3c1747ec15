"""Tests for the persisted ledger."""

from dataclasses import replace

from calorie_tracker.domain.models import (
    MealEntry,
    MealSource,
    Profile,
    build_meal_entry,
    compute_progress,
)
from calorie_tracker.errors import PersistenceError
from calorie_tracker.services.ledger import MEALS_KEY, PROFILE_KEY, Ledger
from tests.conftest import FIXED_NOW, IMAGE, InMemoryStateStore


def _entry(name: str = "Rice", calories: int = 200) -> MealEntry:
    return build_meal_entry(name, calories, MealSource.MANUAL, FIXED_NOW)


def test_append_flushes_full_list_in_insertion_order() -> None:
    store = InMemoryStateStore()
    ledger = Ledger(store)

    ledger.append(_entry("Breakfast"))
    ledger.append(replace(_entry("Lunch"), id="2"))

    assert [meal.name for meal in ledger.meals] == ["Breakfast", "Lunch"]
    assert [record["name"] for record in store.values[MEALS_KEY]] == [
        "Breakfast",
        "Lunch",
    ]
    assert store.writes == [MEALS_KEY, MEALS_KEY]


def test_append_bumps_colliding_ids() -> None:
    ledger = Ledger(InMemoryStateStore())

    first = ledger.append(_entry("A"))
    second = ledger.append(_entry("B"))
    third = ledger.append(_entry("C"))

    assert second.id == str(int(first.id) + 1)
    assert third.id == str(int(first.id) + 2)
    assert len({first.id, second.id, third.id}) == 3


def test_reset_persists_empty_list() -> None:
    store = InMemoryStateStore()
    ledger = Ledger(store)
    ledger.append(_entry())

    ledger.reset()

    assert ledger.meals == []
    assert store.values[MEALS_KEY] == []


def test_load_round_trips_profile_and_photo_entries() -> None:
    store = InMemoryStateStore()
    ledger = Ledger(store)
    profile = Profile(name="Ana", weight=62.5, height=165, age=31, daily_goal=1800)
    ledger.save_profile(profile)
    ledger.append(
        build_meal_entry("Salad", 300, MealSource.AI_ESTIMATED, FIXED_NOW, IMAGE)
    )

    restored = Ledger(store)
    restored.load()

    assert restored.profile == profile
    assert restored.meals == ledger.meals
    assert restored.meals[0].image_reference == IMAGE


def test_load_treats_corrupt_records_as_absent() -> None:
    store = InMemoryStateStore(
        values={PROFILE_KEY: {"name": "Ana"}, MEALS_KEY: [{"id": "1", "calories": "x"}]}
    )
    ledger = Ledger(store)

    ledger.load()

    assert ledger.profile is None
    assert ledger.meals == []


def test_load_discards_profile_with_non_positive_goal() -> None:
    record = {"name": "Ana", "weight": 60, "height": 165, "age": 30, "dailyGoal": 0}
    ledger = Ledger(InMemoryStateStore(values={PROFILE_KEY: record}))

    ledger.load()

    assert ledger.profile is None
    assert compute_progress(ledger.meals, ledger.profile).goal == 2000


def test_load_treats_store_failures_as_absent() -> None:
    class BrokenStore(InMemoryStateStore):
        def read(self, key: str) -> object | None:
            raise PersistenceError("disk on fire")

    ledger = Ledger(BrokenStore())

    ledger.load()

    assert ledger.profile is None
    assert ledger.meals == []


def test_compute_progress_caps_percent_and_floors_remaining() -> None:
    meals = [_entry(calories=1500), _entry(calories=900)]

    progress = compute_progress(meals, profile=None)

    assert progress.goal == 2000
    assert progress.consumed == 2400
    assert progress.percent == 100.0
    assert progress.remaining == 0
    assert progress.meal_count == 2


def test_compute_progress_uses_profile_goal() -> None:
    profile = Profile(name="Ana", weight=60, height=160, age=30, daily_goal=1600)

    progress = compute_progress([_entry(calories=400)], profile)

    assert progress.goal == 1600
    assert progress.percent == 25.0
    assert progress.remaining == 1200
