"""Tests for the estimate parser."""

import pytest

from calorie_tracker.domain.estimates import coerce_calories
from calorie_tracker.errors import MalformedEstimateError, NoStructuredContentError
from calorie_tracker.services.estimate_parser import (
    decode_estimate,
    find_candidate_span,
    parse_estimate,
)


@pytest.mark.parametrize(
    "text",
    [
        '{"mealName": "Feijoada", "calories": 780}',
        'Here you go: {"mealName": "Feijoada", "calories": 780}',
        'Sure!\n```json\n{"mealName": "Feijoada", "calories": 780}\n```\nEnjoy.',
    ],
)
def test_parse_estimate_extracts_embedded_object(text: str) -> None:
    estimate = parse_estimate(text)

    assert estimate.meal_name == "Feijoada"
    assert estimate.calories == 780


def test_parse_estimate_without_braces_has_no_structured_content() -> None:
    with pytest.raises(NoStructuredContentError):
        parse_estimate("Sorry, I cannot help.")


@pytest.mark.parametrize(
    "text",
    [
        '{"mealName": "Salad", "calories": 300',
        "{mealName: Salad, calories: 300}",
        "[1, 2] and {oops}",
        '{"mealName": "Salad"}',
        '{"calories": 300}',
        '{"mealName": "", "calories": 300}',
        '{"mealName": "Salad", "calories": -5}',
        '{"mealName": "Salad", "calories": null}',
        '{"mealName": "Salad", "calories": true}',
        '{"mealName": "Salad", "calories": ' + "9" * 5000 + "}",
        '{"mealName": "Salad", "nested": ' + "[" * 100000 + "]" * 100000 + "}",
    ],
)
def test_parse_estimate_rejects_malformed_objects(text: str) -> None:
    with pytest.raises(MalformedEstimateError):
        parse_estimate(text)


def test_parse_estimate_rejects_textual_calories() -> None:
    with pytest.raises(MalformedEstimateError):
        parse_estimate('{"mealName": "Salad", "calories": "about 300"}')


def test_parse_estimate_truncates_numeric_calories() -> None:
    assert parse_estimate('{"mealName": "Soup", "calories": 250.9}').calories == 250
    assert parse_estimate('{"mealName": "Soup", "calories": " 410 "}').calories == 410
    assert parse_estimate('{"mealName": "Soup", "calories": "99.5"}').calories == 99


def test_parse_estimate_coerces_meal_name_to_text() -> None:
    estimate = parse_estimate('{"mealName": 7, "calories": 100}')

    assert estimate.meal_name == "7"


def test_find_candidate_span_is_greedy_to_last_brace() -> None:
    text = 'a {"x": {"y": 1}} b } c'

    assert find_candidate_span(text) == '{"x": {"y": 1}} b }'


def test_find_candidate_span_returns_none_without_opening_brace() -> None:
    assert find_candidate_span("no json } here") is None


def test_decode_estimate_requires_object() -> None:
    with pytest.raises(MalformedEstimateError):
        decode_estimate("{")

    assert decode_estimate('{"a": 1}') == {"a": 1}


@pytest.mark.parametrize("value", [0, 520, 520.7, "520", "520.2", 1999.999])
def test_coerce_calories_is_idempotent(value: object) -> None:
    once = coerce_calories(value)

    assert coerce_calories(str(once)) == once


@pytest.mark.parametrize(
    "value", ["about 300", "", "-1", "1e3", float("nan"), float("inf"), None, [300]]
)
def test_coerce_calories_rejects_non_numeric(value: object) -> None:
    with pytest.raises(ValueError):
        coerce_calories(value)
