"""Parse free-form model output into a meal estimate.

Parsing is two separate steps: locate a candidate brace-delimited span, then
decode it strictly. There is no heuristic field extraction when decoding fails.
"""

import json

from pydantic import ValidationError

from calorie_tracker.domain.estimates import MealEstimate
from calorie_tracker.domain.forms import describe_validation_error
from calorie_tracker.errors import MalformedEstimateError, NoStructuredContentError


def find_candidate_span(text: str) -> str | None:
    """Return the span from the first "{" through the last "}".

    Returns None when the text has no opening brace. An opening brace with no
    closing brace after it yields the unterminated tail so decoding rejects it.
    """
    start = text.find("{")
    if start == -1:
        return None
    end = text.rfind("}")
    if end < start:
        return text[start:]
    return text[start : end + 1]


def decode_estimate(span: str) -> dict[str, object]:
    """Strictly decode a candidate span into a JSON object."""
    try:
        decoded = json.loads(span)
    except json.JSONDecodeError as exc:
        raise MalformedEstimateError(f"Malformed estimate: {exc.msg}") from exc
    except (ValueError, RecursionError) as exc:
        raise MalformedEstimateError("Malformed estimate: undecodable value") from exc
    if not isinstance(decoded, dict):
        raise MalformedEstimateError("Malformed estimate: expected a JSON object")
    return decoded


def parse_estimate(text: str) -> MealEstimate:
    """Extract exactly one meal estimate from model output."""
    span = find_candidate_span(text)
    if span is None:
        raise NoStructuredContentError("No structured content found")
    payload = decode_estimate(span)
    try:
        return MealEstimate.model_validate(payload)
    except ValidationError as exc:
        raise MalformedEstimateError(
            f"Malformed estimate: {describe_validation_error(exc)}"
        ) from exc
