"""Models for photo-derived calorie estimates."""

import math
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

_DECIMAL_PATTERN = re.compile(r"\d+(?:\.\d+)?")


def coerce_calories(value: object) -> int:
    """Convert a calorie value to a non-negative integer, truncating fractions.

    Accepts ints, finite floats and strings that are a plain decimal number.
    Raises ValueError for anything else, including text such as "about 300".
    """
    if isinstance(value, bool):
        raise ValueError("calories must be a number")
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not math.isfinite(value) or value < 0:
            raise ValueError("calories must be a finite non-negative number")
        number = int(value)
    elif isinstance(value, str) and _DECIMAL_PATTERN.fullmatch(value.strip()):
        number = int(value.strip().split(".", maxsplit=1)[0])
    else:
        raise ValueError(f"calories is not numeric: {value!r}")
    if number < 0:
        raise ValueError("calories must be non-negative")
    return number


class MealEstimate(BaseModel):
    """Structured meal name and calorie estimate."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    meal_name: str = Field(alias="mealName", min_length=1)
    calories: int = Field(ge=0)

    @field_validator("meal_name", mode="before")
    @classmethod
    def _meal_name_as_text(cls, value: object) -> str:
        if isinstance(value, bool) or not isinstance(value, str | int | float):
            raise ValueError("mealName must be text")
        return str(value).strip()

    @field_validator("calories", mode="before")
    @classmethod
    def _calories_as_int(cls, value: object) -> int:
        return coerce_calories(value)
