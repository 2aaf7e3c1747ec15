"""Validated user input for the profile and manual meal forms."""

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from calorie_tracker.domain.estimates import coerce_calories
from calorie_tracker.domain.models import Profile


class ProfileForm(BaseModel):
    """Profile form values. Numeric strings are accepted."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(min_length=1)
    weight: float = Field(gt=0, allow_inf_nan=False)
    height: float = Field(gt=0, allow_inf_nan=False)
    age: int = Field(gt=0)
    daily_goal: int = Field(gt=0, alias="dailyGoal")

    def to_profile(self) -> Profile:
        return Profile(
            name=self.name,
            weight=self.weight,
            height=self.height,
            age=self.age,
            daily_goal=self.daily_goal,
        )


class ManualMealForm(BaseModel):
    """Manual meal form values."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    calories: int = Field(ge=0)

    @field_validator("calories", mode="before")
    @classmethod
    def _calories_as_int(cls, value: object) -> int:
        return coerce_calories(value)


def describe_validation_error(exc: ValidationError) -> str:
    """Return the first validation error as "field: message"."""
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"])
    return f"{location}: {error['msg']}" if location else error["msg"]
