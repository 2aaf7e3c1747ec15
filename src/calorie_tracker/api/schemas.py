"""Pydantic models for API request payloads.

Form fields are accepted loosely here and validated by the tracker service so
invalid values produce a 400 with an error message rather than a 422.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

FormValue = str | int | float | None


class ImageRequest(BaseModel):
    """Meal photo payload as a base64 data URI."""

    image: str | None = None

    @field_validator("image", mode="before")
    @classmethod
    def _non_text_as_missing(cls, value: object) -> object:
        return value if isinstance(value, str) else None


class ProfileRequest(BaseModel):
    """Profile form payload."""

    model_config = ConfigDict(populate_by_name=True)

    name: FormValue = None
    weight: FormValue = None
    height: FormValue = None
    age: FormValue = None
    daily_goal: FormValue = Field(default=None, alias="dailyGoal")


class ManualMealRequest(BaseModel):
    """Manual meal form payload."""

    name: FormValue = None
    calories: FormValue = None
