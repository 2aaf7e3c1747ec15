"""Vision client interface and the meal estimate instruction."""

from typing import Protocol

MEAL_ESTIMATE_PROMPT = """Analyze this meal photo and return ONLY valid JSON in this format:
{{
  "mealName": "descriptive name of the meal in {language}",
  "calories": estimated calories (a single number only, no text)
}}

Be precise in the calorie estimate, considering the visible portions. \
Return ONLY the JSON, with no additional text."""


def meal_estimate_prompt(language: str) -> str:
    """Return the fixed estimate instruction for the given meal-name language."""
    return MEAL_ESTIMATE_PROMPT.format(language=language)


class VisionClient(Protocol):
    """Interface for a multimodal completion endpoint."""

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        prompt: str,
        image_data_url: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """Return the raw text the model produced for the prompt and image."""
