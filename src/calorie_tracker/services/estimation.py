"""Meal photo estimation: vision call followed by strict parsing."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime

from calorie_tracker.domain.estimates import MealEstimate
from calorie_tracker.domain.models import MealEntry, MealSource, build_meal_entry
from calorie_tracker.errors import (
    MealAnalysisError,
    MissingImageError,
    ParseError,
    UpstreamError,
)
from calorie_tracker.services.estimate_parser import parse_estimate
from calorie_tracker.services.vision import VisionClient, meal_estimate_prompt

logger = logging.getLogger(__name__)


@dataclass
class MealEstimationService:
    """Turns a meal photo into an estimate or a single analysis failure."""

    client: VisionClient
    model: str
    max_tokens: int = 300
    temperature: float = 0.3
    timeout_seconds: float = 30.0
    language: str = "Brazilian Portuguese"

    async def estimate(self, image: str | None) -> MealEstimate:
        """Estimate a meal from a data URI image.

        Raises MissingImageError before any network call when the image is
        blank. Upstream and parse failures both surface as MealAnalysisError.
        """
        if not image or not image.strip():
            raise MissingImageError("Image not provided")
        try:
            raw_text = await self._complete(image)
            return parse_estimate(raw_text)
        except UpstreamError as exc:
            logger.warning(
                "Vision request failed", extra={"model": self.model, "reason": str(exc)}
            )
            raise MealAnalysisError("Could not analyze meal") from exc
        except ParseError as exc:
            logger.warning(
                "Vision output could not be parsed",
                extra={"model": self.model, "reason": str(exc)},
            )
            raise MealAnalysisError("Could not analyze meal") from exc

    async def create_entry(
        self, image: str | None, now: datetime | None = None
    ) -> MealEntry:
        """Estimate a meal and build an AI-estimated ledger entry for it."""
        estimate = await self.estimate(image)
        return build_meal_entry(
            name=estimate.meal_name,
            calories=estimate.calories,
            source=MealSource.AI_ESTIMATED,
            now=now or datetime.now().astimezone(),
            image_reference=image,
        )

    async def _complete(self, image: str) -> str:
        try:
            return await asyncio.wait_for(
                self.client.complete(
                    model=self.model,
                    prompt=meal_estimate_prompt(self.language),
                    image_data_url=image,
                    max_tokens=self.max_tokens,
                    temperature=self.temperature,
                ),
                timeout=self.timeout_seconds,
            )
        except TimeoutError as exc:
            raise UpstreamError(
                f"Vision request timed out after {self.timeout_seconds:g}s"
            ) from exc
