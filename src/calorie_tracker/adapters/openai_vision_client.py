"""OpenAI Chat Completions client for meal photo estimation."""

from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from calorie_tracker.errors import UpstreamError
from calorie_tracker.services.vision import VisionClient


@dataclass
class OpenAIVisionClient(VisionClient):
    """Vision client backed by the OpenAI Chat Completions API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str, timeout_seconds: float) -> "OpenAIVisionClient":
        """Create a client that makes exactly one attempt per request."""
        return cls(
            client=AsyncOpenAI(
                api_key=api_key, timeout=timeout_seconds, max_retries=0
            )
        )

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        prompt: str,
        image_data_url: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """Send the prompt and image, returning the model's raw text."""
        try:
            response = await self.client.chat.completions.create(
                model=model,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": prompt},
                            {"type": "image_url", "image_url": {"url": image_data_url}},
                        ],
                    }
                ],
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except OpenAIError as exc:
            raise UpstreamError(f"OpenAI request failed: {exc}") from exc
        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise UpstreamError("OpenAI returned an empty response")
        return content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
