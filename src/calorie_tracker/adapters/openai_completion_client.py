"""OpenAI Responses API client for calorie estimates."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from calorie_tracker.services.suggestions import CompletionClient


@dataclass
class OpenAICompletionClient(CompletionClient):
    """Completion client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(
        cls, api_key: str, timeout_seconds: float = 15.0
    ) -> "OpenAICompletionClient":
        """Create a client that fails fast: one attempt, bounded time."""
        return cls(
            client=AsyncOpenAI(
                api_key=api_key, max_retries=0, timeout=timeout_seconds
            )
        )

    async def complete(
        self,
        *,
        model: str,
        instructions: str,
        input_text: str,
        max_output_tokens: int,
    ) -> str:
        """Call OpenAI Responses API and return its text output."""
        response = await self.client.responses.create(
            model=model,
            instructions=instructions,
            input=input_text,
            max_output_tokens=max_output_tokens,
        )
        return response.output_text or ""

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
