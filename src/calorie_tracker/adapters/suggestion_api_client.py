"""HTTP client for the calorie suggestion endpoint."""

from dataclasses import dataclass

import httpx

from calorie_tracker.services.entry_form import (
    SuggestionApiClient,
    SuggestionRequestError,
)


@dataclass
class HttpxSuggestionApiClient(SuggestionApiClient):
    """Suggestion client implemented with httpx."""

    url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, url: str) -> "HttpxSuggestionApiClient":
        """Create a suggestion client with a managed httpx session."""
        return cls(url=url, http_client=httpx.AsyncClient())

    async def suggest(self, text: str) -> dict[str, object]:
        """POST ingredient text and return the decoded suggestion."""
        response = await self.http_client.post(self.url, json={"text": text})
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        if not response.is_success:
            error = payload.get("error")
            raise SuggestionRequestError(
                error if isinstance(error, str) and error else "Request failed"
            )
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
