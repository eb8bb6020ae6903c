"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date

import pytest

from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.services.entry_form import SuggestionApiClient
from calorie_tracker.services.suggestions import (
    CalorieSuggestionService,
    CompletionClient,
)
from calorie_tracker.services.tracker import TrackerStorage, TrackerStore

TODAY = date(2026, 10, 19)


@dataclass
class InMemoryStorage(TrackerStorage):
    """In-memory tracker storage that records every write."""

    document: str | None = None
    writes: list[str] = field(default_factory=list)

    def read(self) -> str | None:
        return self.document

    def write(self, document: str) -> None:
        self.document = document
        self.writes.append(document)


@dataclass
class FakeCompletionClient(CompletionClient):
    """Fake completion client returning fixed model text."""

    output_text: str = '{"calories": 140, "notes": "approx for 2 large eggs"}'
    calls: list[dict[str, object]] = field(default_factory=list)

    async def complete(
        self,
        *,
        model: str,
        instructions: str,
        input_text: str,
        max_output_tokens: int,
    ) -> str:
        self.calls.append(
            {
                "model": model,
                "instructions": instructions,
                "input_text": input_text,
                "max_output_tokens": max_output_tokens,
            }
        )
        return self.output_text


class UpstreamError(Exception):
    """Error shaped like an OpenAI API status error."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.body = {"message": message, "code": code}


@dataclass
class FailingCompletionClient(CompletionClient):
    """Fake completion client that raises a fixed error."""

    error: Exception

    async def complete(
        self,
        *,
        model: str,
        instructions: str,
        input_text: str,
        max_output_tokens: int,
    ) -> str:
        raise self.error


@dataclass
class FakeSuggestionApiClient(SuggestionApiClient):
    """Fake suggestion endpoint client."""

    payload: dict[str, object] = field(
        default_factory=lambda: {"calories": 140, "notes": "approx for 2 large eggs"}
    )
    error: Exception | None = None
    texts: list[str] = field(default_factory=list)

    async def suggest(self, text: str) -> dict[str, object]:
        self.texts.append(text)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="openai-key", node_env="development")


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def store(storage: InMemoryStorage) -> TrackerStore:
    return TrackerStore.load(storage, clock=lambda: TODAY)


@pytest.fixture
def completion_client() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
def container(
    settings: Settings, completion_client: FakeCompletionClient
) -> AppContainer:
    suggestion_service = CalorieSuggestionService(
        client=completion_client,
        model=settings.openai_model,
        max_output_tokens=settings.openai_max_output_tokens,
        production=settings.is_production,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        suggestion_service=suggestion_service,
        close_resources=close_resources,
    )
