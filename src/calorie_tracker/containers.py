"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from calorie_tracker.adapters.local_file_storage import LocalFileStorage
from calorie_tracker.adapters.openai_completion_client import OpenAICompletionClient
from calorie_tracker.adapters.suggestion_api_client import HttpxSuggestionApiClient
from calorie_tracker.adapters.supabase_tracker_storage import SupabaseTrackerStorage
from calorie_tracker.config import Settings
from calorie_tracker.domain.tracker import STORAGE_KEY
from calorie_tracker.services.suggestions import CalorieSuggestionService
from calorie_tracker.services.tracker import TrackerStorage, TrackerStore


@dataclass
class AppContainer:
    """Holds server-side dependencies."""

    settings: Settings
    suggestion_service: CalorieSuggestionService | None
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    if not resolved_settings.openai_api_key:

        async def close_nothing() -> None:
            return None

        return AppContainer(
            settings=resolved_settings,
            suggestion_service=None,
            close_resources=close_nothing,
        )

    completion_client = OpenAICompletionClient.create(
        resolved_settings.openai_api_key,
        timeout_seconds=resolved_settings.openai_timeout_seconds,
    )
    suggestion_service = CalorieSuggestionService(
        client=completion_client,
        model=resolved_settings.openai_model,
        max_output_tokens=resolved_settings.openai_max_output_tokens,
        production=resolved_settings.is_production,
    )

    async def close_resources() -> None:
        await completion_client.close()

    return AppContainer(
        settings=resolved_settings,
        suggestion_service=suggestion_service,
        close_resources=close_resources,
    )


def build_tracker_storage(settings: Settings) -> TrackerStorage:
    """Create the persistence port selected in settings."""
    if settings.tracker_storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_KEY are required "
                "for supabase storage"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseTrackerStorage(client=client, key=STORAGE_KEY)
    path = Path(settings.tracker_storage_path).expanduser()
    return LocalFileStorage(path=path, key=STORAGE_KEY)


def build_tracker_store(settings: Settings) -> TrackerStore:
    """Load the tracker store from configured storage."""
    return TrackerStore.load(build_tracker_storage(settings))


def build_suggestion_api_client(settings: Settings) -> HttpxSuggestionApiClient:
    """Create the client for the suggestion endpoint."""
    return HttpxSuggestionApiClient.create(settings.suggestion_api_url)
