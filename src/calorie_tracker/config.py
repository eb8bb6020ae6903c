"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("NODE_ENV", "development")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    openai_timeout_seconds: float = 15.0
    openai_max_output_tokens: int = 120
    node_env: str = _ENVIRONMENT
    suggestion_api_url: str = "http://localhost:8000/api/suggest-calories"
    suggestion_timeout_seconds: float = 20.0
    tracker_storage_backend: Literal["file", "supabase"] = "file"
    tracker_storage_path: str = "~/.calorie_tracker/local_storage.json"
    supabase_url: str | None = None
    supabase_service_key: str | None = None

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        """Return True when detailed upstream errors must be hidden."""
        return self.node_env == "production"
