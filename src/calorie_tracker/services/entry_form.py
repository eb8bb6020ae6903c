"""Add-item form state and the AI calorie suggestion flow."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from calorie_tracker.domain.tracker import FoodEntry, ensure_meal_key
from calorie_tracker.services.normalizer import clamp_calories
from calorie_tracker.services.suggestions import MAX_INGREDIENT_LENGTH
from calorie_tracker.services.tracker import TrackerStore

TIMEOUT_MESSAGE = "Suggestion timed out. Please try again."
FALLBACK_MESSAGE = "Could not get a suggestion. Check your API key + redeploy."

_logger = logging.getLogger(__name__)


class SuggestionRequestError(Exception):
    """Suggestion request failed with a displayable message."""


class SuggestionApiClient(Protocol):
    """Interface for the calorie suggestion endpoint."""

    async def suggest(self, text: str) -> dict[str, object]:
        """Return the decoded suggestion payload."""


@dataclass
class EntryForm:
    """Inputs of the add-item form plus AI suggestion feedback."""

    meal: str = "breakfast"
    name: str = ""
    calories: str = ""
    is_suggested_calories: bool = False
    is_suggesting: bool = False
    ai_note: str = ""
    ai_error: str = ""

    @property
    def message(self) -> str:
        """Message to show under the form; errors win over notes."""
        return self.ai_error or self.ai_note

    def select_meal(self, meal: str) -> None:
        self.meal = ensure_meal_key(meal)

    def edit_calories(self, value: str) -> None:
        """Manual edits drop the AI-suggested marker."""
        self.calories = value
        self.is_suggested_calories = False

    def submit(self, store: TrackerStore) -> FoodEntry | None:
        """Add the item to the store and clear the inputs on success."""
        entry = store.add_item(self.meal, self.name, self.calories)
        if entry is not None:
            self.name = ""
            self.calories = ""
            self.is_suggested_calories = False
        return entry


async def request_suggestion(
    form: EntryForm,
    client: SuggestionApiClient,
    timeout_seconds: float = 20.0,
) -> None:
    """Ask for a calorie estimate of the form's name and apply it."""
    ingredient = form.name.strip()[:MAX_INGREDIENT_LENGTH]
    if not ingredient or form.is_suggesting:
        return

    form.is_suggesting = True
    form.ai_error = ""
    form.ai_note = ""
    try:
        async with asyncio.timeout(timeout_seconds):
            payload = await client.suggest(ingredient)
    except (TimeoutError, httpx.TimeoutException):
        form.ai_error = TIMEOUT_MESSAGE
        return
    except (SuggestionRequestError, httpx.HTTPError) as exc:
        _logger.warning("Calorie suggestion failed: %s", exc)
        form.ai_error = str(exc) or FALLBACK_MESSAGE
        return
    finally:
        form.is_suggesting = False

    notes = payload.get("notes")
    form.calories = str(clamp_calories(payload.get("calories")))
    form.is_suggested_calories = True
    form.ai_note = notes if isinstance(notes, str) else ""
