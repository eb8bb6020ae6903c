"""Calorie suggestion service using a language-model completion API."""

import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from calorie_tracker.domain.suggestions import CalorieSuggestion
from calorie_tracker.services.normalizer import clamp_calories

MAX_INGREDIENT_LENGTH = 160

SUGGESTION_INSTRUCTIONS = (
    "You estimate calories for a single ingredient line the user typed. "
    "Return ONLY valid JSON with keys: calories (number), notes (string). "
    "Make a reasonable assumption for quantity if unclear. "
    "Assume no added oil unless stated."
)

GENERIC_FAILURE_MESSAGE = "AI suggestion failed"
QUOTA_EXCEEDED_MESSAGE = "OpenAI quota exceeded. Add billing/credits, then retry."
QUOTA_EXCEEDED_CODE = "insufficient_quota"

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)

_logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    """Interface for a text completion API."""

    async def complete(
        self,
        *,
        model: str,
        instructions: str,
        input_text: str,
        max_output_tokens: int,
    ) -> str:
        """Return the raw text output of the model."""


class SuggestionError(Exception):
    """Suggestion failure carrying the HTTP status to respond with."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


@dataclass
class CalorieSuggestionService:
    """Service that asks the model for a calorie estimate."""

    client: CompletionClient
    model: str = "gpt-4o-mini"
    max_output_tokens: int = 120
    production: bool = False

    async def suggest(self, text: object) -> CalorieSuggestion:
        """Estimate calories for an ingredient line."""
        ingredient = clean_ingredient_text(text)
        if not ingredient:
            raise SuggestionError(400, "Missing ingredient text")

        try:
            raw = await self.client.complete(
                model=self.model,
                instructions=SUGGESTION_INSTRUCTIONS,
                input_text=f'Ingredient line: "{ingredient}"\nReturn JSON now.',
                max_output_tokens=self.max_output_tokens,
            )
        except Exception as exc:
            _logger.warning("Completion request failed: %s", exc)
            raise classify_upstream_error(exc, production=self.production) from exc

        return suggestion_from_output(parse_model_json(raw))


def clean_ingredient_text(text: object) -> str:
    """Trim and bound ingredient text; non-strings count as empty."""
    if not isinstance(text, str):
        return ""
    return text.strip()[:MAX_INGREDIENT_LENGTH]


def parse_model_json(raw_text: str | None) -> dict[str, object]:
    """Parse model output as JSON, falling back to the first {...} span."""
    raw = (raw_text or "").strip()
    if not raw:
        return {}

    try:
        return _as_object(json.loads(raw))
    except ValueError:
        pass

    match = _JSON_OBJECT.search(raw)
    if not match:
        return {}
    try:
        return _as_object(json.loads(match.group(0)))
    except ValueError:
        return {}


def suggestion_from_output(parsed: Mapping[str, object]) -> CalorieSuggestion:
    """Normalize parsed model output into a suggestion."""
    notes = parsed.get("notes")
    return CalorieSuggestion(
        calories=clamp_calories(parsed.get("calories")),
        notes=notes if isinstance(notes, str) else "",
    )


def classify_upstream_error(exc: Exception, *, production: bool) -> SuggestionError:
    """Map an upstream failure to a status and a user-facing message."""
    body = getattr(exc, "body", None)
    details: Mapping[str, object] = body if isinstance(body, Mapping) else {}
    code = getattr(exc, "code", None) or details.get("code")

    if code == QUOTA_EXCEEDED_CODE:
        message = QUOTA_EXCEEDED_MESSAGE
    elif production:
        message = GENERIC_FAILURE_MESSAGE
    else:
        message = str(
            details.get("message")
            or getattr(exc, "message", None)
            or str(exc)
            or GENERIC_FAILURE_MESSAGE
        )
    return SuggestionError(_safe_status(exc), message)


def _safe_status(exc: Exception) -> int:
    for attribute in ("status_code", "status"):
        status = getattr(exc, attribute, None)
        if isinstance(status, int) and not isinstance(status, bool):
            return status if 400 <= status <= 599 else 500  # noqa: PLR2004
    return 500


def _as_object(value: object) -> dict[str, object]:
    return value if isinstance(value, dict) else {}
