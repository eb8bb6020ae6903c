"""Models for AI calorie suggestions."""

from pydantic import BaseModel, Field


class CalorieSuggestion(BaseModel):
    """Normalized calorie estimate for one ingredient line."""

    calories: int = Field(ge=0)
    notes: str = ""


class SuggestionErrorBody(BaseModel):
    """Error payload returned by the suggestion endpoint."""

    error: str
