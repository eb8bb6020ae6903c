"""Day-entry store backed by a whole-document persistence port."""

import json
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Protocol
from uuid import uuid4

from calorie_tracker.domain.dates import add_days, iso_date
from calorie_tracker.domain.tracker import (
    DayEntries,
    FoodEntry,
    TrackerState,
    ensure_meal_key,
)
from calorie_tracker.services.normalizer import (
    clamp_calories,
    coerce_limit,
    normalize_state,
)

_logger = logging.getLogger(__name__)


class TrackerStorage(Protocol):
    """Persistence interface for the serialized tracker document."""

    def read(self) -> str | None:
        """Return the stored document, if any."""

    def write(self, document: str) -> None:
        """Replace the stored document."""


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class TrackerStore:
    """In-memory tracker state that rewrites storage after every change."""

    storage: TrackerStorage
    state: TrackerState
    selected_date: str
    clock: Callable[[], date] = date.today
    timestamp: Callable[[], int] = field(default=_now_ms, repr=False)

    @classmethod
    def load(
        cls, storage: TrackerStorage, clock: Callable[[], date] = date.today
    ) -> "TrackerStore":
        """Load and normalize the stored document, then persist the result."""
        today = clock()
        state = normalize_state(_decode(storage.read()), today)
        store = cls(
            storage=storage, state=state, selected_date=iso_date(today), clock=clock
        )
        store._persist()
        return store

    @property
    def today_iso(self) -> str:
        return iso_date(self.clock())

    @property
    def is_viewing_today(self) -> bool:
        return self.selected_date == self.today_iso

    def day_entries(self, date_key: str | None = None) -> DayEntries:
        """Return entries for a date (the selected date by default)."""
        return self.state.day(date_key or self.selected_date)

    def total_used(self, date_key: str | None = None) -> int:
        """Return the calories logged for a date."""
        return self.day_entries(date_key).total_calories

    def remaining(self, date_key: str | None = None) -> int:
        """Return the calories left under the limit; negative when over."""
        return self.state.limit - self.total_used(date_key)

    def select_date(self, date_key: str) -> None:
        """Select the date that mutations apply to."""
        self.selected_date = iso_date(_parse_key(date_key))

    def previous_day(self) -> None:
        self.selected_date = add_days(self.selected_date, -1)

    def next_day(self) -> None:
        self.selected_date = add_days(self.selected_date, 1)

    def go_to_today(self) -> None:
        self.selected_date = self.today_iso

    def add_item(self, meal: str, name: str, calories: object) -> FoodEntry | None:
        """Prepend an entry to a meal; invalid input is ignored."""
        ensure_meal_key(meal)
        trimmed = name.strip()
        amount = clamp_calories(calories)
        if not trimmed or amount <= 0:
            return None

        entry = FoodEntry(
            id=uuid4().hex,
            name=trimmed,
            calories=amount,
            created_at=self.timestamp(),
        )
        day = self.day_entries()
        self._commit(
            self.state.with_day(
                self.selected_date, day.with_meal(meal, (entry, *day.meal(meal)))
            )
        )
        return entry

    def remove_item(self, meal: str, entry_id: str) -> bool:
        """Remove an entry by id from a meal of the selected date.

        Returns False when no entry of that meal has the id.
        """
        day = self.day_entries()
        entries = day.meal(meal)
        kept = tuple(entry for entry in entries if entry.id != entry_id)
        if len(kept) == len(entries):
            return False
        self._commit(self.state.with_day(self.selected_date, day.with_meal(meal, kept)))
        return True

    def reset_day(self) -> None:
        """Clear every meal of the selected date."""
        state = self.state.with_day(self.selected_date, DayEntries())
        self._commit(replace(state, last_reset_iso=self.selected_date))

    def set_limit(self, value: object) -> None:
        """Update the daily limit."""
        self._commit(replace(self.state, limit=coerce_limit(value)))

    def _commit(self, state: TrackerState) -> None:
        self.state = state
        self._persist()

    def _persist(self) -> None:
        self.storage.write(json.dumps(self.state.to_document()))


def _decode(document: str | None) -> object:
    if document is None:
        return None
    try:
        return json.loads(document)
    except ValueError:
        _logger.warning("Stored tracker document is not valid JSON; starting fresh")
        return None


def _parse_key(date_key: str) -> date:
    try:
        return date.fromisoformat(date_key)
    except ValueError as exc:
        raise ValueError(f"Invalid date: {date_key!r}") from exc
