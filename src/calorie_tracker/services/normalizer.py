"""Normalization of persisted tracker documents across schema versions.

Three document shapes have been written to storage over time:

* the current shape, with a per-date ``entriesByDate`` map;
* a flat shape with top-level ``breakfast``/``lunch``/``dinner`` lists and a
  ``lastResetISO`` marking the day they belong to;
* the earliest flat shape, with meal lists but no reset date.

Each shape has a migration below. They run in order and the first one that
yields a non-empty per-date map wins.
"""

import math
from collections.abc import Callable, Mapping
from datetime import date
from uuid import uuid4

from calorie_tracker.domain.dates import is_date_key, iso_date
from calorie_tracker.domain.tracker import (
    DAILY_LIMIT,
    MEAL_KEYS,
    DayEntries,
    FoodEntry,
    TrackerState,
)

Migration = Callable[[Mapping[str, object], str], dict[str, DayEntries] | None]


def clamp_calories(value: object) -> int:
    """Coerce a value to a non-negative whole number of calories."""
    number = _to_number(value)
    if number is None or not math.isfinite(number):
        return 0
    return max(0, math.floor(number + 0.5))


def coerce_limit(value: object) -> int:
    """Coerce a daily limit, falling back to the default for zero or junk."""
    return clamp_calories(value) or DAILY_LIMIT


def normalize_state(raw: object, today: date) -> TrackerState:
    """Convert any decoded document (or None) into a canonical TrackerState."""
    today_key = iso_date(today)
    base: Mapping[str, object] = raw if isinstance(raw, Mapping) else {}

    entries_by_date: dict[str, DayEntries] = {}
    for migration in SCHEMA_MIGRATIONS:
        migrated = migration(base, today_key)
        if migrated:
            entries_by_date = migrated
            break

    last_reset = base.get("lastResetISO")
    return TrackerState(
        entries_by_date=entries_by_date,
        limit=coerce_limit(base.get("limit")),
        last_reset_iso=last_reset if is_date_key(last_reset) else today_key,
    )


def normalize_day(day: object) -> DayEntries:
    """Normalize one date's meal lists."""
    source: Mapping[str, object] = day if isinstance(day, Mapping) else {}
    return DayEntries(**{key: _normalize_entries(source.get(key)) for key in MEAL_KEYS})


def migrate_entries_by_date(
    base: Mapping[str, object], today_key: str
) -> dict[str, DayEntries] | None:
    """Current schema: keep canonical date keys from the per-date map."""
    entries_by_date = base.get("entriesByDate")
    if not isinstance(entries_by_date, Mapping):
        return None
    return {
        date_key: normalize_day(day)
        for date_key, day in entries_by_date.items()
        if is_date_key(date_key)
    }


def migrate_flat_meals_with_reset_date(
    base: Mapping[str, object], today_key: str
) -> dict[str, DayEntries] | None:
    """Flat schema whose meals belong to the recorded reset date."""
    last_reset = base.get("lastResetISO")
    if not is_date_key(last_reset):
        return None
    return {last_reset: normalize_day(base)}


def migrate_flat_meals(
    base: Mapping[str, object], today_key: str
) -> dict[str, DayEntries] | None:
    """Earliest flat schema, or nothing usable: meals belong to today."""
    return {today_key: normalize_day(base)}


SCHEMA_MIGRATIONS: tuple[Migration, ...] = (
    migrate_entries_by_date,
    migrate_flat_meals_with_reset_date,
    migrate_flat_meals,
)


def _normalize_entries(entries: object) -> tuple[FoodEntry, ...]:
    if not isinstance(entries, list | tuple):
        return ()
    return tuple(
        _normalize_entry(entry) for entry in entries if isinstance(entry, Mapping)
    )


def _normalize_entry(entry: Mapping[str, object]) -> FoodEntry:
    raw_id = entry.get("id")
    raw_name = entry.get("name")
    return FoodEntry(
        id=str(raw_id) if raw_id not in (None, "") else uuid4().hex,
        name=raw_name if isinstance(raw_name, str) else "",
        calories=clamp_calories(entry.get("calories")),
        # epoch milliseconds
        created_at=clamp_calories(entry.get("createdAt")),
    )


def _to_number(value: object) -> float | None:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return None
    if value is None:
        return 0.0
    return None
