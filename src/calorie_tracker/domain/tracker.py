"""Domain models for daily calorie tracking."""

from dataclasses import dataclass, field, replace

DAILY_LIMIT = 1200

STORAGE_KEY = "calorieTrackerPink_v1"

MEALS: tuple[tuple[str, str], ...] = (
    ("breakfast", "Breakfast"),
    ("lunch", "Lunch"),
    ("dinner", "Dinner"),
)

MEAL_KEYS: tuple[str, ...] = tuple(key for key, _ in MEALS)


def ensure_meal_key(meal: str) -> str:
    """Validate a meal key."""
    if meal not in MEAL_KEYS:
        raise ValueError(f"Unknown meal: {meal!r}")
    return meal


@dataclass(frozen=True)
class FoodEntry:
    """A single named food item with its calories."""

    id: str
    name: str
    calories: int
    created_at: int

    def to_document(self) -> dict[str, object]:
        """Return the persisted JSON shape."""
        return {
            "id": self.id,
            "name": self.name,
            "calories": self.calories,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class DayEntries:
    """Entries for one date, newest first per meal."""

    breakfast: tuple[FoodEntry, ...] = ()
    lunch: tuple[FoodEntry, ...] = ()
    dinner: tuple[FoodEntry, ...] = ()

    def meal(self, meal: str) -> tuple[FoodEntry, ...]:
        """Return the entries for a meal."""
        return getattr(self, ensure_meal_key(meal))

    def with_meal(self, meal: str, entries: tuple[FoodEntry, ...]) -> "DayEntries":
        """Return a copy with one meal's entries replaced."""
        return replace(self, **{ensure_meal_key(meal): tuple(entries)})

    @property
    def has_entries(self) -> bool:
        return any(self.meal(key) for key in MEAL_KEYS)

    @property
    def total_calories(self) -> int:
        return sum(entry.calories for key in MEAL_KEYS for entry in self.meal(key))

    def to_document(self) -> dict[str, list[dict[str, object]]]:
        """Return the persisted JSON shape."""
        return {
            key: [entry.to_document() for entry in self.meal(key)] for key in MEAL_KEYS
        }


@dataclass(frozen=True)
class TrackerState:
    """Root of the persisted tracker document."""

    entries_by_date: dict[str, DayEntries] = field(default_factory=dict)
    limit: int = DAILY_LIMIT
    last_reset_iso: str = ""

    def day(self, date_key: str) -> DayEntries:
        """Return a date's entries, empty when the date is untracked."""
        return self.entries_by_date.get(date_key) or DayEntries()

    def with_day(self, date_key: str, day: DayEntries) -> "TrackerState":
        """Return a copy with one date's entries replaced."""
        return replace(self, entries_by_date={**self.entries_by_date, date_key: day})

    def to_document(self) -> dict[str, object]:
        """Return the persisted JSON shape."""
        return {
            "entriesByDate": {
                date_key: day.to_document()
                for date_key, day in self.entries_by_date.items()
            },
            "limit": self.limit,
            "lastResetISO": self.last_reset_iso,
        }
