"""Per-day status for the week and month views."""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from calorie_tracker.domain.dates import (
    MonthCell,
    WeekDay,
    current_month_cells,
    current_week,
    iso_date,
)
from calorie_tracker.domain.tracker import DayEntries, TrackerState


class StatusKind(Enum):
    """Status buckets shown on calendar cells."""

    TODAY = "today"
    NO_ENTRY = "noEntry"
    ACHIEVED = "achieved"
    NOT_ACHIEVED = "notAchieved"


@dataclass(frozen=True)
class DayStatus:
    """Status of a single date against the daily limit."""

    kind: StatusKind
    total_calories: int = 0

    @property
    def label(self) -> str:
        if self.kind is StatusKind.TODAY:
            return "Today"
        if self.kind is StatusKind.NO_ENTRY:
            return "No entry"
        if self.kind is StatusKind.ACHIEVED:
            return "Achieved"
        return f"Not achieved (over limit: {self.total_calories} kcal)"


def day_status(day: DayEntries, limit: int, date_key: str, today_key: str) -> DayStatus:
    """Compute a date's status; today always wins over its entries."""
    if date_key == today_key:
        return DayStatus(StatusKind.TODAY)
    if not day.has_entries:
        return DayStatus(StatusKind.NO_ENTRY)
    total = day.total_calories
    if total <= limit:
        return DayStatus(StatusKind.ACHIEVED, total)
    return DayStatus(StatusKind.NOT_ACHIEVED, total)


def status_for_date(state: TrackerState, date_key: str, today: date) -> DayStatus:
    """Compute the status of a tracked date."""
    return day_status(state.day(date_key), state.limit, date_key, iso_date(today))


def week_view(state: TrackerState, today: date) -> list[tuple[WeekDay, DayStatus]]:
    """Return the current week with statuses."""
    return [
        (day, status_for_date(state, day.iso, today)) for day in current_week(today)
    ]


def month_view(
    state: TrackerState, today: date
) -> list[tuple[MonthCell, DayStatus] | None]:
    """Return the current month grid with statuses; padding stays None."""
    return [
        (cell, status_for_date(state, cell.iso, today)) if cell else None
        for cell in current_month_cells(today)
    ]
