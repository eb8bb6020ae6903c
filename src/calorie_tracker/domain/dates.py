"""Calendar date helpers keyed by canonical YYYY-MM-DD strings."""

import calendar
import re
from dataclasses import dataclass
from datetime import date, timedelta

DATE_KEY_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

WEEKDAY_HEADERS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

DAYS_PER_WEEK = 7


@dataclass(frozen=True)
class WeekDay:
    """A single day of the current week view."""

    iso: str
    day_label: str
    day_number: int
    full_label: str


@dataclass(frozen=True)
class MonthCell:
    """A populated cell of the month grid."""

    iso: str
    day_number: int
    full_label: str


def iso_date(day: date) -> str:
    """Return the canonical date key for a calendar date."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def date_from_iso(key: str) -> date:
    """Parse a canonical date key back into a date."""
    year, month, day = (int(part) for part in key.split("-"))
    return date(year, month, day)


def add_days(key: str, days: int) -> str:
    """Shift a date key by a number of days."""
    return iso_date(date_from_iso(key) + timedelta(days=days))


def is_date_key(value: object) -> bool:
    """Return True when the value looks like a canonical date key."""
    return isinstance(value, str) and DATE_KEY_PATTERN.fullmatch(value) is not None


def full_label(day: date) -> str:
    """Long label such as 'Monday, October 19'."""
    return f"{day:%A, %B} {day.day}"


def sunday_index(day: date) -> int:
    """Weekday index with Sunday as 0."""
    return (day.weekday() + 1) % DAYS_PER_WEEK


def current_week(base: date) -> list[WeekDay]:
    """Return the Sunday-first week containing the base date."""
    start = base - timedelta(days=sunday_index(base))
    week = []
    for offset in range(DAYS_PER_WEEK):
        day = start + timedelta(days=offset)
        week.append(
            WeekDay(
                iso=iso_date(day),
                day_label=f"{day:%a}",
                day_number=day.day,
                full_label=full_label(day),
            )
        )
    return week


def current_month_cells(base: date) -> list[MonthCell | None]:
    """Return a Sunday-first month grid padded with None to whole weeks."""
    first_of_month = base.replace(day=1)
    _, days_in_month = calendar.monthrange(base.year, base.month)
    cells: list[MonthCell | None] = [None] * sunday_index(first_of_month)

    for day_number in range(1, days_in_month + 1):
        day = first_of_month.replace(day=day_number)
        cells.append(
            MonthCell(
                iso=iso_date(day),
                day_number=day_number,
                full_label=full_label(day),
            )
        )

    while len(cells) % DAYS_PER_WEEK != 0:
        cells.append(None)
    return cells
