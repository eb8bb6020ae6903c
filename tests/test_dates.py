"""Tests for calendar date helpers."""

from datetime import date

from calorie_tracker.domain.dates import (
    add_days,
    current_month_cells,
    current_week,
    date_from_iso,
    is_date_key,
    iso_date,
)


def test_iso_date_pads_month_and_day() -> None:
    assert iso_date(date(2026, 3, 7)) == "2026-03-07"
    assert date_from_iso("2026-03-07") == date(2026, 3, 7)


def test_add_days_crosses_month_and_year() -> None:
    assert add_days("2026-10-31", 1) == "2026-11-01"
    assert add_days("2027-01-01", -1) == "2026-12-31"


def test_is_date_key_rejects_other_shapes() -> None:
    assert is_date_key("2026-10-19")
    assert not is_date_key("2026-1-19")
    assert not is_date_key("19/10/2026")
    assert not is_date_key(20261019)
    assert not is_date_key(None)
    assert not is_date_key("2026-10-19\n")
    assert not is_date_key(" 2026-10-19")


def test_current_week_starts_on_sunday() -> None:
    week = current_week(date(2026, 10, 19))

    assert [day.iso for day in week] == [
        "2026-10-18",
        "2026-10-19",
        "2026-10-20",
        "2026-10-21",
        "2026-10-22",
        "2026-10-23",
        "2026-10-24",
    ]
    assert week[0].day_label == "Sun"
    assert week[1].full_label == "Monday, October 19"


def test_current_week_on_sunday_includes_base_first() -> None:
    week = current_week(date(2026, 10, 18))

    assert week[0].iso == "2026-10-18"


def test_current_month_cells_pads_to_whole_weeks() -> None:
    cells = current_month_cells(date(2026, 10, 19))

    # October 1st 2026 is a Thursday.
    assert cells[:4] == [None, None, None, None]
    assert cells[4] is not None
    assert cells[4].iso == "2026-10-01"
    assert len(cells) == 35
    populated = [cell for cell in cells if cell is not None]
    assert len(populated) == 31
    assert populated[-1].iso == "2026-10-31"


def test_current_month_cells_adds_trailing_padding() -> None:
    cells = current_month_cells(date(2026, 11, 5))

    # November 1st 2026 is a Sunday; 30 days leave 5 trailing blanks.
    assert cells[0] is not None
    assert cells[0].iso == "2026-11-01"
    assert len(cells) == 35
    assert cells[30:] == [None] * 5


def test_current_month_cells_handles_leap_february() -> None:
    cells = current_month_cells(date(2028, 2, 10))

    populated = [cell for cell in cells if cell is not None]
    assert populated[-1].iso == "2028-02-29"
