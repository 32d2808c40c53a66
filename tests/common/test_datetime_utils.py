from __future__ import annotations

from datetime import date, datetime

import pytest

from src.timekeeper.timekeeper.common.datetime_utils import (
    format_duration,
    inclusive_day_count,
    iso_week_bounds,
    month_bounds,
    month_date_range,
    seconds_between,
    week_of_week_based_year,
)


def test_format_duration_does_not_roll_hours_into_days():
    assert format_duration(0) == "0 hours, 0 minutes, 0 seconds"
    assert format_duration(3725) == "1 hours, 2 minutes, 5 seconds"
    assert format_duration(90000) == "25 hours, 0 minutes, 0 seconds"


def test_format_duration_missing_value():
    assert format_duration(None) == "N/A"


def test_seconds_between_truncates_fraction():
    start = datetime(2024, 3, 4, 9, 0, 0)
    assert seconds_between(start, datetime(2024, 3, 4, 9, 0, 1, 999999)) == 1
    assert seconds_between(start, datetime(2024, 3, 4, 17, 30)) == 30600


def test_inclusive_day_count():
    assert inclusive_day_count(date(2024, 3, 10), date(2024, 3, 10)) == 1
    assert inclusive_day_count(date(2024, 3, 28), date(2024, 4, 2)) == 6


def test_iso_week_bounds_2024_week_1_starts_on_new_year():
    start, end = iso_week_bounds(2024, 1)
    assert start == datetime(2024, 1, 1)
    assert end == datetime(2024, 1, 7, 23, 59, 59, 999999)


def test_iso_week_bounds_week_1_can_start_in_previous_year():
    start, _ = iso_week_bounds(2021, 1)
    assert start == datetime(2021, 1, 4)
    start, _ = iso_week_bounds(2020, 1)
    assert start == datetime(2019, 12, 30)


def test_month_bounds_handles_leap_february_and_december():
    assert month_bounds(2024, 2) == (datetime(2024, 2, 1), datetime(2024, 2, 29, 23, 59, 59, 999999))
    assert month_bounds(2023, 12)[1] == datetime(2023, 12, 31, 23, 59, 59, 999999)
    assert month_date_range(date(2024, 4, 15)) == (date(2024, 4, 1), date(2024, 4, 30))


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2023, 12, 31), 1),
        (date(2024, 1, 6), 1),
        (date(2024, 1, 7), 2),
        (date(2024, 3, 2), 9),
        (date(2024, 3, 3), 10),
        (date(2024, 3, 4), 10),
    ],
)
def test_sunday_first_weeks(day, expected):
    assert week_of_week_based_year(day, first_weekday=6, min_days=1) == expected


@pytest.mark.parametrize("day", [date(2021, 1, 1), date(2024, 12, 30), date(2026, 6, 15), date(2027, 1, 3)])
def test_monday_four_days_matches_iso(day):
    assert week_of_week_based_year(day, first_weekday=0, min_days=4) == day.isocalendar()[1]
