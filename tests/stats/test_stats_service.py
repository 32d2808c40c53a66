from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from src.timekeeper.timekeeper.core.exceptions import UserNotFoundError, ValidationError
from src.timekeeper.timekeeper.stats.service import AttendanceStatsService


@pytest.fixture
def service(attendance_repo, users):
    return AttendanceStatsService(attendance_repo, users, week_first_day=6, week_min_days=1)


def _worked(repo, user, start: datetime, seconds: int):
    return repo.create_session(
        user_id=user.user_id,
        check_in_time=start,
        check_out_time=start + timedelta(seconds=seconds),
        total_duration=seconds,
    )


def test_weekly_totals_and_daily_breakdown(service, attendance_repo, alice):
    _worked(attendance_repo, alice, datetime(2024, 1, 1, 9, 0), 4 * 3600)
    _worked(attendance_repo, alice, datetime(2024, 1, 1, 14, 0), 3 * 3600 + 1800)
    _worked(attendance_repo, alice, datetime(2024, 1, 3, 9, 0), 60)
    # outside the week
    _worked(attendance_repo, alice, datetime(2024, 1, 8, 9, 0), 3600)
    _worked(attendance_repo, alice, datetime(2023, 12, 31, 23, 0), 3600)

    stats = service.weekly_stats(alice.user_id, year=2024, week_of_year=1)

    assert stats.week_start == datetime(2024, 1, 1)
    assert stats.total_seconds == 7 * 3600 + 1800 + 60
    assert stats.total_hours == "7 hours, 31 minutes, 0 seconds"
    assert stats.working_days == 2
    assert stats.to_dict()["dailyBreakdown"] == [
        {"date": "2024-01-01", "totalHours": "7 hours, 30 minutes, 0 seconds"},
        {"date": "2024-01-03", "totalHours": "0 hours, 1 minutes, 0 seconds"},
    ]


def test_weekly_ignores_open_sessions(service, attendance_repo, alice):
    attendance_repo.create_session(user_id=alice.user_id, check_in_time=datetime(2024, 1, 2, 9, 0))

    stats = service.weekly_stats(alice.user_id, year=2024, week_of_year=1)

    assert stats.total_seconds == 0
    assert stats.working_days == 0
    assert stats.to_dict() == {
        "totalHoursThisWeek": "0 hours, 0 minutes, 0 seconds",
        "totalWorkingDaysThisWeek": 0,
        "dailyBreakdown": [],
    }


def test_week_includes_sunday_up_to_last_instant(service, attendance_repo, alice):
    _worked(attendance_repo, alice, datetime(2024, 1, 7, 23, 59, 59), 1)

    assert service.weekly_stats(alice.user_id, year=2024, week_of_year=1).working_days == 1
    assert service.weekly_stats(alice.user_id, year=2024, week_of_year=2).working_days == 0


def test_monthly_groups_by_week_number(service, attendance_repo, alice):
    _worked(attendance_repo, alice, datetime(2024, 3, 1, 9, 0), 3600)
    _worked(attendance_repo, alice, datetime(2024, 3, 2, 9, 0), 1800)
    _worked(attendance_repo, alice, datetime(2024, 3, 4, 9, 0), 7200)
    _worked(attendance_repo, alice, datetime(2024, 3, 31, 23, 0), 600)
    _worked(attendance_repo, alice, datetime(2024, 4, 1, 0, 0), 9999)

    stats = service.monthly_stats(alice.user_id, year=2024, month=3)

    assert stats.total_seconds == 3600 + 1800 + 7200 + 600
    assert stats.to_dict() == {
        "totalHoursThisMonth": "3 hours, 40 minutes, 0 seconds",
        "weeklyBreakdown": {
            "Week 9": "1 hours, 30 minutes, 0 seconds",
            "Week 10": "2 hours, 0 minutes, 0 seconds",
            "Week 14": "0 hours, 10 minutes, 0 seconds",
        },
    }


def test_monthly_week_definition_is_configurable(attendance_repo, users, alice):
    iso = AttendanceStatsService(attendance_repo, users, week_first_day=0, week_min_days=4)
    _worked(attendance_repo, alice, datetime(2021, 1, 1, 9, 0), 3600)

    assert list(iso.monthly_stats(alice.user_id, year=2021, month=1).weekly_breakdown) == [
        f"Week {date(2021, 1, 1).isocalendar()[1]}"
    ]


def test_empty_month(service, alice):
    stats = service.monthly_stats(alice.user_id, year=2024, month=2)

    assert stats.total_hours == "0 hours, 0 minutes, 0 seconds"
    assert stats.weekly_breakdown == {}


def test_my_stats_resolve_username(service, attendance_repo, alice):
    _worked(attendance_repo, alice, datetime(2024, 3, 4, 9, 0), 3600)

    assert service.my_weekly_stats("alice", year=2024, week_of_year=10).total_seconds == 3600
    assert service.my_monthly_stats("alice", year=2024, month=3).total_seconds == 3600


@pytest.mark.parametrize("week", [0, 54])
def test_week_out_of_range(service, alice, week):
    with pytest.raises(ValidationError):
        service.weekly_stats(alice.user_id, year=2024, week_of_year=week)


@pytest.mark.parametrize("month", [0, 13])
def test_month_out_of_range(service, alice, month):
    with pytest.raises(ValidationError):
        service.monthly_stats(alice.user_id, year=2024, month=month)


def test_unknown_user(service):
    with pytest.raises(UserNotFoundError):
        service.weekly_stats(42, year=2024, week_of_year=1)
    with pytest.raises(UserNotFoundError):
        service.my_monthly_stats("ghost", year=2024, month=1)


def test_monthly_breakdown_is_ordered_by_week_number(service, attendance_repo, alice):
    _worked(attendance_repo, alice, datetime(2024, 3, 31, 9, 0), 60)
    _worked(attendance_repo, alice, datetime(2024, 3, 4, 9, 0), 60)
    _worked(attendance_repo, alice, datetime(2024, 3, 1, 9, 0), 60)

    stats = service.monthly_stats(alice.user_id, year=2024, month=3)

    assert list(stats.weekly_breakdown) == ["Week 9", "Week 10", "Week 14"]
    assert list(stats.to_dict()["weeklyBreakdown"]) == ["Week 9", "Week 10", "Week 14"]
