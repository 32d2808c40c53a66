from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Sequence

from ..attendance.model import AttendanceSession
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_duration, iso_week_bounds, month_bounds, week_of_week_based_year
from ..core.constants import DEFAULT_WEEK_FIRST_DAY, DEFAULT_WEEK_MIN_DAYS
from ..core.exceptions import ValidationError
from ..users.model import User
from ..users.repository import UserRepository
from ..users.service import require_user_by_id, require_user_by_username
from .model import DailyHours, MonthlyStats, WeeklyStats

logger = logging.getLogger(__name__)


def _timed(sessions: Sequence[AttendanceSession]) -> list[AttendanceSession]:
    return [s for s in sessions if s.total_duration is not None]


class AttendanceStatsService:
    """Weekly/monthly worked-time totals built from stored session durations.

    Weekly windows are ISO-anchored (week 1 holds January 4). The monthly
    breakdown numbers weeks with the configured week definition instead,
    so near New Year the two schemes can disagree.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        week_first_day: int = DEFAULT_WEEK_FIRST_DAY,
        week_min_days: int = DEFAULT_WEEK_MIN_DAYS,
    ):
        self._attendance = attendance
        self._users = users
        self._week_first_day = int(week_first_day)
        self._week_min_days = int(week_min_days)

    def weekly_stats(self, user_id: int, *, year: int, week_of_year: int) -> WeeklyStats:
        logger.info("Fetching weekly stats for user ID: %s, year: %s, week: %s", user_id, year, week_of_year)
        return self._weekly(require_user_by_id(self._users, user_id), year, week_of_year)

    def my_weekly_stats(self, username: str, *, year: int, week_of_year: int) -> WeeklyStats:
        logger.info("Fetching weekly stats for user: %s, year: %s, week: %s", username, year, week_of_year)
        return self._weekly(require_user_by_username(self._users, username), year, week_of_year)

    def monthly_stats(self, user_id: int, *, year: int, month: int) -> MonthlyStats:
        logger.info("Fetching monthly stats for user ID: %s, year: %s, month: %s", user_id, year, month)
        return self._monthly(require_user_by_id(self._users, user_id), year, month)

    def my_monthly_stats(self, username: str, *, year: int, month: int) -> MonthlyStats:
        logger.info("Fetching monthly stats for user: %s, year: %s, month: %s", username, year, month)
        return self._monthly(require_user_by_username(self._users, username), year, month)

    def _weekly(self, user: User, year: int, week_of_year: int) -> WeeklyStats:
        if not 1 <= week_of_year <= 53:
            raise ValidationError("weekOfYear must be between 1 and 53")
        start, end = iso_week_bounds(year, week_of_year)
        sessions = _timed(self._attendance.list_for_user_between(user.user_id, start, end))

        per_day: dict[date, int] = defaultdict(int)
        for s in sessions:
            per_day[s.check_in_time.date()] += s.total_duration
        total = sum(per_day.values())

        return WeeklyStats(
            week_start=start,
            week_end=end,
            total_seconds=total,
            total_hours=format_duration(total),
            working_days=len(per_day),
            daily_breakdown=[DailyHours(date=d, total_hours=format_duration(per_day[d])) for d in sorted(per_day)],
        )

    def _monthly(self, user: User, year: int, month: int) -> MonthlyStats:
        if not 1 <= month <= 12:
            raise ValidationError("month must be between 1 and 12")
        start, end = month_bounds(year, month)
        sessions = _timed(self._attendance.list_for_user_between(user.user_id, start, end))

        per_week: dict[int, int] = defaultdict(int)
        for s in sessions:
            week = week_of_week_based_year(
                s.check_in_time.date(),
                first_weekday=self._week_first_day,
                min_days=self._week_min_days,
            )
            per_week[week] += s.total_duration
        total = sum(per_week.values())

        return MonthlyStats(
            month_start=start,
            month_end=end,
            total_seconds=total,
            total_hours=format_duration(total),
            weekly_breakdown={f"Week {w}": format_duration(per_week[w]) for w in sorted(per_week)},
        )
