from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(frozen=True)
class DailyHours:
    date: date
    total_hours: str


@dataclass(frozen=True)
class WeeklyStats:
    week_start: datetime
    week_end: datetime
    total_seconds: int
    total_hours: str
    working_days: int
    daily_breakdown: list[DailyHours] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalHoursThisWeek": self.total_hours,
            "totalWorkingDaysThisWeek": self.working_days,
            "dailyBreakdown": [
                {"date": d.date.isoformat(), "totalHours": d.total_hours} for d in self.daily_breakdown
            ],
        }


@dataclass(frozen=True)
class MonthlyStats:
    month_start: datetime
    month_end: datetime
    total_seconds: int
    total_hours: str
    # "Week N" -> formatted duration, ordered by N
    weekly_breakdown: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "totalHoursThisMonth": self.total_hours,
            "weeklyBreakdown": dict(self.weekly_breakdown),
        }
