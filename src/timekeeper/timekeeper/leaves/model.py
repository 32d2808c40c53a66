from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveDraft:
    """What an employee submits; dates may be missing and are validated on apply."""

    start_date: Optional[date]
    end_date: Optional[date]
    reason: Optional[str] = None


@dataclass(frozen=True)
class Leave:
    leave_id: int
    user_id: int
    start_date: date
    end_date: date
    reason: Optional[str]
    number_of_days: int
    status: LeaveStatus = LeaveStatus.PENDING
    admin_comment: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.leave_id,
            "user_id": self.user_id,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "reason": self.reason,
            "number_of_days": self.number_of_days,
            "status": self.status.value,
            "admin_comment": self.admin_comment,
        }
