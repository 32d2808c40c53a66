from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: one work period (check-in to check-out).

    OPEN while ``check_out_time`` is None, CLOSED once it is set.
    """

    session_id: int
    user_id: int
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    total_duration: Optional[int] = None
    total_duration_formatted: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.check_out_time is None

    def to_dict(self) -> dict:
        return {
            "id": self.session_id,
            "user_id": self.user_id,
            "check_in_time": self.check_in_time.isoformat(),
            "check_out_time": self.check_out_time.isoformat() if self.check_out_time else None,
            "total_duration": self.total_duration,
            "total_duration_formatted": self.total_duration_formatted,
        }
