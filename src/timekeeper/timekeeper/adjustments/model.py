from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AdjustmentStatus


@dataclass(frozen=True)
class AttendanceAdjustment:
    """A user's request to record a work period they missed or punched wrong."""

    adjustment_id: int
    user_id: int
    requested_check_in: datetime
    requested_check_out: datetime
    reason: Optional[str]
    status: AdjustmentStatus
    approved_by: Optional[int] = None
    action_taken_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.adjustment_id,
            "user_id": self.user_id,
            "requested_check_in": self.requested_check_in.isoformat(),
            "requested_check_out": self.requested_check_out.isoformat(),
            "reason": self.reason,
            "status": self.status.value,
            "approved_by": self.approved_by,
            "action_taken_at": self.action_taken_at.isoformat() if self.action_taken_at else None,
        }
