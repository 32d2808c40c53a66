from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AdjustmentStatus
from .model import AttendanceAdjustment


class AdjustmentRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        requested_check_in: datetime,
        requested_check_out: datetime,
        reason: Optional[str],
    ) -> AttendanceAdjustment:
        raise NotImplementedError

    def get_by_id(self, adjustment_id: int, *, for_update: bool = False) -> Optional[AttendanceAdjustment]:
        """``for_update`` locks the row until the enclosing transaction ends."""

        raise NotImplementedError

    def list_by_status(self, status: AdjustmentStatus) -> Sequence[AttendanceAdjustment]:
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[AttendanceAdjustment]:
        raise NotImplementedError

    def decide(
        self,
        *,
        adjustment_id: int,
        status: AdjustmentStatus,
        decided_by: int,
        decided_at: datetime,
    ) -> bool:
        """Apply a decision to a PENDING request; False if it was not PENDING."""

        raise NotImplementedError

    def delete_all_for_user(self, user_id: int) -> int:
        raise NotImplementedError
