from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import Leave


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        start_date: date,
        end_date: date,
        reason: Optional[str],
        number_of_days: int,
        status: LeaveStatus = LeaveStatus.PENDING,
    ) -> Leave:
        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[Leave]:
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[Leave]:
        raise NotImplementedError

    def list_for_user_starting_between(self, user_id: int, start: date, end: date) -> Sequence[Leave]:
        """Leaves whose start date lies in the inclusive [start, end] range."""

        raise NotImplementedError

    def list_by_status(self, status: LeaveStatus) -> Sequence[Leave]:
        raise NotImplementedError

    def update_status(self, *, leave_id: int, status: LeaveStatus, admin_comment: Optional[str]) -> bool:
        raise NotImplementedError

    def delete_all_for_user(self, user_id: int) -> int:
        raise NotImplementedError
