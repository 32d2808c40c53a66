from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceSession


class AttendanceRepository(Protocol):
    def create_session(
        self,
        *,
        user_id: int,
        check_in_time: datetime,
        check_out_time: Optional[datetime] = None,
        total_duration: Optional[int] = None,
    ) -> AttendanceSession:
        """Insert a session.

        Must raise ``ActiveSessionExistsError`` when the insert would give the
        user a second open session.
        """

        raise NotImplementedError

    def get_open_for_user(self, user_id: int) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def close_session(self, *, session_id: int, check_out_time: datetime, total_duration: int) -> bool:
        """Close an open session; returns False if it was already closed."""

        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[AttendanceSession]:
        """All sessions of the user, newest check-in first."""

        raise NotImplementedError

    def list_for_user_between(self, user_id: int, start: datetime, end: datetime) -> Sequence[AttendanceSession]:
        """Sessions whose check-in lies in the inclusive [start, end] window."""

        raise NotImplementedError

    def delete_all_for_user(self, user_id: int) -> int:
        raise NotImplementedError
