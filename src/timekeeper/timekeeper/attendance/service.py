from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import format_duration, now_local, seconds_between
from ..core.constants import DURATION_NOT_AVAILABLE
from ..core.exceptions import ActiveSessionExistsError, NoActiveSessionError
from ..users.repository import UserRepository
from ..users.service import require_user_by_id, require_user_by_username
from .model import AttendanceSession
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def with_formatted_duration(session: AttendanceSession) -> AttendanceSession:
    if session.total_duration is not None:
        text = format_duration(session.total_duration)
    elif session.check_out_time is not None:
        text = format_duration(seconds_between(session.check_in_time, session.check_out_time))
    else:
        text = DURATION_NOT_AVAILABLE
    return replace(session, total_duration_formatted=text)


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, users: UserRepository):
        self._attendance = attendance
        self._users = users

    def check_in(self, username: str, *, now: Optional[datetime] = None) -> AttendanceSession:
        logger.info("Processing check-in for user: %s", username)
        user = require_user_by_username(self._users, username)

        if self._attendance.get_open_for_user(user.user_id):
            logger.warning("Check-in failed for user %s: already has an active check-in", username)
            raise ActiveSessionExistsError("Check-in failed: You are already checked in.")

        # The store's open-session constraint covers the race between the check above and this insert.
        session = self._attendance.create_session(user_id=user.user_id, check_in_time=now or now_local())
        logger.info("User %s checked in successfully. Session ID: %s", username, session.session_id)
        return session

    def check_out(self, username: str, *, now: Optional[datetime] = None) -> AttendanceSession:
        logger.info("Processing check-out for user: %s", username)
        user = require_user_by_username(self._users, username)

        session = self._attendance.get_open_for_user(user.user_id)
        if not session:
            logger.warning("Check-out failed for user %s: no active check-in", username)
            raise NoActiveSessionError("Check-out failed: No active check-in found.")

        check_out_time = now or now_local()
        duration = max(seconds_between(session.check_in_time, check_out_time), 0)
        if not self._attendance.close_session(
            session_id=session.session_id,
            check_out_time=check_out_time,
            total_duration=duration,
        ):
            # Closed by a concurrent request in the meantime.
            raise NoActiveSessionError("Check-out failed: No active check-in found.")

        logger.info("User %s checked out successfully. Session ID: %s", username, session.session_id)
        return replace(
            session,
            check_out_time=check_out_time,
            total_duration=duration,
            total_duration_formatted=format_duration(duration),
        )

    def list_sessions_for_user(self, user_id: int) -> Sequence[AttendanceSession]:
        logger.info("Fetching all attendance data for user ID: %s", user_id)
        user = require_user_by_id(self._users, user_id)
        return self._list(user.user_id)

    def list_my_sessions(self, username: str) -> Sequence[AttendanceSession]:
        logger.info("Fetching all attendance data for user: %s", username)
        user = require_user_by_username(self._users, username)
        return self._list(user.user_id)

    def _list(self, user_id: int) -> list[AttendanceSession]:
        sessions = [with_formatted_duration(s) for s in self._attendance.list_for_user(user_id)]
        logger.info("Found %d attendance records for user ID: %s", len(sessions), user_id)
        return sessions
