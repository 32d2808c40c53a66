from __future__ import annotations

import logging
from contextlib import nullcontext
from dataclasses import replace
from datetime import date
from typing import Callable, ContextManager, Optional, Sequence

from ..common.datetime_utils import inclusive_day_count, month_date_range, now_local
from ..core.constants import DEFAULT_MONTHLY_LEAVE_QUOTA
from ..core.enums import LeaveStatus
from ..core.exceptions import InvalidLeaveRequestError, NotFoundError
from ..users.model import User
from ..users.repository import UserRepository
from ..users.service import require_user_by_username
from .model import Leave, LeaveDraft
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    """Leave applications with a per-calendar-month day quota."""

    def __init__(
        self,
        leaves: LeaveRepository,
        users: UserRepository,
        *,
        monthly_quota: int = DEFAULT_MONTHLY_LEAVE_QUOTA,
        transaction: Optional[Callable[[], ContextManager]] = None,
    ):
        self._leaves = leaves
        self._users = users
        self._monthly_quota = int(monthly_quota)
        self._transaction = transaction or nullcontext

    def apply(self, username: str, draft: LeaveDraft, *, today: Optional[date] = None) -> Leave:
        logger.info("Applying leave for user: %s", username)
        user = require_user_by_username(self._users, username)
        today = today or now_local().date()

        with self._transaction():
            # One application per user at a time between quota check and insert.
            self._users.lock_by_id(user.user_id)
            days = self._validate(draft, user, today)
            leave = self._leaves.create(
                user_id=user.user_id,
                start_date=draft.start_date,
                end_date=draft.end_date,
                reason=(draft.reason or "").strip() or None,
                number_of_days=days,
                status=LeaveStatus.PENDING,
            )
        logger.info("Leave applied successfully for user: %s. Leave ID: %s", username, leave.leave_id)
        return leave

    def _validate(self, draft: LeaveDraft, user: User, today: date) -> int:
        if draft.start_date is None:
            logger.warning("Leave validation failed: start date is missing.")
            raise InvalidLeaveRequestError("Start date cannot be null")
        if draft.end_date is None:
            logger.warning("Leave validation failed: end date is missing.")
            raise InvalidLeaveRequestError("End date cannot be null")
        if draft.start_date < today:
            logger.warning("Leave validation failed: leave applied for past dates.")
            raise InvalidLeaveRequestError("Leave cannot be applied for past dates")
        if draft.end_date < draft.start_date:
            logger.warning("Leave validation failed: end date is before start date.")
            raise InvalidLeaveRequestError("End date cannot be before start date")

        days = inclusive_day_count(draft.start_date, draft.end_date)
        month_start, month_end = month_date_range(draft.start_date)
        booked = self._leaves.list_for_user_starting_between(user.user_id, month_start, month_end)
        used = sum(lv.number_of_days for lv in booked if lv.status != LeaveStatus.REJECTED)

        if used + days > self._monthly_quota:
            logger.warning("Leave validation failed: monthly leave quota exceeded for user: %s", user.username)
            raise InvalidLeaveRequestError(
                f"Monthly leave quota exceeded. Available: {self._monthly_quota - used}, Requested: {days}"
            )
        return days

    def process(self, leave_id: int, status: LeaveStatus, admin_comment: Optional[str] = None) -> Leave:
        """Set a leave's status and comment.

        The current status is not checked, so an already decided leave can be
        processed again.
        """
        logger.info("Processing leave request %s. Status: %s, Admin comment: %s", leave_id, status, admin_comment)
        leave = self._leaves.get_by_id(int(leave_id))
        if not leave:
            logger.warning("Leave request not found for ID: %s", leave_id)
            raise NotFoundError(f"Leave request with ID {leave_id} not found")
        if leave.status != LeaveStatus.PENDING:
            logger.warning("Leave %s is being re-processed (was %s)", leave_id, leave.status.value)

        self._leaves.update_status(leave_id=leave.leave_id, status=status, admin_comment=admin_comment)
        logger.info("Leave request processed successfully for leave ID: %s", leave_id)
        return replace(leave, status=status, admin_comment=admin_comment)

    def list_for_user(self, username: str) -> Sequence[Leave]:
        logger.info("Fetching leaves for user: %s", username)
        user = require_user_by_username(self._users, username)
        return self._leaves.list_for_user(user.user_id)

    def list_pending(self) -> Sequence[Leave]:
        logger.info("Fetching all pending leaves.")
        return self._leaves.list_by_status(LeaveStatus.PENDING)
