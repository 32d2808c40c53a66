from __future__ import annotations

import logging
from contextlib import nullcontext
from dataclasses import replace
from datetime import datetime
from typing import Callable, ContextManager, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local, seconds_between
from ..common.validators import require_role
from ..core.enums import AdjustmentStatus, Role
from ..core.exceptions import InvalidRangeError, InvalidStateError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from ..users.service import require_user_by_username
from .model import AttendanceAdjustment
from .repository import AdjustmentRepository

logger = logging.getLogger(__name__)

_DECISIONS = {AdjustmentStatus.APPROVED, AdjustmentStatus.REJECTED}


class AdjustmentService:
    def __init__(
        self,
        adjustments: AdjustmentRepository,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        transaction: Optional[Callable[[], ContextManager]] = None,
    ):
        self._adjustments = adjustments
        self._attendance = attendance
        self._users = users
        self._transaction = transaction or nullcontext

    def request_adjustment(
        self,
        username: str,
        *,
        requested_check_in: datetime,
        requested_check_out: datetime,
        reason: Optional[str],
    ) -> AttendanceAdjustment:
        logger.info(
            "User %s is requesting an attendance adjustment from %s to %s",
            username,
            requested_check_in,
            requested_check_out,
        )
        user = require_user_by_username(self._users, username)

        if requested_check_in > requested_check_out:
            logger.warning(
                "Adjustment rejected for user %s: check-out %s is before check-in %s",
                username,
                requested_check_out,
                requested_check_in,
            )
            raise InvalidRangeError("Requested check-out time cannot be before requested check-in time.")

        adjustment = self._adjustments.create(
            user_id=user.user_id,
            requested_check_in=requested_check_in,
            requested_check_out=requested_check_out,
            reason=(reason or "").strip() or None,
        )
        logger.info("Attendance adjustment %s created for user %s", adjustment.adjustment_id, username)
        return adjustment

    def list_pending(self) -> Sequence[AttendanceAdjustment]:
        adjustments = self._adjustments.list_by_status(AdjustmentStatus.PENDING)
        logger.info("Found %d pending adjustments.", len(adjustments))
        return adjustments

    def list_my_adjustments(self, username: str) -> Sequence[AttendanceAdjustment]:
        user = require_user_by_username(self._users, username)
        return self._adjustments.list_for_user(user.user_id)

    def get_adjustment(self, adjustment_id: int) -> AttendanceAdjustment:
        adjustment = self._adjustments.get_by_id(int(adjustment_id))
        if not adjustment:
            logger.warning("Attendance adjustment request with ID %s not found.", adjustment_id)
            raise NotFoundError(f"Attendance adjustment request with ID {adjustment_id} not found.")
        return adjustment

    def approve(self, username: str, adjustment_id: int, *, now: Optional[datetime] = None) -> AttendanceAdjustment:
        return self.decide(username, adjustment_id, AdjustmentStatus.APPROVED, now=now)

    def reject(self, username: str, adjustment_id: int, *, now: Optional[datetime] = None) -> AttendanceAdjustment:
        return self.decide(username, adjustment_id, AdjustmentStatus.REJECTED, now=now)

    def decide(
        self,
        username: str,
        adjustment_id: int,
        target_status: AdjustmentStatus,
        *,
        now: Optional[datetime] = None,
    ) -> AttendanceAdjustment:
        """Approve or reject a PENDING request (ADMIN only).

        Approval also records the requested period as a closed attendance
        session. Both writes share one transaction.
        """
        logger.info("User %s is processing adjustment %s with status %s", username, adjustment_id, target_status)
        if target_status not in _DECISIONS:
            raise ValidationError("Adjustment can only be APPROVED or REJECTED.")

        admin = require_user_by_username(self._users, username)
        require_role(admin, Role.ADMIN, "Only ADMIN can process attendance adjustments.")

        decided_at = now or now_local()
        with self._transaction():
            adjustment = self._adjustments.get_by_id(int(adjustment_id), for_update=True)
            if not adjustment:
                logger.warning("Failed to process adjustment: request with ID %s not found.", adjustment_id)
                raise NotFoundError(f"Attendance adjustment request with ID {adjustment_id} not found.")
            if adjustment.status != AdjustmentStatus.PENDING:
                logger.warning(
                    "Failed to process adjustment %s: current status is %s",
                    adjustment_id,
                    adjustment.status.value,
                )
                raise InvalidStateError(
                    "Attendance adjustment request is not in PENDING status and cannot be processed."
                )

            if target_status == AdjustmentStatus.APPROVED:
                check_in = adjustment.requested_check_in
                check_out = adjustment.requested_check_out
                duration = seconds_between(check_in, check_out) if check_in and check_out else 0
                session = self._attendance.create_session(
                    user_id=adjustment.user_id,
                    check_in_time=check_in,
                    check_out_time=check_out,
                    total_duration=duration,
                )
                logger.info("Adjustment %s approved; created session %s", adjustment_id, session.session_id)
            else:
                logger.info("Attendance adjustment ID %s was rejected.", adjustment_id)

            if not self._adjustments.decide(
                adjustment_id=adjustment.adjustment_id,
                status=target_status,
                decided_by=admin.user_id,
                decided_at=decided_at,
            ):
                raise InvalidStateError(
                    "Attendance adjustment request is not in PENDING status and cannot be processed."
                )

        logger.info("Attendance adjustment ID %s processed successfully.", adjustment_id)
        return replace(adjustment, status=target_status, approved_by=admin.user_id, action_taken_at=decided_at)
