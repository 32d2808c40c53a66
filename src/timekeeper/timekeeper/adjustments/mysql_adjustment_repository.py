from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import AdjustmentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceAdjustment
from .repository import AdjustmentRepository

_COLUMNS = (
    "adjustment_id, user_id, requested_check_in, requested_check_out, reason, status, "
    "approved_by_user_id, action_taken_at"
)


def _to_adjustment(r: dict) -> AttendanceAdjustment:
    approved_by = r.get("approved_by_user_id")
    return AttendanceAdjustment(
        adjustment_id=int(r["adjustment_id"]),
        user_id=int(r["user_id"]),
        requested_check_in=r["requested_check_in"],
        requested_check_out=r["requested_check_out"],
        reason=r.get("reason"),
        status=AdjustmentStatus(r["status"]),
        approved_by=int(approved_by) if approved_by is not None else None,
        action_taken_at=r.get("action_taken_at"),
    )


class MySQLAdjustmentRepository(AdjustmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: int,
        requested_check_in: datetime,
        requested_check_out: datetime,
        reason: Optional[str],
    ) -> AttendanceAdjustment:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_adjustments(user_id, requested_check_in, requested_check_out, reason, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(user_id), requested_check_in, requested_check_out, reason, AdjustmentStatus.PENDING.value),
            )
            return AttendanceAdjustment(
                adjustment_id=int(cur.lastrowid),
                user_id=int(user_id),
                requested_check_in=requested_check_in,
                requested_check_out=requested_check_out,
                reason=reason,
                status=AdjustmentStatus.PENDING,
            )

    def get_by_id(self, adjustment_id: int, *, for_update: bool = False) -> Optional[AttendanceAdjustment]:
        lock = " FOR UPDATE" if for_update else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_adjustments WHERE adjustment_id=%s{lock}",
                (int(adjustment_id),),
            )
            r = fetchone(cur)
            return _to_adjustment(r) if r else None

    def list_by_status(self, status: AdjustmentStatus) -> Sequence[AttendanceAdjustment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_adjustments WHERE status=%s ORDER BY adjustment_id ASC",
                (status.value,),
            )
            return [_to_adjustment(r) for r in fetchall(cur)]

    def list_for_user(self, user_id: int) -> Sequence[AttendanceAdjustment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_adjustments WHERE user_id=%s ORDER BY adjustment_id DESC",
                (int(user_id),),
            )
            return [_to_adjustment(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        adjustment_id: int,
        status: AdjustmentStatus,
        decided_by: int,
        decided_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_adjustments
                SET status=%s, approved_by_user_id=%s, action_taken_at=%s
                WHERE adjustment_id=%s AND status=%s
                """,
                (status.value, int(decided_by), decided_at, int(adjustment_id), AdjustmentStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def delete_all_for_user(self, user_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            # Requests this user decided for others stay; only the approver reference goes.
            cur.execute(
                "UPDATE attendance_adjustments SET approved_by_user_id=NULL WHERE approved_by_user_id=%s",
                (int(user_id),),
            )
            cur.execute("DELETE FROM attendance_adjustments WHERE user_id=%s", (int(user_id),))
            return int(cur.rowcount)
