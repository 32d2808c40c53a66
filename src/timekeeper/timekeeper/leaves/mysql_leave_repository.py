from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Leave
from .repository import LeaveRepository

_COLUMNS = "leave_id, user_id, start_date, end_date, reason, status, admin_comment, number_of_days"


def _to_leave(r: dict) -> Leave:
    return Leave(
        leave_id=int(r["leave_id"]),
        user_id=int(r["user_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r.get("reason"),
        number_of_days=int(r["number_of_days"]),
        status=LeaveStatus(r["status"]),
        admin_comment=r.get("admin_comment"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leaves(user_id, start_date, end_date, reason, status, number_of_days)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), start_date, end_date, reason, status.value, int(number_of_days)),
            )
            return Leave(
                leave_id=int(cur.lastrowid),
                user_id=int(user_id),
                start_date=start_date,
                end_date=end_date,
                reason=reason,
                number_of_days=int(number_of_days),
                status=status,
            )

    def get_by_id(self, leave_id: int) -> Optional[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leaves WHERE leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def list_for_user(self, user_id: int) -> Sequence[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM leaves WHERE user_id=%s ORDER BY start_date DESC, leave_id DESC",
                (int(user_id),),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def list_for_user_starting_between(self, user_id: int, start: date, end: date) -> Sequence[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leaves
                WHERE user_id=%s AND start_date BETWEEN %s AND %s
                """,
                (int(user_id), start, end),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def list_by_status(self, status: LeaveStatus) -> Sequence[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM leaves WHERE status=%s ORDER BY start_date ASC, leave_id ASC",
                (status.value,),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def update_status(self, *, leave_id: int, status: LeaveStatus, admin_comment: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE leaves SET status=%s, admin_comment=%s WHERE leave_id=%s",
                (status.value, admin_comment, int(leave_id)),
            )
            return cur.rowcount > 0

    def delete_all_for_user(self, user_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leaves WHERE user_id=%s", (int(user_id),))
            return int(cur.rowcount)
