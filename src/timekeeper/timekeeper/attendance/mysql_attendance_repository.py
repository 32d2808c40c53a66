from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import ActiveSessionExistsError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceSession
from .repository import AttendanceRepository

_COLUMNS = "session_id, user_id, check_in_time, check_out_time, total_duration_seconds"


def _to_session(r: dict) -> AttendanceSession:
    duration = r.get("total_duration_seconds")
    return AttendanceSession(
        session_id=int(r["session_id"]),
        user_id=int(r["user_id"]),
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
        total_duration=int(duration) if duration is not None else None,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_session(
        self,
        *,
        user_id: int,
        check_in_time: datetime,
        check_out_time: Optional[datetime] = None,
        total_duration: Optional[int] = None,
    ) -> AttendanceSession:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO attendance_sessions(user_id, check_in_time, check_out_time, total_duration_seconds)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (int(user_id), check_in_time, check_out_time, total_duration),
                )
            except mysql.connector.IntegrityError as e:
                # uq_attendance_open_session: one open session per user
                if is_duplicate_key(e):
                    raise ActiveSessionExistsError("Check-in failed: You are already checked in.") from e
                raise
            return AttendanceSession(
                session_id=int(cur.lastrowid),
                user_id=int(user_id),
                check_in_time=check_in_time,
                check_out_time=check_out_time,
                total_duration=total_duration,
            )

    def get_open_for_user(self, user_id: int) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE user_id=%s AND check_out_time IS NULL
                """,
                (int(user_id),),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    def close_session(self, *, session_id: int, check_out_time: datetime, total_duration: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_sessions
                SET check_out_time=%s, total_duration_seconds=%s
                WHERE session_id=%s AND check_out_time IS NULL
                """,
                (check_out_time, int(total_duration), int(session_id)),
            )
            return cur.rowcount > 0

    def list_for_user(self, user_id: int) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE user_id=%s
                ORDER BY check_in_time DESC
                """,
                (int(user_id),),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def list_for_user_between(self, user_id: int, start: datetime, end: datetime) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE user_id=%s AND check_in_time BETWEEN %s AND %s
                ORDER BY check_in_time ASC
                """,
                (int(user_id), start, end),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def delete_all_for_user(self, user_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_sessions WHERE user_id=%s", (int(user_id),))
            return int(cur.rowcount)
