from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .adjustments.mysql_adjustment_repository import MySQLAdjustmentRepository
from .adjustments.repository import AdjustmentRepository
from .adjustments.service import AdjustmentService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_MONTHLY_LEAVE_QUOTA, DEFAULT_WEEK_FIRST_DAY, DEFAULT_WEEK_MIN_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .stats.service import AttendanceStatsService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    adjustments_repo: AdjustmentRepository
    leaves_repo: LeaveRepository

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    adjustment_service: AdjustmentService
    leave_service: LeaveService
    stats_service: AttendanceStatsService


def wire_services(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    adjustments_repo: AdjustmentRepository,
    leaves_repo: LeaveRepository,
    conn: Optional[DatabaseConnection] = None,
    transaction=None,
    monthly_quota: int = DEFAULT_MONTHLY_LEAVE_QUOTA,
    week_first_day: int = DEFAULT_WEEK_FIRST_DAY,
    week_min_days: int = DEFAULT_WEEK_MIN_DAYS,
) -> Container:
    """Build services on top of any set of repositories."""

    return Container(
        conn=conn,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        adjustments_repo=adjustments_repo,
        leaves_repo=leaves_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(
            users_repo,
            attendance_repo,
            adjustments_repo,
            leaves_repo,
            transaction=transaction,
        ),
        attendance_service=AttendanceService(attendance_repo, users_repo),
        adjustment_service=AdjustmentService(
            adjustments_repo,
            attendance_repo,
            users_repo,
            transaction=transaction,
        ),
        leave_service=LeaveService(
            leaves_repo,
            users_repo,
            monthly_quota=monthly_quota,
            transaction=transaction,
        ),
        stats_service=AttendanceStatsService(
            attendance_repo,
            users_repo,
            week_first_day=week_first_day,
            week_min_days=week_min_days,
        ),
    )


def build_container(
    *,
    db_config: dict,
    monthly_quota: int = DEFAULT_MONTHLY_LEAVE_QUOTA,
    week_first_day: int = DEFAULT_WEEK_FIRST_DAY,
    week_min_days: int = DEFAULT_WEEK_MIN_DAYS,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    return wire_services(
        conn=conn,
        transaction=conn.transaction,
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        adjustments_repo=MySQLAdjustmentRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        monthly_quota=monthly_quota,
        week_first_day=week_first_day,
        week_min_days=week_min_days,
    )
