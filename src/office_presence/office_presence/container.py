from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.policy import EditWindowPolicy
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import PLANNING_WINDOW_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository
from .holidays.service import HolidayService
from .matching.service import ScheduleMatchService
from .team.service import TeamCalendarService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, FavoritesService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    holidays_repo: HolidayRepository

    auth_service: AuthService
    favorites_service: FavoritesService
    attendance_service: AttendanceService
    holiday_service: HolidayService
    team_service: TeamCalendarService
    match_service: ScheduleMatchService


def wire_services(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    holidays_repo: HolidayRepository,
    policy: EditWindowPolicy | None = None,
) -> Container:
    policy = policy or EditWindowPolicy(window_days=PLANNING_WINDOW_DAYS)

    attendance_service = AttendanceService(attendance_repo, holidays_repo, users_repo, policy=policy)

    return Container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        holidays_repo=holidays_repo,
        auth_service=AuthService(users_repo),
        favorites_service=FavoritesService(users_repo),
        attendance_service=attendance_service,
        holiday_service=HolidayService(holidays_repo),
        team_service=TeamCalendarService(users_repo, attendance_repo, holidays_repo, today=policy.today),
        match_service=ScheduleMatchService(attendance_repo, holidays_repo, users_repo, attendance_service),
    )


def build_container(*, db_config: dict, window_days: int = PLANNING_WINDOW_DAYS) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return wire_services(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        holidays_repo=MySQLHolidayRepository(conn),
        policy=EditWindowPolicy(window_days=window_days),
    )
