from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from .activity.mysql_activity_log_repository import MySQLActivityLogRepository
from .activity.repository import ActivityLogRepository
from .activity.service import ActivityLogService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.guards import Guards
from .auth.memory_session_store import MemorySessionStore
from .auth.mysql_session_store import MySQLSessionStore
from .auth.security import PasswordHasher
from .auth.service import AuthService
from .auth.session_store import SessionStore
from .companies.mysql_company_repository import MySQLCompanyRepository
from .companies.repository import CompanyRepository
from .companies.service import CompanyService
from .core.constants import DEFAULT_SESSION_TTL_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.repository import NotificationRepository
from .notifications.service import NotificationService
from .payroll.mysql_salary_repository import MySQLSalaryRepository
from .payroll.repository import SalaryRepository
from .payroll.service import PayrollService
from .travel.mysql_travel_claim_repository import MySQLTravelClaimRepository
from .travel.repository import TravelClaimRepository
from .travel.service import TravelClaimService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    session_ttl: timedelta

    users_repo: UserRepository
    companies_repo: CompanyRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    travel_claims_repo: TravelClaimRepository
    salaries_repo: SalaryRepository
    notifications_repo: NotificationRepository
    activity_logs_repo: ActivityLogRepository
    session_store: SessionStore

    auth_service: AuthService
    user_service: UserService
    company_service: CompanyService
    attendance_service: AttendanceService
    leave_service: LeaveService
    travel_claim_service: TravelClaimService
    payroll_service: PayrollService
    notification_service: NotificationService
    activity_log_service: ActivityLogService
    guards: Guards


def wire_container(
    *,
    users_repo: UserRepository,
    companies_repo: CompanyRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    travel_claims_repo: TravelClaimRepository,
    salaries_repo: SalaryRepository,
    notifications_repo: NotificationRepository,
    activity_logs_repo: ActivityLogRepository,
    session_store: SessionStore,
    session_ttl: timedelta = timedelta(hours=DEFAULT_SESSION_TTL_HOURS),
    conn: Optional[DatabaseConnection] = None,
    hasher: Optional[PasswordHasher] = None,
) -> Container:
    """Build services on top of already constructed repositories."""

    hasher = hasher or PasswordHasher()
    auth_service = AuthService(users_repo, companies_repo, session_store, hasher)

    return Container(
        conn=conn,
        session_ttl=session_ttl,
        users_repo=users_repo,
        companies_repo=companies_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        travel_claims_repo=travel_claims_repo,
        salaries_repo=salaries_repo,
        notifications_repo=notifications_repo,
        activity_logs_repo=activity_logs_repo,
        session_store=session_store,
        auth_service=auth_service,
        user_service=UserService(users_repo, hasher),
        company_service=CompanyService(companies_repo),
        attendance_service=AttendanceService(attendance_repo, users_repo),
        leave_service=LeaveService(leaves_repo, users_repo),
        travel_claim_service=TravelClaimService(travel_claims_repo, users_repo),
        payroll_service=PayrollService(salaries_repo),
        notification_service=NotificationService(notifications_repo, users_repo),
        activity_log_service=ActivityLogService(activity_logs_repo),
        guards=Guards(auth_service),
    )


def build_container(
    *,
    db_config: dict,
    session_backend: str = "mysql",
    session_ttl: timedelta = timedelta(hours=DEFAULT_SESSION_TTL_HOURS),
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    if session_backend == "memory":
        session_store: SessionStore = MemorySessionStore(ttl=session_ttl)
    elif session_backend == "mysql":
        session_store = MySQLSessionStore(conn, ttl=session_ttl)
    else:
        raise ValueError(f"Unknown SESSION_BACKEND: {session_backend!r}")

    return wire_container(
        conn=conn,
        session_ttl=session_ttl,
        users_repo=MySQLUserRepository(conn),
        companies_repo=MySQLCompanyRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        travel_claims_repo=MySQLTravelClaimRepository(conn),
        salaries_repo=MySQLSalaryRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        activity_logs_repo=MySQLActivityLogRepository(conn),
        session_store=session_store,
    )
