from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id, to_decimal
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "a.id, a.user_id, a.date, a.check_in, a.check_out, a.status, a.location, a.total_hours"


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=r["id"],
        user_id=r["user_id"],
        date=r["date"],
        check_in=r["check_in"],
        check_out=r.get("check_out"),
        status=AttendanceStatus(r["status"]),
        location=r.get("location"),
        total_hours=to_decimal(r.get("total_hours")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get(self, attendance_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance a WHERE a.id=%s", (attendance_id,))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance a WHERE a.user_id=%s AND a.date=%s",
                (user_id, work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_for_user(
        self,
        user_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["a.user_id=%s"]
        params: list[Any] = [user_id]
        if start_date:
            clauses.append("a.date >= %s")
            params.append(start_date)
        if end_date:
            clauses.append("a.date <= %s")
            params.append(end_date)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance a WHERE {' AND '.join(clauses)} ORDER BY a.date DESC",
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_company_on(self, company_id: str, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance a
                JOIN users u ON u.id = a.user_id
                WHERE u.company_id=%s AND a.date=%s
                ORDER BY a.check_in
                """,
                (company_id, work_date),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def create_checkin(
        self,
        *,
        user_id: str,
        work_date: date,
        check_in: datetime,
        location: Optional[str] = None,
    ) -> AttendanceRecord:
        attendance_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(id, user_id, date, check_in, status, location)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (attendance_id, user_id, work_date, check_in, AttendanceStatus.PRESENT.value, location),
            )
        return self._get(attendance_id)

    def update_checkout(self, *, attendance_id: str, check_out: datetime, total_hours: Decimal) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance SET check_out=%s, total_hours=%s WHERE id=%s",
                (check_out, total_hours, attendance_id),
            )
        return self._get(attendance_id)
