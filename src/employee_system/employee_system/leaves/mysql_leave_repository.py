from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import LeaveType, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id, to_decimal
from .model import Leave
from .repository import LeaveRepository

_COLUMNS = """
    l.id, l.user_id, l.leave_type, l.start_date, l.end_date, l.total_days, l.reason,
    l.status, l.applied_at, l.approved_by, l.approved_at, l.remarks
"""


def _row_to_leave(r: dict) -> Leave:
    return Leave(
        id=r["id"],
        user_id=r["user_id"],
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        total_days=to_decimal(r["total_days"]),
        reason=r["reason"],
        status=RequestStatus(r["status"]),
        applied_at=r["applied_at"],
        approved_by=r.get("approved_by"),
        approved_at=r.get("approved_at"),
        remarks=r.get("remarks"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_leave(
        self,
        *,
        user_id: str,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        total_days: Decimal,
        reason: str,
    ) -> Leave:
        leave_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leaves(id, user_id, leave_type, start_date, end_date, total_days, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    leave_id,
                    user_id,
                    leave_type.value,
                    start_date,
                    end_date,
                    total_days,
                    reason,
                    RequestStatus.PENDING.value,
                ),
            )
        return self.get_by_id(leave_id)

    def get_by_id(self, leave_id: str) -> Optional[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leaves l WHERE l.id=%s", (leave_id,))
            r = fetchone(cur)
            return _row_to_leave(r) if r else None

    def list_for_user(self, user_id: str) -> Sequence[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM leaves l WHERE l.user_id=%s ORDER BY l.applied_at DESC",
                (user_id,),
            )
            return [_row_to_leave(r) for r in fetchall(cur)]

    def list_pending_for_company(self, company_id: str) -> Sequence[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leaves l
                JOIN users u ON u.id = l.user_id
                WHERE u.company_id=%s AND l.status=%s
                ORDER BY l.applied_at DESC
                """,
                (company_id, RequestStatus.PENDING.value),
            )
            return [_row_to_leave(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        leave_id: str,
        status: RequestStatus,
        decided_by: str,
        decided_at: datetime,
        remarks: Optional[str] = None,
    ) -> Optional[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leaves
                SET status=%s, approved_by=%s, approved_at=%s, remarks=%s
                WHERE id=%s AND status=%s
                """,
                (status.value, decided_by, decided_at, remarks, leave_id, RequestStatus.PENDING.value),
            )
            if cur.rowcount == 0:
                return None
        return self.get_by_id(leave_id)
