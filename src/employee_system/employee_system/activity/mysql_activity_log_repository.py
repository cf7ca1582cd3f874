from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, new_id
from .model import ActivityLog
from .repository import ActivityLogRepository

_COLUMNS = "l.id, l.user_id, l.activity, l.description, l.created_at"


def _row_to_log(r: dict) -> ActivityLog:
    return ActivityLog(
        id=r["id"],
        user_id=r["user_id"],
        activity=r["activity"],
        description=r.get("description"),
        created_at=r["created_at"],
    )


class MySQLActivityLogRepository(ActivityLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_log(
        self,
        *,
        user_id: str,
        activity: str,
        description: Optional[str],
        created_at: datetime,
    ) -> ActivityLog:
        log_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO activity_logs(id, user_id, activity, description, created_at) VALUES(%s,%s,%s,%s,%s)",
                (log_id, user_id, activity, description, created_at),
            )
        return ActivityLog(id=log_id, user_id=user_id, activity=activity, description=description, created_at=created_at)

    def list_for_user(self, user_id: str, *, on_date: Optional[date] = None) -> Sequence[ActivityLog]:
        clauses = ["l.user_id=%s"]
        params: list[Any] = [user_id]
        if on_date:
            clauses.append("l.created_at >= %s AND l.created_at < %s")
            params.extend([on_date, on_date + timedelta(days=1)])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM activity_logs l WHERE {' AND '.join(clauses)} ORDER BY l.created_at DESC",
                tuple(params),
            )
            return [_row_to_log(r) for r in fetchall(cur)]

    def list_for_company(
        self,
        company_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        user_id: Optional[str] = None,
    ) -> Sequence[ActivityLog]:
        clauses = ["u.company_id=%s"]
        params: list[Any] = [company_id]
        if start_date:
            clauses.append("l.created_at >= %s")
            params.append(start_date)
        if end_date:
            clauses.append("l.created_at < %s")
            params.append(end_date + timedelta(days=1))
        if user_id:
            clauses.append("l.user_id=%s")
            params.append(user_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM activity_logs l
                JOIN users u ON u.id = l.user_id
                WHERE {' AND '.join(clauses)}
                ORDER BY l.created_at DESC
                """,
                tuple(params),
            )
            return [_row_to_log(r) for r in fetchall(cur)]
