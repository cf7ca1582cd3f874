from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import NotificationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id
from .model import Notification
from .repository import NotificationRepository

_COLUMNS = "id, user_id, title, message, type, is_read, created_at"


def _row_to_notification(r: dict) -> Notification:
    return Notification(
        id=r["id"],
        user_id=r["user_id"],
        title=r["title"],
        message=r["message"],
        type=NotificationType(r["type"]),
        is_read=bool(r["is_read"]),
        created_at=r.get("created_at"),
    )


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_many(
        self,
        *,
        user_ids: Sequence[str],
        title: str,
        message: str,
        type: NotificationType,
    ) -> int:
        if not user_ids:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                "INSERT INTO notifications(id, user_id, title, message, type) VALUES(%s,%s,%s,%s,%s)",
                [(new_id(), uid, title, message, type.value) for uid in user_ids],
            )
        return len(user_ids)

    def get_by_id(self, notification_id: str) -> Optional[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM notifications WHERE id=%s", (notification_id,))
            r = fetchone(cur)
            return _row_to_notification(r) if r else None

    def list_for_user(self, user_id: str) -> Sequence[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM notifications WHERE user_id=%s ORDER BY created_at DESC",
                (user_id,),
            )
            return [_row_to_notification(r) for r in fetchall(cur)]

    def mark_read(self, notification_id: str) -> Optional[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE notifications SET is_read=1 WHERE id=%s", (notification_id,))
        return self.get_by_id(notification_id)
