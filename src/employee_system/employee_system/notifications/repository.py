from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import NotificationType
from .model import Notification


class NotificationRepository(Protocol):
    def create_many(
        self,
        *,
        user_ids: Sequence[str],
        title: str,
        message: str,
        type: NotificationType,
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, notification_id: str) -> Optional[Notification]:
        raise NotImplementedError

    def list_for_user(self, user_id: str) -> Sequence[Notification]:
        raise NotImplementedError

    def mark_read(self, notification_id: str) -> Optional[Notification]:
        raise NotImplementedError
