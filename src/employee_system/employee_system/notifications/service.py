from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.validators import require_enum, require_non_empty
from ..core.enums import NotificationType
from ..core.exceptions import Forbidden, NotFound
from ..users.model import Principal, User
from ..users.repository import UserRepository
from .model import Notification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, notifications: NotificationRepository, users: UserRepository):
        self._notifications = notifications
        self._users = users

    def get(self, notification_id: str) -> Optional[Notification]:
        return self._notifications.get_by_id(notification_id)

    def broadcast(self, principal: Principal, payload: dict[str, Any]) -> int:
        title = require_non_empty(payload.get("title"), "Title")
        message = require_non_empty(payload.get("message"), "Message")
        kind = require_enum(payload.get("type") or NotificationType.INFO.value, NotificationType, "Type")

        employees = self._users.list_by_company(principal.company_id, is_active=True)
        count = self._notifications.create_many(
            user_ids=[u.id for u in employees],
            title=title,
            message=message,
            type=kind,
        )
        logger.info("Broadcast to %d employees company=%s by=%s", count, principal.company_id, principal.id)
        return count

    def list_for(self, principal: Principal, target: User) -> Sequence[Notification]:
        if target.id != principal.id and not principal.is_administrative:
            raise Forbidden("You can only view your own notifications")
        return self._notifications.list_for_user(target.id)

    def mark_read(self, principal: Principal, notification: Notification) -> Notification:
        # Administrators may read colleagues' lists but only mark their own items.
        if notification.user_id != principal.id:
            raise NotFound("Notification not found or does not belong to you")
        updated = self._notifications.mark_read(notification.id)
        if updated is None:
            raise NotFound("Notification not found or does not belong to you")
        return updated
