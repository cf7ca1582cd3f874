from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import NotificationType


@dataclass(frozen=True)
class Notification:
    id: str
    user_id: str
    title: str
    message: str
    type: NotificationType
    is_read: bool = False
    created_at: Optional[datetime] = None
