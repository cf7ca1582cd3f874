from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import utc_now
from ..common.validators import optional_str, require_non_empty
from ..users.model import Principal
from .model import ActivityLog
from .repository import ActivityLogRepository


class ActivityLogService:
    def __init__(self, logs: ActivityLogRepository):
        self._logs = logs

    def record(self, principal: Principal, payload: dict[str, Any], *, now: Optional[datetime] = None) -> ActivityLog:
        # Always attributed to the caller, whatever the body says.
        return self._logs.create_log(
            user_id=principal.id,
            activity=require_non_empty(payload.get("activity"), "Activity"),
            description=optional_str(payload.get("description")),
            created_at=now or utc_now(),
        )

    def for_user(self, user_id: str, *, on_date: Optional[date] = None) -> Sequence[ActivityLog]:
        return self._logs.list_for_user(user_id, on_date=on_date)

    def for_company(
        self,
        principal: Principal,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        user_id: Optional[str] = None,
    ) -> Sequence[ActivityLog]:
        return self._logs.list_for_company(
            principal.company_id, start_date=start_date, end_date=end_date, user_id=user_id
        )
