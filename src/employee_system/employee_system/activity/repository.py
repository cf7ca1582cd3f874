from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import ActivityLog


class ActivityLogRepository(Protocol):
    def create_log(
        self,
        *,
        user_id: str,
        activity: str,
        description: Optional[str],
        created_at: datetime,
    ) -> ActivityLog:
        raise NotImplementedError

    def list_for_user(self, user_id: str, *, on_date: Optional[date] = None) -> Sequence[ActivityLog]:
        raise NotImplementedError

    def list_for_company(
        self,
        company_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        user_id: Optional[str] = None,
    ) -> Sequence[ActivityLog]:
        raise NotImplementedError
