from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveType, RequestStatus
from .model import Leave


class LeaveRepository(Protocol):
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
        raise NotImplementedError

    def get_by_id(self, leave_id: str) -> Optional[Leave]:
        raise NotImplementedError

    def list_for_user(self, user_id: str) -> Sequence[Leave]:
        raise NotImplementedError

    def list_pending_for_company(self, company_id: str) -> Sequence[Leave]:
        raise NotImplementedError

    def decide(
        self,
        *,
        leave_id: str,
        status: RequestStatus,
        decided_by: str,
        decided_at: datetime,
        remarks: Optional[str] = None,
    ) -> Optional[Leave]:
        """Move a pending leave to `status`; None when it was not pending."""

        raise NotImplementedError
