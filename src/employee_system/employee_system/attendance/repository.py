from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_user(
        self,
        user_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_company_on(self, company_id: str, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        user_id: str,
        work_date: date,
        check_in: datetime,
        location: Optional[str] = None,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def update_checkout(self, *, attendance_id: str, check_out: datetime, total_hours: Decimal) -> AttendanceRecord:
        raise NotImplementedError
