from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import utc_now
from ..common.validators import optional_str
from ..core.exceptions import ValidationError
from ..users.model import Principal
from ..users.repository import UserRepository
from .model import AttendanceRecord, CompanyAttendanceRow
from .repository import AttendanceRepository


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, users: UserRepository):
        self._attendance = attendance
        self._users = users

    def check_in(self, principal: Principal, *, location=None, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or utc_now()
        if self._attendance.get_for_user_and_date(principal.id, now.date()):
            raise ValidationError("Already checked in for today")

        return self._attendance.create_checkin(
            user_id=principal.id,
            work_date=now.date(),
            check_in=now,
            location=optional_str(location),
        )

    def check_out(self, principal: Principal, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or utc_now()
        record = self._attendance.get_for_user_and_date(principal.id, now.date())
        if not record:
            raise ValidationError("No check-in found for today")
        if record.check_out is not None:
            raise ValidationError("Already checked out for today")

        hours = Decimal((now - record.check_in).total_seconds()) / Decimal(3600)
        return self._attendance.update_checkout(
            attendance_id=record.id,
            check_out=now,
            total_hours=hours.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP),
        )

    def history(
        self,
        user_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_user(user_id, start_date=start_date, end_date=end_date)

    def today(self, user_id: str, *, today: Optional[date] = None) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(user_id, today or utc_now().date())

    def company_today(self, principal: Principal, *, today: Optional[date] = None) -> list[CompanyAttendanceRow]:
        names = {u.id: u.full_name for u in self._users.list_by_company(principal.company_id)}
        records = self._attendance.list_for_company_on(principal.company_id, today or utc_now().date())
        return [CompanyAttendanceRow(record=r, user_name=names.get(r.user_id, "Unknown")) for r in records]
