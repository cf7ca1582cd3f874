from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one day of attendance for one user."""

    id: str
    user_id: str
    date: date
    check_in: datetime
    check_out: Optional[datetime]
    status: AttendanceStatus
    location: Optional[str] = None
    total_hours: Optional[Decimal] = None


@dataclass(frozen=True)
class CompanyAttendanceRow:
    """Read-model for the admin attendance board."""

    record: AttendanceRecord
    user_name: str
