from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import LeaveType, RequestStatus


@dataclass(frozen=True)
class Leave:
    id: str
    user_id: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    total_days: Decimal
    reason: str
    status: RequestStatus
    applied_at: datetime
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    remarks: Optional[str] = None
