from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import ExpenseCategory, RequestStatus


@dataclass(frozen=True)
class TravelClaim:
    """Reimbursement claim for a single travel expense."""

    id: str
    user_id: str
    amount: Decimal
    description: str
    date: date
    category: ExpenseCategory
    status: RequestStatus
    submitted_at: datetime
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    remarks: Optional[str] = None
