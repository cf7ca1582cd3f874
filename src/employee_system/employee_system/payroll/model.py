from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import SalaryStatus


@dataclass(frozen=True)
class Salary:
    """One processed salary (payslip) for a month, month formatted YYYY-MM."""

    id: str
    user_id: str
    month: str
    basic_salary: Decimal
    allowances: Decimal
    deductions: Decimal
    net_salary: Decimal
    currency: str
    status: SalaryStatus
    created_at: Optional[datetime] = None
