from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.constants import DEFAULT_CURRENCY


@dataclass(frozen=True)
class Company:
    """Tenant. Every user belongs to exactly one company."""

    id: str
    name: str
    email: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class CompanySettings:
    company_id: str
    working_hours_per_day: Decimal = Decimal("8")
    working_days_per_week: int = 5
    weekend_days: tuple[str, ...] = field(default=("Saturday", "Sunday"))
    overtime_rate: Decimal = Decimal("1.5")
    currency: str = DEFAULT_CURRENCY
    timezone: str = "Asia/Kolkata"
    date_format: str = "DD/MM/YYYY"
    fiscal_year_start: str = "04-01"
    enable_biometric_auth: bool = False
    enable_geofencing: bool = False
