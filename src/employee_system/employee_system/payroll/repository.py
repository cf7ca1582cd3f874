from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import SalaryStatus
from .model import Salary


class SalaryRepository(Protocol):
    def create_salary(
        self,
        *,
        user_id: str,
        month: str,
        basic_salary: Decimal,
        allowances: Decimal,
        deductions: Decimal,
        net_salary: Decimal,
        currency: str,
        status: SalaryStatus,
    ) -> Salary:
        raise NotImplementedError

    def get_by_id(self, salary_id: str) -> Optional[Salary]:
        raise NotImplementedError

    def get_for_user_and_month(self, user_id: str, month: str) -> Optional[Salary]:
        raise NotImplementedError

    def list_for_user(self, user_id: str) -> Sequence[Salary]:
        raise NotImplementedError
