from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.validators import optional_str, require_amount
from ..core.constants import DEFAULT_CURRENCY
from ..core.enums import SalaryStatus
from ..core.exceptions import ValidationError
from ..users.model import Principal, User
from .model import Salary
from .repository import SalaryRepository

logger = logging.getLogger(__name__)


class PayrollService:
    """Records salaries as supplied; no payroll formula beyond net = basic + allowances - deductions."""

    def __init__(self, salaries: SalaryRepository):
        self._salaries = salaries

    def get(self, salary_id: str) -> Optional[Salary]:
        return self._salaries.get_by_id(salary_id)

    def list_for_user(self, user_id: str) -> Sequence[Salary]:
        return self._salaries.list_for_user(user_id)

    def process(self, principal: Principal, employee: User, payload: dict[str, Any]) -> Salary:
        month = self._month_key(payload.get("month"), payload.get("year"))
        basic = require_amount(payload.get("basic_salary"), "Basic salary")
        allowances = require_amount(payload.get("allowances") or 0, "Allowances")
        deductions = require_amount(payload.get("deductions") or 0, "Deductions")
        if payload.get("net_salary") is not None:
            net = require_amount(payload["net_salary"], "Net salary")
        else:
            net = basic + allowances - deductions
            if net < 0:
                raise ValidationError("Deductions exceed gross salary")

        if self._salaries.get_for_user_and_month(employee.id, month):
            raise ValidationError(f"Salary for {month} has already been processed")

        salary = self._salaries.create_salary(
            user_id=employee.id,
            month=month,
            basic_salary=basic,
            allowances=allowances,
            deductions=deductions,
            net_salary=net,
            currency=optional_str(payload.get("currency")) or DEFAULT_CURRENCY,
            status=SalaryStatus.PROCESSED,
        )
        logger.info("Salary %s processed user=%s month=%s by=%s", salary.id, employee.id, month, principal.id)
        return salary

    @staticmethod
    def _month_key(month: Any, year: Any) -> str:
        try:
            m = int(month)
            y = int(year)
        except (TypeError, ValueError):
            raise ValidationError("Month and year are required")
        if not 1 <= m <= 12 or not 1900 <= y <= 9999:
            raise ValidationError("Month must be 1-12 and year a four-digit year")
        return f"{y}-{m:02d}"
