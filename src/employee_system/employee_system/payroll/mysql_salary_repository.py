from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import SalaryStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id, to_decimal
from .model import Salary
from .repository import SalaryRepository

_COLUMNS = """
    id, user_id, month, basic_salary, allowances, deductions, net_salary,
    currency, status, created_at
"""


def _row_to_salary(r: dict) -> Salary:
    return Salary(
        id=r["id"],
        user_id=r["user_id"],
        month=r["month"],
        basic_salary=to_decimal(r["basic_salary"]),
        allowances=to_decimal(r["allowances"]),
        deductions=to_decimal(r["deductions"]),
        net_salary=to_decimal(r["net_salary"]),
        currency=r["currency"],
        status=SalaryStatus(r["status"]),
        created_at=r.get("created_at"),
    )


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        salary_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO salaries(
                    id, user_id, month, basic_salary, allowances, deductions, net_salary, currency, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    salary_id,
                    user_id,
                    month,
                    basic_salary,
                    allowances,
                    deductions,
                    net_salary,
                    currency,
                    status.value,
                ),
            )
        return self.get_by_id(salary_id)

    def get_by_id(self, salary_id: str) -> Optional[Salary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM salaries WHERE id=%s", (salary_id,))
            r = fetchone(cur)
            return _row_to_salary(r) if r else None

    def get_for_user_and_month(self, user_id: str, month: str) -> Optional[Salary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM salaries WHERE user_id=%s AND month=%s", (user_id, month))
            r = fetchone(cur)
            return _row_to_salary(r) if r else None

    def list_for_user(self, user_id: str) -> Sequence[Salary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM salaries WHERE user_id=%s ORDER BY month DESC", (user_id,))
            return [_row_to_salary(r) for r in fetchall(cur)]
