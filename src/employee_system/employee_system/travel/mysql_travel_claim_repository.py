from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import ExpenseCategory, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id, to_decimal
from .model import TravelClaim
from .repository import TravelClaimRepository

_COLUMNS = """
    c.id, c.user_id, c.amount, c.description, c.date, c.category, c.status,
    c.submitted_at, c.approved_by, c.approved_at, c.remarks
"""


def _row_to_claim(r: dict) -> TravelClaim:
    return TravelClaim(
        id=r["id"],
        user_id=r["user_id"],
        amount=to_decimal(r["amount"]),
        description=r["description"],
        date=r["date"],
        category=ExpenseCategory(r["category"]),
        status=RequestStatus(r["status"]),
        submitted_at=r["submitted_at"],
        approved_by=r.get("approved_by"),
        approved_at=r.get("approved_at"),
        remarks=r.get("remarks"),
    )


class MySQLTravelClaimRepository(TravelClaimRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_claim(
        self,
        *,
        user_id: str,
        amount: Decimal,
        description: str,
        expense_date: date,
        category: ExpenseCategory,
    ) -> TravelClaim:
        claim_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO travel_claims(id, user_id, amount, description, date, category, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    claim_id,
                    user_id,
                    amount,
                    description,
                    expense_date,
                    category.value,
                    RequestStatus.PENDING.value,
                ),
            )
        return self.get_by_id(claim_id)

    def get_by_id(self, claim_id: str) -> Optional[TravelClaim]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM travel_claims c WHERE c.id=%s", (claim_id,))
            r = fetchone(cur)
            return _row_to_claim(r) if r else None

    def list_for_user(self, user_id: str) -> Sequence[TravelClaim]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM travel_claims c WHERE c.user_id=%s ORDER BY c.submitted_at DESC",
                (user_id,),
            )
            return [_row_to_claim(r) for r in fetchall(cur)]

    def list_pending_for_company(self, company_id: str) -> Sequence[TravelClaim]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM travel_claims c
                JOIN users u ON u.id = c.user_id
                WHERE u.company_id=%s AND c.status=%s
                ORDER BY c.submitted_at DESC
                """,
                (company_id, RequestStatus.PENDING.value),
            )
            return [_row_to_claim(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        claim_id: str,
        status: RequestStatus,
        decided_by: str,
        decided_at: datetime,
        remarks: Optional[str] = None,
    ) -> Optional[TravelClaim]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE travel_claims
                SET status=%s, approved_by=%s, approved_at=%s, remarks=%s
                WHERE id=%s AND status=%s
                """,
                (status.value, decided_by, decided_at, remarks, claim_id, RequestStatus.PENDING.value),
            )
            if cur.rowcount == 0:
                return None
        return self.get_by_id(claim_id)
