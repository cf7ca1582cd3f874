from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import ExpenseCategory, RequestStatus
from .model import TravelClaim


class TravelClaimRepository(Protocol):
    def create_claim(
        self,
        *,
        user_id: str,
        amount: Decimal,
        description: str,
        expense_date: date,
        category: ExpenseCategory,
    ) -> TravelClaim:
        raise NotImplementedError

    def get_by_id(self, claim_id: str) -> Optional[TravelClaim]:
        raise NotImplementedError

    def list_for_user(self, user_id: str) -> Sequence[TravelClaim]:
        raise NotImplementedError

    def list_pending_for_company(self, company_id: str) -> Sequence[TravelClaim]:
        raise NotImplementedError

    def decide(
        self,
        *,
        claim_id: str,
        status: RequestStatus,
        decided_by: str,
        decided_at: datetime,
        remarks: Optional[str] = None,
    ) -> Optional[TravelClaim]:
        """Move a pending claim to `status`; None when it was not pending."""

        raise NotImplementedError
