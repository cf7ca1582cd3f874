from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import utc_now
from ..common.serialization import to_jsonable
from ..common.validators import optional_str, require_amount, require_date, require_enum, require_non_empty
from ..core.enums import ExpenseCategory, RequestStatus
from ..core.exceptions import ValidationError
from ..users.model import Principal
from ..users.repository import UserRepository
from .model import TravelClaim
from .repository import TravelClaimRepository

logger = logging.getLogger(__name__)

_DECISIONS = {RequestStatus.APPROVED, RequestStatus.REJECTED}


class TravelClaimService:
    def __init__(self, claims: TravelClaimRepository, users: UserRepository):
        self._claims = claims
        self._users = users

    def get(self, claim_id: str) -> Optional[TravelClaim]:
        return self._claims.get_by_id(claim_id)

    def submit(self, principal: Principal, payload: dict[str, Any]) -> TravelClaim:
        return self._claims.create_claim(
            user_id=principal.id,
            amount=require_amount(payload.get("amount"), "Amount", allow_zero=False),
            description=require_non_empty(payload.get("description"), "Description"),
            expense_date=require_date(payload.get("date"), "Date"),
            category=require_enum(payload.get("category"), ExpenseCategory, "Category"),
        )

    def list_for_user(self, user_id: str) -> Sequence[TravelClaim]:
        return self._claims.list_for_user(user_id)

    def pending_for_company(self, principal: Principal) -> list[dict[str, Any]]:
        users = {u.id: u for u in self._users.list_by_company(principal.company_id, is_active=None)}
        out: list[dict[str, Any]] = []
        for claim in self._claims.list_pending_for_company(principal.company_id):
            row = to_jsonable(claim)
            user = users.get(claim.user_id)
            row["user"] = user.summary() if user else None
            out.append(row)
        return out

    def decide(
        self,
        principal: Principal,
        claim: TravelClaim,
        status: Any,
        remarks: Any = None,
        *,
        now: Optional[datetime] = None,
    ) -> TravelClaim:
        new_status = require_enum(status, RequestStatus, "Status")
        if new_status not in _DECISIONS:
            raise ValidationError("Status must be approved or rejected")
        if claim.status != RequestStatus.PENDING:
            raise ValidationError("Travel claim has already been processed")

        decided = self._claims.decide(
            claim_id=claim.id,
            status=new_status,
            decided_by=principal.id,
            decided_at=now or utc_now(),
            remarks=optional_str(remarks),
        )
        if decided is None:
            raise ValidationError("Travel claim has already been processed")
        logger.info("Travel claim %s %s by=%s", claim.id, new_status.value, principal.id)
        return decided
