from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..common.datetime_utils import inclusive_days, utc_now
from ..common.serialization import to_jsonable
from ..common.validators import optional_str, require_amount, require_date, require_enum, require_non_empty
from ..core.enums import LeaveType, RequestStatus
from ..core.exceptions import ValidationError
from ..users.model import Principal
from ..users.repository import UserRepository
from .model import Leave
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, leaves: LeaveRepository, users: UserRepository):
        self._leaves = leaves
        self._users = users

    def get(self, leave_id: str) -> Optional[Leave]:
        return self._leaves.get_by_id(leave_id)

    def apply(self, principal: Principal, payload: dict[str, Any]) -> Leave:
        leave_type = require_enum(payload.get("leave_type"), LeaveType, "Leave type")
        start_date = require_date(payload.get("start_date"), "Start date")
        end_date = require_date(payload.get("end_date"), "End date")
        reason = require_non_empty(payload.get("reason"), "Reason")
        if end_date < start_date:
            raise ValidationError("End date must be on or after start date")

        if payload.get("total_days") is not None:
            total_days = require_amount(payload["total_days"], "Total days", allow_zero=False)
        else:
            total_days = Decimal(inclusive_days(start_date, end_date))

        return self._leaves.create_leave(
            user_id=principal.id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            total_days=total_days,
            reason=reason,
        )

    def list_for_user(self, user_id: str) -> Sequence[Leave]:
        return self._leaves.list_for_user(user_id)

    def pending_for_company(self, principal: Principal) -> list[dict[str, Any]]:
        users = {u.id: u for u in self._users.list_by_company(principal.company_id, is_active=None)}
        out: list[dict[str, Any]] = []
        for leave in self._leaves.list_pending_for_company(principal.company_id):
            row = to_jsonable(leave)
            user = users.get(leave.user_id)
            row["user"] = user.summary() if user else None
            out.append(row)
        return out

    def approve(self, principal: Principal, leave: Leave, remarks: Any = None, *, now: Optional[datetime] = None) -> Leave:
        return self._decide(principal, leave, RequestStatus.APPROVED, remarks, now)

    def reject(self, principal: Principal, leave: Leave, remarks: Any = None, *, now: Optional[datetime] = None) -> Leave:
        return self._decide(principal, leave, RequestStatus.REJECTED, remarks, now)

    def _decide(
        self,
        principal: Principal,
        leave: Leave,
        status: RequestStatus,
        remarks: Any,
        now: Optional[datetime],
    ) -> Leave:
        if leave.status != RequestStatus.PENDING:
            raise ValidationError("Leave application has already been processed")

        decided = self._leaves.decide(
            leave_id=leave.id,
            status=status,
            decided_by=principal.id,
            decided_at=now or utc_now(),
            remarks=optional_str(remarks),
        )
        if decided is None:
            raise ValidationError("Leave application has already been processed")
        logger.info("Leave %s %s by=%s", leave.id, status.value, principal.id)
        return decided
