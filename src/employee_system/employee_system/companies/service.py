from __future__ import annotations

from dataclasses import replace
from typing import Any

from ..common.validators import require_amount, require_bool, require_non_empty
from ..core.exceptions import NotFound, ValidationError
from ..users.model import Principal
from .model import Company, CompanySettings
from .repository import CompanyRepository

_WEEKDAYS = {"Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"}


class CompanyService:
    """Use case: company information and settings for the caller's company."""

    def __init__(self, companies: CompanyRepository):
        self._companies = companies

    def get_info(self, principal: Principal) -> Company:
        company = self._companies.get_by_id(principal.company_id)
        if not company:
            raise NotFound("Company not found")
        return company

    def rename(self, principal: Principal, name: Any) -> Company:
        name = require_non_empty(name, "Company name")
        company = self._companies.rename(principal.company_id, name)
        if not company:
            raise NotFound("Company not found")
        return company

    def get_settings(self, principal: Principal) -> CompanySettings:
        settings = self._companies.get_settings(principal.company_id)
        if settings is None:
            settings = self._companies.save_settings(CompanySettings(company_id=principal.company_id))
        return settings

    def update_settings(self, principal: Principal, payload: dict[str, Any]) -> CompanySettings:
        current = self.get_settings(principal)
        changes = self._parse_settings(payload)
        return self._companies.save_settings(replace(current, **changes))

    @staticmethod
    def _parse_settings(payload: dict[str, Any]) -> dict[str, Any]:
        changes: dict[str, Any] = {}

        if "working_hours_per_day" in payload:
            hours = require_amount(payload["working_hours_per_day"], "Working hours per day", allow_zero=False)
            if hours > 24:
                raise ValidationError("Working hours per day cannot exceed 24")
            changes["working_hours_per_day"] = hours
        if "working_days_per_week" in payload:
            days = payload["working_days_per_week"]
            if isinstance(days, bool) or not isinstance(days, int) or not 1 <= days <= 7:
                raise ValidationError("Working days per week must be between 1 and 7")
            changes["working_days_per_week"] = days
        if "weekend_days" in payload:
            weekend = payload["weekend_days"]
            if not isinstance(weekend, list) or any(d not in _WEEKDAYS for d in weekend):
                raise ValidationError("Weekend days must be a list of weekday names")
            changes["weekend_days"] = tuple(weekend)
        if "overtime_rate" in payload:
            changes["overtime_rate"] = require_amount(payload["overtime_rate"], "Overtime rate")
        for key, label in (
            ("currency", "Currency"),
            ("timezone", "Timezone"),
            ("date_format", "Date format"),
            ("fiscal_year_start", "Fiscal year start"),
        ):
            if key in payload:
                changes[key] = require_non_empty(payload[key], label)
        for key, label in (
            ("enable_biometric_auth", "enable_biometric_auth"),
            ("enable_geofencing", "enable_geofencing"),
        ):
            if key in payload:
                changes[key] = require_bool(payload[key], label)
        return changes
