from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..auth.security import PasswordHasher
from ..common.validators import (
    optional_float,
    optional_str,
    require_bool,
    require_enum,
    require_min_length,
    require_non_empty,
)
from ..core.constants import PASSWORD_MIN_LENGTH
from ..core.enums import Role
from ..core.exceptions import NotFound, ValidationError
from .model import UPDATABLE_USER_FIELDS, Principal, User
from .repository import UserRepository

logger = logging.getLogger(__name__)

_PROFILE_TEXT_FIELDS = ("department", "position", "phone", "address")


class UserService:
    """Use case: employee management within the caller's company.

    Targets passed in as `User` have already passed the company-ownership guard.
    """

    def __init__(self, users: UserRepository, hasher: Optional[PasswordHasher] = None):
        self._users = users
        self._hasher = hasher or PasswordHasher()

    def list_employees(
        self,
        principal: Principal,
        *,
        search: Optional[str] = None,
        role: Optional[str] = None,
        is_active: Optional[str] = None,
    ) -> Sequence[User]:
        # is_active: missing -> active only, "all" -> everyone, "true"/"false" -> that state
        if is_active == "all":
            active_filter = None
        elif is_active is None:
            active_filter = True
        else:
            active_filter = is_active.lower() == "true"

        return self._users.list_by_company(
            principal.company_id,
            search=(search or "").strip() or None,
            role=require_enum(role, Role, "Role") if role else None,
            is_active=active_filter,
        )

    def create_employee(self, principal: Principal, payload: dict[str, Any]) -> User:
        email = require_non_empty(payload.get("email"), "Email").lower()
        password = require_min_length(payload.get("password"), "Password", PASSWORD_MIN_LENGTH)
        full_name = require_non_empty(payload.get("full_name"), "Full name")
        role = require_enum(payload.get("role") or Role.EMPLOYEE.value, Role, "Role")

        if self._users.get_by_email(email):
            raise ValidationError("A user with this email already exists")

        manager_id = self._check_manager(principal, payload.get("manager_id"))

        user = self._users.create_user(
            company_id=principal.company_id,
            email=email,
            password_hash=self._hasher.hash(password),
            full_name=full_name,
            role=role,
            department=optional_str(payload.get("department")),
            position=optional_str(payload.get("position")),
            phone=optional_str(payload.get("phone")),
            address=optional_str(payload.get("address")),
            manager_id=manager_id,
        )
        logger.info("Employee created id=%s company=%s by=%s", user.id, user.company_id, principal.id)
        return user

    def update_employee(self, principal: Principal, target: User, payload: dict[str, Any]) -> User:
        changes: dict[str, Any] = {}

        if "email" in payload:
            email = require_non_empty(payload["email"], "Email").lower()
            other = self._users.get_by_email(email)
            if other and other.id != target.id:
                raise ValidationError("A user with this email already exists")
            changes["email"] = email
        if payload.get("password"):
            password = require_min_length(payload["password"], "Password", PASSWORD_MIN_LENGTH)
            changes["password_hash"] = self._hasher.hash(password)
        if "full_name" in payload:
            changes["full_name"] = require_non_empty(payload["full_name"], "Full name")
        if "role" in payload:
            changes["role"] = require_enum(payload["role"], Role, "Role")
        if "is_active" in payload:
            changes["is_active"] = require_bool(payload["is_active"], "is_active")
        if "manager_id" in payload:
            changes["manager_id"] = self._check_manager(principal, payload["manager_id"])
        for key in _PROFILE_TEXT_FIELDS:
            if key in payload:
                changes[key] = optional_str(payload[key])
        changes.update(self._parse_location(target, payload))

        return self._save(target, changes)

    def set_active(self, target: User, is_active: Any) -> User:
        return self._save(target, {"is_active": require_bool(is_active, "isActive")})

    def deactivate(self, target: User) -> User:
        return self._save(target, {"is_active": False})

    def update_profile(self, principal: Principal, payload: dict[str, Any]) -> User:
        changes: dict[str, Any] = {"full_name": require_non_empty(payload.get("full_name"), "Full name")}
        for key in ("phone", "address"):
            if key in payload:
                changes[key] = optional_str(payload[key])

        user = self._users.get_by_id(principal.id)
        if user is None:
            raise NotFound("User not found")
        return self._save(user, changes)

    def update_location(self, target: User, payload: dict[str, Any]) -> User:
        """Apply geofence settings given with domain names (allowed_latitude, ...)."""

        return self._save(target, self._parse_location(target, payload))

    # -------- helpers --------
    def _save(self, target: User, changes: dict[str, Any]) -> User:
        changes = {k: v for k, v in changes.items() if k in UPDATABLE_USER_FIELDS}
        updated = self._users.update_user(target.id, changes)
        if updated is None:
            raise NotFound("User not found")
        return updated

    def _check_manager(self, principal: Principal, manager_id: Any) -> Optional[str]:
        manager_id = optional_str(manager_id)
        if manager_id is None:
            return None
        manager = self._users.get_by_id(manager_id)
        if manager is None or manager.company_id != principal.company_id:
            raise ValidationError("Manager not found")
        return manager_id

    @staticmethod
    def _parse_location(target: User, payload: dict[str, Any]) -> dict[str, Any]:
        changes: dict[str, Any] = {}
        if "allowed_latitude" in payload:
            changes["allowed_latitude"] = optional_float(payload["allowed_latitude"], "Latitude")
        if "allowed_longitude" in payload:
            changes["allowed_longitude"] = optional_float(payload["allowed_longitude"], "Longitude")
        if "allowed_radius" in payload:
            radius = optional_float(payload["allowed_radius"], "Radius")
            if radius is not None and radius <= 0:
                raise ValidationError("Radius must be greater than 0")
            changes["allowed_radius"] = radius
        if "enable_location_auth" in payload:
            changes["enable_location_auth"] = require_bool(payload["enable_location_auth"], "enable_location_auth")
        if not changes:
            return changes

        merged = target.with_changes(**changes)
        if merged.enable_location_auth and (merged.allowed_latitude is None or merged.allowed_longitude is None):
            raise ValidationError("Latitude and longitude are required when location login is enabled")
        return changes
