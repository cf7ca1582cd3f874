from __future__ import annotations

import logging
from typing import Any, Optional

from ..common.validators import optional_float, require_min_length, require_non_empty
from ..companies.model import Company
from ..companies.repository import CompanyRepository
from ..core.constants import PASSWORD_MIN_LENGTH
from ..core.enums import Role
from ..core.exceptions import InvalidCredentials, LocationRejected, LocationRequired, NotFound, ValidationError
from ..geo.distance import distance_meters, is_within_geofence
from ..users.model import Principal, User
from ..users.repository import UserRepository
from .security import PasswordHasher
from .session_store import SessionStore

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: login gate (credentials, optional geofence, session) and ownership checks.

    A login attempt moves through three steps in order: credential check,
    geofence check (only for accounts with an enforced fence), session
    establishment. Any failing step ends the attempt; nothing is retried.
    """

    def __init__(
        self,
        users: UserRepository,
        companies: CompanyRepository,
        sessions: SessionStore,
        hasher: Optional[PasswordHasher] = None,
    ):
        self._users = users
        self._companies = companies
        self._sessions = sessions
        self._hasher = hasher or PasswordHasher()
        # Verified against when the email is unknown, so both failure paths hash once.
        self._dummy_hash = self._hasher.hash("not-a-real-password")

    # -------- Login gate --------
    def check_credentials(self, email: Any, password: Any) -> User:
        email_s = email.strip().lower() if isinstance(email, str) else ""
        password_s = password if isinstance(password, str) else ""

        user = self._users.get_by_email(email_s) if email_s else None
        if user is None:
            self._hasher.verify(password_s, self._dummy_hash)
            raise InvalidCredentials()

        if not self._hasher.verify(password_s, user.password_hash) or not user.is_active:
            raise InvalidCredentials()
        return user

    def check_geofence(self, user: User, latitude: Any, longitude: Any) -> None:
        fence = user.geofence
        if not fence.is_enforced:
            return

        lat = optional_float(latitude, "Latitude")
        lon = optional_float(longitude, "Longitude")
        if lat is None or lon is None:
            raise LocationRequired()

        distance = distance_meters(lat, lon, fence.latitude, fence.longitude)
        radius = fence.effective_radius
        if not is_within_geofence(distance, radius):
            logger.warning(
                "Login rejected by geofence user=%s distance=%.1fm radius=%sm", user.id, distance, radius
            )
            raise LocationRejected(distance=distance, radius=radius)

    def authenticate(
        self,
        email: Any,
        password: Any,
        *,
        latitude: Any = None,
        longitude: Any = None,
    ) -> Principal:
        user = self.check_credentials(email, password)
        self.check_geofence(user, latitude, longitude)
        return user.to_principal()

    def login(
        self,
        email: Any,
        password: Any,
        *,
        latitude: Any = None,
        longitude: Any = None,
    ) -> tuple[str, Principal]:
        principal = self.authenticate(email, password, latitude=latitude, longitude=longitude)
        token = self._sessions.create(principal)
        logger.info("Login user=%s company=%s role=%s", principal.id, principal.company_id, principal.role.value)
        return token, principal

    def logout(self, token: Optional[str]) -> None:
        if not token:
            return
        self._sessions.destroy(token)
        logger.info("Session destroyed")

    # -------- Session access --------
    def current_principal(self, token: Optional[str]) -> Optional[Principal]:
        if not token:
            return None
        return self._sessions.get(token)

    def refresh_session(self, token: Optional[str], user: User) -> Principal:
        principal = user.to_principal()
        if token:
            self._sessions.update(token, principal)
        return principal

    # -------- Tenant isolation --------
    def verify_company_ownership(self, principal: Principal, target_user_id: Optional[str]) -> User:
        """Load a user of the caller's company.

        Absent and foreign-company users raise the same NotFound.
        """

        target = self._users.get_by_id(str(target_user_id)) if target_user_id else None
        if target is None or target.company_id != principal.company_id:
            raise NotFound("User not found or does not belong to your company")
        return target

    # -------- Signup --------
    def signup(
        self,
        *,
        company_name: Any,
        full_name: Any,
        email: Any,
        password: Any,
    ) -> tuple[str, Principal, Company]:
        company_name = require_non_empty(company_name, "Company name")
        full_name = require_non_empty(full_name, "Full name")
        email = require_non_empty(email, "Email").lower()
        password = require_min_length(password, "Password", PASSWORD_MIN_LENGTH)

        if self._companies.get_by_email(email):
            raise ValidationError("Company with this email already exists")
        if self._users.get_by_email(email):
            raise ValidationError("A user with this email already exists")

        company = self._companies.create_company(name=company_name, email=email)
        user = self._users.create_user(
            company_id=company.id,
            email=email,
            password_hash=self._hasher.hash(password),
            full_name=full_name,
            role=Role.ADMIN,
            department="Management",
            position="Company Admin",
        )
        principal = user.to_principal()
        token = self._sessions.create(principal)
        logger.info("Signup company=%s admin=%s", company.id, user.id)
        return token, principal, company
