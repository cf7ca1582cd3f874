from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        company_id: str,
        email: str,
        password_hash: str,
        full_name: str,
        role: Role,
        department: Optional[str] = None,
        position: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
        manager_id: Optional[str] = None,
    ) -> User:
        raise NotImplementedError

    def update_user(self, user_id: str, changes: dict[str, Any]) -> Optional[User]:
        """Apply a partial update restricted to UPDATABLE_USER_FIELDS."""

        raise NotImplementedError

    def list_by_company(
        self,
        company_id: str,
        *,
        search: Optional[str] = None,
        role: Optional[Role] = None,
        is_active: Optional[bool] = None,
    ) -> Sequence[User]:
        raise NotImplementedError
