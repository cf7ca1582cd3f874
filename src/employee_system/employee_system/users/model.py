from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import datetime
from typing import Any, Optional

from ..common.serialization import to_jsonable
from ..core.constants import DEFAULT_GEOFENCE_RADIUS_M
from ..core.enums import Role, is_administrative


@dataclass(frozen=True)
class GeofenceConfig:
    """Location-login settings carried on a user record."""

    enabled: bool = False
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius: Optional[float] = None

    @property
    def effective_radius(self) -> float:
        return self.radius if self.radius is not None else DEFAULT_GEOFENCE_RADIUS_M

    @property
    def is_enforced(self) -> bool:
        # An enabled fence without both coordinates is not checked.
        return self.enabled and self.latitude is not None and self.longitude is not None


@dataclass(frozen=True)
class Principal:
    """The authenticated caller: every user field except the password hash.

    This is what the session store keeps and what `/api/auth/me` returns.
    """

    id: str
    company_id: str
    email: str
    full_name: str
    role: Role
    is_active: bool = True
    department: Optional[str] = None
    position: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    manager_id: Optional[str] = None
    join_date: Optional[datetime] = None
    allowed_latitude: Optional[float] = None
    allowed_longitude: Optional[float] = None
    allowed_radius: Optional[float] = None
    enable_location_auth: bool = False

    @property
    def is_administrative(self) -> bool:
        return is_administrative(self.role)

    def to_dict(self) -> dict[str, Any]:
        return to_jsonable(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Principal":
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}
        kwargs["role"] = Role(kwargs["role"])
        if kwargs.get("join_date"):
            kwargs["join_date"] = datetime.fromisoformat(kwargs["join_date"])
        return cls(**kwargs)


@dataclass(frozen=True)
class User:
    """Domain entity: user/employee record.

    Note: Plain data object (no DB access code).
    """

    id: str
    company_id: str
    email: str
    password_hash: str
    full_name: str
    role: Role
    is_active: bool = True
    department: Optional[str] = None
    position: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    manager_id: Optional[str] = None
    join_date: Optional[datetime] = None
    allowed_latitude: Optional[float] = None
    allowed_longitude: Optional[float] = None
    allowed_radius: Optional[float] = None
    enable_location_auth: bool = False

    @property
    def geofence(self) -> GeofenceConfig:
        return GeofenceConfig(
            enabled=self.enable_location_auth,
            latitude=self.allowed_latitude,
            longitude=self.allowed_longitude,
            radius=self.allowed_radius,
        )

    def to_principal(self) -> Principal:
        data = {f.name: getattr(self, f.name) for f in fields(Principal)}
        return Principal(**data)

    def with_changes(self, **changes: Any) -> "User":
        return replace(self, **changes)

    def summary(self) -> dict[str, Any]:
        """Compact form embedded in admin listings."""
        return {
            "id": self.id,
            "full_name": self.full_name,
            "email": self.email,
            "position": self.position,
            "department": self.department,
            "role": self.role.value,
        }


# Columns an update may touch. id and company_id are never in this set.
UPDATABLE_USER_FIELDS = frozenset(
    {
        "email",
        "password_hash",
        "full_name",
        "role",
        "is_active",
        "department",
        "position",
        "phone",
        "address",
        "manager_id",
        "allowed_latitude",
        "allowed_longitude",
        "allowed_radius",
        "enable_location_auth",
    }
)
