from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    EMPLOYEE = "employee"
    MANAGER = "manager"
    HR = "hr"
    ADMIN = "admin"


ADMINISTRATIVE_ROLES = frozenset({Role.ADMIN, Role.HR})


def is_administrative(role: Role | str | None) -> bool:
    """True for roles allowed through admin-only routes (admin, hr)."""
    if role is None:
        return False
    try:
        return Role(role) in ADMINISTRATIVE_ROLES
    except ValueError:
        return False


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    HALF_DAY = "half-day"
    LEAVE = "leave"


class RequestStatus(str, Enum):
    """Approval workflow status shared by leaves and travel claims."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class LeaveType(str, Enum):
    SICK = "sick"
    CASUAL = "casual"
    VACATION = "vacation"
    UNPAID = "unpaid"


class ExpenseCategory(str, Enum):
    TRANSPORT = "transport"
    ACCOMMODATION = "accommodation"
    MEALS = "meals"
    OTHER = "other"


class NotificationType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class SalaryStatus(str, Enum):
    PROCESSED = "processed"
    PAID = "paid"
