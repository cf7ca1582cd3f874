from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id, to_float
from .model import UPDATABLE_USER_FIELDS, User
from .repository import UserRepository

_USER_COLUMNS = """
    id, company_id, email, password_hash, full_name, role, is_active,
    department, position, phone, address, manager_id, join_date,
    allowed_latitude, allowed_longitude, allowed_radius, enable_location_auth
"""


def _row_to_user(row: dict) -> User:
    return User(
        id=row["id"],
        company_id=row["company_id"],
        email=row["email"],
        password_hash=row["password_hash"],
        full_name=row["full_name"],
        role=Role(row["role"]),
        is_active=bool(row.get("is_active", True)),
        department=row.get("department"),
        position=row.get("position"),
        phone=row.get("phone"),
        address=row.get("address"),
        manager_id=row.get("manager_id"),
        join_date=row.get("join_date"),
        allowed_latitude=to_float(row.get("allowed_latitude")),
        allowed_longitude=to_float(row.get("allowed_longitude")),
        allowed_radius=to_float(row.get("allowed_radius")),
        enable_location_auth=bool(row.get("enable_location_auth", False)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

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
        user_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(
                    id, company_id, email, password_hash, full_name, role,
                    department, position, phone, address, manager_id, is_active
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,1)
                """,
                (
                    user_id,
                    company_id,
                    email,
                    password_hash,
                    full_name,
                    role.value,
                    department,
                    position,
                    phone,
                    address,
                    manager_id,
                ),
            )
        created = self.get_by_id(user_id)
        if created is None:
            raise RuntimeError(f"User {user_id} vanished after insert")
        return created

    def update_user(self, user_id: str, changes: dict[str, Any]) -> Optional[User]:
        columns = [k for k in changes if k in UPDATABLE_USER_FIELDS]
        if columns:
            values = [changes[k].value if isinstance(changes[k], Role) else changes[k] for k in columns]
            assignments = ", ".join(f"{k}=%s" for k in columns)
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"UPDATE users SET {assignments} WHERE id=%s", (*values, user_id))
        return self.get_by_id(user_id)

    def list_by_company(
        self,
        company_id: str,
        *,
        search: Optional[str] = None,
        role: Optional[Role] = None,
        is_active: Optional[bool] = None,
    ) -> Sequence[User]:
        clauses = ["company_id=%s"]
        params: list[Any] = [company_id]
        if search:
            clauses.append("(full_name LIKE %s OR email LIKE %s)")
            params.extend([f"%{search}%", f"%{search}%"])
        if role is not None:
            clauses.append("role=%s")
            params.append(role.value)
        if is_active is not None:
            clauses.append("is_active=%s")
            params.append(1 if is_active else 0)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_USER_COLUMNS} FROM users WHERE {' AND '.join(clauses)} ORDER BY full_name",
                tuple(params),
            )
            return [_row_to_user(r) for r in fetchall(cur)]
