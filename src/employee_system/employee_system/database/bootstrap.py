"""Schema and demo-data bootstrap used by `main` and the scripts in `scripts/`."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Iterable

from ..auth.security import PasswordHasher
from ..companies.model import CompanySettings
from ..core.enums import Role
from .connection import DBConfig, DatabaseConnection
from .mysql_base import db_cursor, fetchone, new_id

logger = logging.getLogger(__name__)

DEMO_COMPANY_EMAIL = "admin@demo-company.local"

# email, password, full name, role, department, position
DEMO_ACCOUNTS = (
    (DEMO_COMPANY_EMAIL, "admin123", "Demo Admin", Role.ADMIN, "Management", "Company Admin"),
    ("employee@demo-company.local", "employee123", "Demo Employee", Role.EMPLOYEE, "Engineering", "Developer"),
)


def _strip_create_db_and_use(sql: str) -> str:
    # The configured database name wins over whatever schema.sql says.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside quoted strings."""
    buf: list[str] = []
    quote = ""
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
    logger.info("Schema applied from %s", schema_path)


def ensure_demo_company(db_config: dict) -> str:
    """Create (or reset) the demo company with one admin and one employee. Returns the company id."""

    hasher = PasswordHasher()
    conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))

    with db_cursor(conn_factory) as (_, cur):
        cur.execute("SELECT id FROM companies WHERE email=%s", (DEMO_COMPANY_EMAIL,))
        row = fetchone(cur)
        if row:
            company_id = row["id"]
        else:
            company_id = new_id()
            cur.execute(
                "INSERT INTO companies(id, name, email) VALUES(%s,%s,%s)",
                (company_id, "Demo Company", DEMO_COMPANY_EMAIL),
            )

        defaults = CompanySettings(company_id=company_id)
        cur.execute(
            """
            INSERT IGNORE INTO company_settings(company_id, weekend_days, currency, timezone)
            VALUES(%s,%s,%s,%s)
            """,
            (company_id, json.dumps(list(defaults.weekend_days)), defaults.currency, defaults.timezone),
        )

        for email, password, full_name, role, department, position in DEMO_ACCOUNTS:
            password_hash = hasher.hash(password)
            cur.execute("SELECT id FROM users WHERE email=%s", (email,))
            existing = fetchone(cur)
            if existing:
                cur.execute(
                    """
                    UPDATE users
                    SET company_id=%s, password_hash=%s, full_name=%s, role=%s, is_active=1
                    WHERE id=%s
                    """,
                    (company_id, password_hash, full_name, role.value, existing["id"]),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO users(id, company_id, email, password_hash, full_name, role, department, position)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (new_id(), company_id, email, password_hash, full_name, role.value, department, position),
                )

    logger.info("Demo company ready id=%s", company_id)
    return company_id


def list_tables(db_config: dict) -> list[str]:
    conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
