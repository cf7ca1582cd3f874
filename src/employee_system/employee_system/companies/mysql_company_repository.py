from __future__ import annotations

import json
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, new_id, to_decimal
from .model import Company, CompanySettings
from .repository import CompanyRepository


def _row_to_company(row: dict) -> Company:
    return Company(id=row["id"], name=row["name"], email=row["email"], created_at=row.get("created_at"))


class MySQLCompanyRepository(CompanyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, company_id: str) -> Optional[Company]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, email, created_at FROM companies WHERE id=%s", (company_id,))
            row = fetchone(cur)
            return _row_to_company(row) if row else None

    def get_by_email(self, email: str) -> Optional[Company]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, email, created_at FROM companies WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_company(row) if row else None

    def create_company(self, *, name: str, email: str) -> Company:
        company_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO companies(id, name, email) VALUES(%s,%s,%s)", (company_id, name, email))
        created = self.get_by_id(company_id)
        if created is None:
            raise RuntimeError(f"Company {company_id} vanished after insert")
        return created

    def rename(self, company_id: str, name: str) -> Optional[Company]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE companies SET name=%s WHERE id=%s", (name, company_id))
        return self.get_by_id(company_id)

    def get_settings(self, company_id: str) -> Optional[CompanySettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT company_id, working_hours_per_day, working_days_per_week, weekend_days,
                       overtime_rate, currency, timezone, date_format, fiscal_year_start,
                       enable_biometric_auth, enable_geofencing
                FROM company_settings
                WHERE company_id=%s
                """,
                (company_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return CompanySettings(
                company_id=r["company_id"],
                working_hours_per_day=to_decimal(r["working_hours_per_day"]),
                working_days_per_week=int(r["working_days_per_week"]),
                weekend_days=tuple(json.loads(r["weekend_days"] or "[]")),
                overtime_rate=to_decimal(r["overtime_rate"]),
                currency=r["currency"],
                timezone=r["timezone"],
                date_format=r["date_format"],
                fiscal_year_start=r["fiscal_year_start"],
                enable_biometric_auth=bool(r["enable_biometric_auth"]),
                enable_geofencing=bool(r["enable_geofencing"]),
            )

    def save_settings(self, settings: CompanySettings) -> CompanySettings:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                REPLACE INTO company_settings(
                    company_id, working_hours_per_day, working_days_per_week, weekend_days,
                    overtime_rate, currency, timezone, date_format, fiscal_year_start,
                    enable_biometric_auth, enable_geofencing
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    settings.company_id,
                    settings.working_hours_per_day,
                    settings.working_days_per_week,
                    json.dumps(list(settings.weekend_days)),
                    settings.overtime_rate,
                    settings.currency,
                    settings.timezone,
                    settings.date_format,
                    settings.fiscal_year_start,
                    int(settings.enable_biometric_auth),
                    int(settings.enable_geofencing),
                ),
            )
        return settings
