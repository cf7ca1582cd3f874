from __future__ import annotations

from typing import Optional, Protocol

from .model import Company, CompanySettings


class CompanyRepository(Protocol):
    def get_by_id(self, company_id: str) -> Optional[Company]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Company]:
        raise NotImplementedError

    def create_company(self, *, name: str, email: str) -> Company:
        raise NotImplementedError

    def rename(self, company_id: str, name: str) -> Optional[Company]:
        raise NotImplementedError

    def get_settings(self, company_id: str) -> Optional[CompanySettings]:
        raise NotImplementedError

    def save_settings(self, settings: CompanySettings) -> CompanySettings:
        """Insert or replace the settings row of `settings.company_id`."""

        raise NotImplementedError
