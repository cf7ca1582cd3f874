from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from config import get_settings_module

from employee_system.database.bootstrap import DEMO_ACCOUNTS, ensure_demo_company
from employee_system.main import configure_logging

logger = logging.getLogger("seed_db")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    company_id = ensure_demo_company(db_config)
    logger.info("Seeded demo company %s in %s", company_id, db_config.get("database"))
    for email, password, _, role, _, _ in DEMO_ACCOUNTS:
        logger.info("  %s / %s (%s)", email, password, role.value)


if __name__ == "__main__":
    main()
