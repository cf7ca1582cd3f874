from __future__ import annotations

import importlib
import logging
import os
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .activity.controller import register as register_activity
from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .companies.controller import register as register_companies
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_TTL_HOURS
from .core.exceptions import DomainError
from .database.bootstrap import apply_schema, ensure_demo_company, list_tables
from .leaves.controller import register as register_leaves
from .notifications.controller import register as register_notifications
from .payroll.controller import register as register_payroll
from .travel.controller import register as register_travel
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(err: DomainError):
        return jsonify({"message": str(err)}), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(err: HTTPException):
        return jsonify({"message": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        logger.exception("Unhandled error")
        message = str(err) if app.config.get("DEBUG") else "Internal Server Error"
        return jsonify({"message": message}), 500


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["SESSION_COOKIE_SECURE"] = bool(getattr(settings, "SESSION_COOKIE_SECURE", False))

    if container is None:
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            ensure_demo_company(db_config)

        container = build_container(
            db_config=db_config,
            session_backend=getattr(settings, "SESSION_BACKEND", "mysql"),
            session_ttl=timedelta(hours=getattr(settings, "SESSION_TTL_HOURS", DEFAULT_SESSION_TTL_HOURS)),
        )

    _register_error_handlers(app)

    register_auth(app, container)
    register_users(app, container)
    register_companies(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_travel(app, container)
    register_payroll(app, container)
    register_notifications(app, container)
    register_activity(app, container)

    return app


def main() -> None:
    app = create_app()
    app.run(
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "5000")),
        debug=app.config["DEBUG"],
    )


if __name__ == "__main__":
    main()
