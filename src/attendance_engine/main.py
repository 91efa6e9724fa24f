from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .database.bootstrap import apply_schema

_SETTING_NAMES = (
    "SECRET_KEY",
    "DEBUG",
    "TESTING",
    "DB_CONFIG",
    "AUTO_INIT_DB",
    "LOG_LEVEL",
    "CURRENCY_SYMBOL",
    "PUNCH_TIMEZONE",
)


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None, **overrides: Any) -> Flask:
    """Application factory.

    ``container`` replaces the MySQL-backed wiring (tests pass one built on
    in-memory repositories).
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    for name in _SETTING_NAMES:
        if hasattr(settings, name):
            app.config[name] = getattr(settings, name)
    app.config.update(overrides)
    app.secret_key = app.config.get("SECRET_KEY")

    logging.basicConfig(
        level=str(app.config.get("LOG_LEVEL") or "INFO").upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger = logging.getLogger(__name__)

    if container is None:
        db_config = app.config["DB_CONFIG"]
        logger.info(
            "settings=%s db=%s@%s:%s/%s tz=%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
            app.config.get("PUNCH_TIMEZONE"),
        )
        container = build_container(config=app.config)
        if app.config.get("AUTO_INIT_DB"):
            apply_schema(container.conn)

    app.extensions["attendance_container"] = container
    register_attendance(app, container)

    return app
