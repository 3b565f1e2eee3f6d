from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from config import get_settings_module

from .activities.controller import register as register_activities
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_test_accounts, list_tables
from .rescues.controller import register as register_rescues
from .stats.controller import register as register_stats
from .users.controller import register as register_users
from .users.service import VolunteerRoster


def create_app(*, container: Optional[Container] = None) -> Flask:
    """Application factory.

    ``container`` lets callers (tests, scripts) supply pre-wired services; by
    default everything is built on top of MySQL from the selected settings module.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    trusted_proxies = int(getattr(settings, "TRUSTED_PROXY_COUNT", 0))
    if trusted_proxies > 0:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=trusted_proxies)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    db_config = getattr(settings, "DB_CONFIG")
    civil_timezone = getattr(settings, "CIVIL_TIMEZONE")
    test_accounts = list(getattr(settings, "TEST_ACCOUNTS", []))

    if container is None:
        app.logger.info(
            "settings=%s db=%s@%s:%s/%s tz=%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
            civil_timezone,
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            app.logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if test_accounts:
            ensure_test_accounts(db_config, test_accounts)

        roster = VolunteerRoster.build(
            volunteer_names=getattr(settings, "VOLUNTEER_NAMES", ()),
            admin_names=getattr(settings, "ADMIN_NAMES", ()),
            reserved_usernames=[a["username"] for a in test_accounts],
        )
        container = build_container(db_config=db_config, civil_timezone=civil_timezone, roster=roster)

    register_users(app, container, session_days=int(getattr(settings, "SESSION_DAYS", 7)))
    register_activities(app, container)
    register_rescues(app, container)
    register_stats(app, container)

    return app
