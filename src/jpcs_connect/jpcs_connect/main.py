from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .database.bootstrap import apply_schema, list_tables

from .container import build_container
from .common.web import register_error_handlers
from .store.document_store import DocumentStore
from .analytics.controller import register as register_analytics
from .announcements.controller import register as register_announcements
from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .checkin.controller import register as register_checkin
from .events.controller import register as register_events
from .registrations.controller import register as register_registrations
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(*, store: Optional[DocumentStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    backend = str(getattr(settings, "STORE_BACKEND", "memory")).lower()
    logger.info("settings=%s store=%s", settings_module, backend)

    if store is None and backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        db_config = getattr(settings, "DB_CONFIG")
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("schema ready (tables=%s)", len(list_tables(db_config)))

    container = build_container(settings, store=store)
    app.extensions["jpcs_connect"] = container

    register_error_handlers(app)
    register_auth(app, container)
    register_users(app, container)
    register_events(app, container)
    register_registrations(app, container)
    register_checkin(app, container)
    register_attendance(app, container)
    register_announcements(app, container)
    register_analytics(app, container)

    return app
