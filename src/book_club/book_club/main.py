from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .books.controller import register as register_books
from .common.http import json_error
from .container import Container, build_container
from .core.constants import DEFAULT_CLUB_DESCRIPTION, DEFAULT_CLUB_NAME, DEFAULT_MEETING_UTC_OFFSET_HOURS
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .meetings.controller import register as register_meetings
from .members.controller import register as register_members

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Pass a prebuilt `container` to skip database bootstrap (tests use in-memory repositories).
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.ensure_ascii = False
    app.json.sort_keys = False

    logging.basicConfig(format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    app.logger.setLevel(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        app.logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            app.logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            app.logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            default_club_name=getattr(settings, "DEFAULT_CLUB_NAME", DEFAULT_CLUB_NAME),
            default_club_description=getattr(settings, "DEFAULT_CLUB_DESCRIPTION", DEFAULT_CLUB_DESCRIPTION),
            utc_offset_hours=int(getattr(settings, "MEETING_UTC_OFFSET_HOURS", DEFAULT_MEETING_UTC_OFFSET_HOURS)),
        )
        # Resolve the default club once at startup instead of per request.
        club_id = container.club_service.default_club_id()
        app.logger.info("default club id=%s", club_id)

    app.extensions["book_club"] = container

    register_members(app, container)
    register_books(app, container)
    register_meetings(app, container)
    register_dashboard(app, container)

    @app.errorhandler(404)
    def not_found(_e):
        return json_error("Not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(_e):
        return json_error("Method not allowed", 405)

    return app
