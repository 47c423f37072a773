"""Door-prize raffle service (Flask application package)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv
from flask import Flask


def create_app(config_overrides: Mapping[str, Any] | None = None) -> Flask:
    """Application factory.

    Args:
        config_overrides: Values applied on top of the environment config
            (tests use this to point ``DATABASE_URL`` at an in-memory DB).

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from doorprize.config import get_config
    from doorprize.db import init_db
    from doorprize.error_handlers import register_error_handlers
    from doorprize.logging_config import configure_logging
    from doorprize.routes.contestants import contestants_bp
    from doorprize.routes.draws import draws_bp
    from doorprize.routes.health import health_bp
    from doorprize.routes.prizes import prizes_bp
    from doorprize.routes.reports import reports_bp
    from doorprize.routes.sessions import sessions_bp

    app = Flask(__name__)
    app.config.from_object(get_config())
    if config_overrides:
        app.config.update(config_overrides)
    app.config["MAX_CONTENT_LENGTH"] = int(app.config["MAX_IMPORT_BYTES"])

    configure_logging(app)
    init_db(app)
    register_error_handlers(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(sessions_bp, url_prefix="/api")
    app.register_blueprint(contestants_bp, url_prefix="/api")
    app.register_blueprint(prizes_bp, url_prefix="/api")
    app.register_blueprint(draws_bp, url_prefix="/api")
    app.register_blueprint(reports_bp, url_prefix="/api")

    return app
