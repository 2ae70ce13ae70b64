# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta

from flask import Flask
from flask_cors import CORS

from techquiry.infrastructure.container import Container
from techquiry.infrastructure.db import init_db
from techquiry.shared.config import NAME, VERSION, load_config
from techquiry.shared.logging import logger, setup_logging
from techquiry.shared.middleware.csrf import configure_csrf
from techquiry.shared.middleware.error_handler import configure_error_handling
from techquiry.shared.middleware.request_logger import configure_request_logging


def create_app(container: Container | None = None) -> Flask:
    container = container or Container()
    config = container.config

    setup_logging("DEBUG" if config.debug_logging else None)
    logger.info(f"Starting {NAME} {VERSION} ({config.app_env})")
    init_db(container.engine)

    app = Flask(__name__)
    configure_error_handling(app)
    configure_csrf(app)
    configure_request_logging(app)

    app.config.update(
        SECRET_KEY=config.secret_key,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SECURE=config.security.cookie_secure,
        SESSION_COOKIE_SAMESITE=config.security.cookie_samesite,
        PERMANENT_SESSION_LIFETIME=timedelta(seconds=config.security.session_lifetime),
    )
    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.security.allowed_origins}}
    }
    if any(origin != "*" for origin in config.security.allowed_origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    app.extensions["techquiry.container"] = container

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.login_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")
        resp.headers.setdefault("Cross-Origin-Opener-Policy", "same-origin")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )

        return resp

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    _config = load_config()
    create_app().run(host=_config.host, port=_config.port, debug=not _config.is_production())
