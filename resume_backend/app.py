# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import atexit
import os

from flask import Flask
from flask_cors import CORS

from resume_backend.container import Container
from resume_backend.interfaces.http.auth import init_auth
from resume_backend.interfaces.http.gatekeeper import configure_edge_gatekeeper
from resume_backend.shared.config import AppConfig, load_config
from resume_backend.shared.logging import logger, setup_logging
from resume_backend.shared.middleware.error_handler import configure_error_handling
from resume_backend.shared.middleware.request_logger import configure_request_logging
from resume_backend.shared.middleware.security_headers import configure_security_headers


def _should_boot() -> bool:
    if os.environ.get("RESUME_BOOT_WORKERS") == "1":
        return True
    return os.environ.get("WERKZEUG_RUN_MAIN") == "true"


def _start_sweeper(container: Container) -> None:
    sweeper = container.session_sweeper
    sweeper.start()
    atexit.register(sweeper.stop)


def create_app(config: AppConfig | None = None, container: Container | None = None) -> Flask:
    config = config or (container.config if container else load_config())
    container = container or Container(config)

    setup_logging(debug_mode=config.debug_logging)
    container.database.init()

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key)
    app.extensions["container"] = container

    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)
    configure_security_headers(app, enable_hsts=config.security.enable_hsts)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.security.allowed_origins}}
    }
    if any(o != "*" for o in config.security.allowed_origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    init_auth(app, authorizer=container.request_authorizer, cookies=container.auth_cookies)
    configure_edge_gatekeeper(app, container.edge_gatekeeper)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())

    if _should_boot():
        _start_sweeper(container)

    logger.info(f"Flask app initialized env={config.app_env}")
    return app
