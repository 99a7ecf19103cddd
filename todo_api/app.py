# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from todo_api.container import Container
from todo_api.shared.config import AppConfig, load_config
from todo_api.shared.logging import logger, setup_logging
from todo_api.shared.middleware import (
    configure_error_handling,
    configure_request_logging,
    configure_security_headers,
)


def create_app(config: AppConfig | None = None, container: Container | None = None) -> Flask:
    if config is None:
        config = container.config if container is not None else load_config()
    container = container or Container(config)

    setup_logging(config.log_level, debug_mode=config.debug_logging)
    container.init_storage()

    app = Flask(__name__)
    app.extensions["todo_api.container"] = container
    configure_error_handling(app, config)
    configure_request_logging(app, config)
    configure_security_headers(app, config)
    CORS(app, resources={r"/*": {"origins": config.security.allowed_origins}})

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.todos_controller.as_blueprint())

    logger.info(
        f"Flask app initialized (env={config.app_env}, store={config.database.backend})"
    )
    return app


def main() -> None:
    config = load_config()
    app = create_app(config)
    logger.info(f"Server starting on {config.host}:{config.port}")
    app.run(host=config.host, port=config.port, debug=False)


if __name__ == "__main__":
    main()
