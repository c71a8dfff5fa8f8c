"""Application factory wiring settings, the user store and blueprints."""

from __future__ import annotations

import logging

from flask import Flask

from users_api.api import init_app as init_api
from users_api.core import cors, errors, extensions, proxy
from users_api.core.config import BaseConfig, get_config
from users_api.core.logger import configure_logging, init_app as init_logging
from users_api.repositories.user import UserRepository

log = logging.getLogger(__name__)


def _load_settings(
    app: Flask,
    config: str | type[BaseConfig] | object | None,
    instance_config_filename: str | None,
) -> None:
    app.config.from_object(get_config() if config is None else config)
    if instance_config_filename:
        # Deployment overrides (``instance/config.py``) win over the class
        app.config.from_pyfile(instance_config_filename, silent=True)


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    repository: UserRepository | None = None,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    :param config: Settings object or import path; defaults to ``APP_ENV``.
    :param repository: Pre-built user store (a fresh in-memory store is
        created otherwise).
    :param instance_relative_config: Load overrides from the instance folder.
    :param instance_config_filename: Instance file holding the overrides.
    :returns: Configured application.
    :rtype: flask.Flask
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)
    _load_settings(app, config, instance_config_filename if instance_relative_config else None)

    # Emit JSON keys in construction order (pagination metadata, error maps)
    app.json.sort_keys = False

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    proxy.init_app(app)
    extensions.init_app(app, repository)
    init_logging(app)
    cors.init_app(app)
    init_api(app)
    errors.init_app(app)

    log.debug("app.created")
    return app
