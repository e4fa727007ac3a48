"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

from flask import Flask

from newsletter.core.config import BaseConfig, get_config
from newsletter.core.logger import configure_logging, init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the newsletter application.

    Parameters
    ----------
    config:
        Configuration object or import path. ``None`` selects the class named
        by ``APP_ENV`` (see :func:`newsletter.core.config.get_config`).
    instance_relative_config:
        Whether an optional ``instance/config.py`` is layered on top.
    instance_config_filename:
        File name looked up in the instance folder.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    # Proxy headers if running behind a reverse proxy
    from newsletter.core import proxy

    proxy.init_app(app)

    from newsletter.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from newsletter.api import init_app as init_api

    init_api(app)

    from newsletter.core import errors

    errors.init_app(app)

    from newsletter import cli as app_cli

    app_cli.init_app(app)

    return app
