"""Reverse-proxy awareness for deployments behind a TLS-terminating proxy."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Trust one hop of ``X-Forwarded-*`` headers when ``USE_PROXYFIX`` is set.

    With the proxy's headers honoured, ``request.scheme`` and
    ``request.remote_addr`` describe the real client, which is what the
    request logs and redirects need.
    """
    if app.config.get("USE_PROXYFIX", False):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)
