"""JSON log lines for the newsletter service, correlated per HTTP request.

Every record goes to stdout as one JSON object. Records emitted while a
request is being handled carry that request's id, which is also echoed back in
the ``X-Request-ID`` response header, so a failed login or email send can be
traced from the client to the log. Workflows attach identifiers such as
``subscriber_id`` or ``user_id`` through ``extra={...}``; anything not listed
in :data:`EXTRA_KEYS` (passwords, tokens) is never written out.
"""

from __future__ import annotations

import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = ("X-Request-ID", "X-Correlation-ID")

# Inbound ids are written verbatim into every line of the request.
_ACCEPTED_REQUEST_ID = re.compile(r"[A-Za-z0-9._:-]{1,128}")

# Structured fields copied from ``extra={...}`` into the JSON payload.
EXTRA_KEYS = ("endpoint", "elapsed_ms", "subscriber_id", "user_id", "username")


class JSONFormatter(logging.Formatter):
    """One JSON object per record: time, level, logger, message, request id and known extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        if record.exc_info:
            # formatException renders the whole ``__cause__`` chain.
            payload["exc_info"] = self.formatException(record.exc_info)
        for key in EXTRA_KEYS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        return json.dumps(payload, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp ``request_id`` on every record (``None`` outside a request, e.g. CLI commands)."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - trivial
        record.request_id = ensure_request_id() if has_request_context() else None
        return True


def ensure_request_id() -> str:
    """Return the id of the request being handled.

    A caller-supplied ``X-Request-ID`` or ``X-Correlation-ID`` is reused when it
    is a short token of safe characters; otherwise a UUID4 is generated. The
    value is cached on ``g`` for the rest of the request.
    """

    if has_request_context():
        if hasattr(g, "request_id"):
            return g.request_id  # type: ignore[return-value]
        for header in CORRELATION_HEADERS:
            value = request.headers.get(header)
            if value and _ACCEPTED_REQUEST_ID.fullmatch(value):
                g.request_id = value
                return value
        request_id = str(uuid4())
        g.request_id = request_id
        return request_id
    return str(uuid4())


def configure_logging(level: str | int = "INFO") -> None:
    """Replace the root handlers with a single JSON handler on stdout.

    ``level`` accepts a name (``"debug"``, ``"WARNING"``) or a numeric level;
    it comes from ``LOG_LEVEL``.
    """

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    level_value: int | str = level
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        level_value = resolved if isinstance(resolved, int) else level.upper()
    root.setLevel(level_value)


def init_app(app: Flask) -> None:
    """Assign a request id before each request and echo it on the response."""

    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _seed_request_id() -> None:  # pragma: no cover - integration glue
        # ``g`` may outlive a request when the app context is pushed by hand.
        g.pop("request_id", None)
        ensure_request_id()

    @app.after_request
    def _inject_response_header(response):  # pragma: no cover - integration glue
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        return response


__all__ = ["configure_logging", "init_app", "ensure_request_id", "JSONFormatter", "EXTRA_KEYS"]
