"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text

from newsletter.api.deps import json_response, timing
from newsletter.core.extensions import db

bp = Blueprint("health", __name__)


@bp.get("/health_check")
@timing
def health_check():
    """Return 200 while the process is serving; report database reachability."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except Exception:  # pragma: no cover - depends on DB backend
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"
    return json_response({"status": "ok", "db": db_status})
