"""Login endpoints backed by the authentication workflow."""

from __future__ import annotations

import logging

from flask import Blueprint, flash, get_flashed_messages

from newsletter.api.deps import (
    auth_service,
    json_response,
    request_payload,
    see_other,
    timing,
)
from newsletter.api.schemas import LoginSchema, MessagesSchema
from newsletter.api.session import current_session
from newsletter.services._shared.errors import InvalidCredentialsError, UnexpectedError
from newsletter.services.auth.dto import Credentials

log = logging.getLogger(__name__)

bp = Blueprint("auth", __name__)

login_schema = LoginSchema()
messages_schema = MessagesSchema()

AUTH_FAILED = "Authentication failed"
SOMETHING_WENT_WRONG = "Something went wrong"


@bp.get("/login")
def login_form():
    """Return pending flash messages (the login page's error banner)."""

    return json_response(messages_schema.dump({"messages": get_flashed_messages()}))


@bp.post("/login")
@timing
def login():
    """Authenticate and redirect; failures never reveal which factor was wrong."""

    data = login_schema.load(request_payload())
    credentials = Credentials(username=data["username"], password=data["password"])
    try:
        auth_service().login(current_session(), credentials)
    except InvalidCredentialsError:
        log.warning("Failed login attempt", extra={"username": credentials.username})
        flash(AUTH_FAILED)
        return see_other("/login")
    except UnexpectedError:
        log.error("Login failed unexpectedly", exc_info=True)
        flash(SOMETHING_WENT_WRONG)
        return see_other("/login")
    return see_other("/admin/dashboard")
