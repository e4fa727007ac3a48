"""Administrator area: dashboard, password change, logout and newsletter publishing."""

from __future__ import annotations

from flask import Blueprint, flash, g, get_flashed_messages

from newsletter.api.deps import (
    auth_service,
    json_response,
    login_required,
    newsletter_service,
    raise_translated,
    request_payload,
    see_other,
    timing,
)
from newsletter.api.schemas import (
    ChangePasswordSchema,
    DashboardSchema,
    MessagesSchema,
    NewsletterIssueSchema,
)
from newsletter.api.session import current_session
from newsletter.services._shared.errors import (
    InvalidCredentialsError,
    PasswordMismatchError,
    ServiceError,
)
from newsletter.services.auth.dto import ChangePasswordIn
from newsletter.services.newsletters.dto import NewsletterIssueIn

bp = Blueprint("admin", __name__)

change_password_schema = ChangePasswordSchema()
newsletter_issue_schema = NewsletterIssueSchema()
messages_schema = MessagesSchema()
dashboard_schema = DashboardSchema()

PASSWORDS_DIFFER = "You entered two different new passwords - the field values must match."
CURRENT_PASSWORD_WRONG = "The current password is incorrect."
PASSWORD_CHANGED = "Your password has been changed."
LOGGED_OUT = "You have successfully logged out."
ISSUE_PUBLISHED = "The newsletter issue has been published!"


def _messages():
    return json_response(messages_schema.dump({"messages": get_flashed_messages()}))


@bp.get("/dashboard")
@login_required
@timing
def dashboard():
    try:
        username = auth_service().get_username(g.user_id)
    except ServiceError as exc:
        raise_translated(exc)
    payload = {
        "username": username,
        "links": {
            "change_password": "/admin/password",
            "newsletters": "/admin/newsletters",
            "logout": "/admin/logout",
        },
    }
    return json_response(dashboard_schema.dump(payload))


@bp.get("/password")
@login_required
def change_password_form():
    return _messages()


@bp.post("/password")
@login_required
@timing
def change_password():
    """Change the password; every outcome redirects back with a flash message."""

    data = change_password_schema.load(request_payload())
    dto = ChangePasswordIn(
        current_password=data["current_password"],
        new_password=data["new_password"],
        new_password_check=data["new_password_check"],
    )
    try:
        auth_service().change_password(current_session(), dto)
    except PasswordMismatchError:
        flash(PASSWORDS_DIFFER)
        return see_other("/admin/password")
    except InvalidCredentialsError:
        flash(CURRENT_PASSWORD_WRONG)
        return see_other("/admin/password")
    except ServiceError as exc:
        raise_translated(exc)
    flash(PASSWORD_CHANGED)
    return see_other("/admin/password")


@bp.post("/logout")
@timing
def logout():
    """Destroy the session; anonymous callers are simply sent to the login page."""

    try:
        logged_out = auth_service().logout(current_session())
    except ServiceError as exc:
        raise_translated(exc)
    if logged_out:
        flash(LOGGED_OUT)
    return see_other("/login")


@bp.get("/newsletters")
@login_required
def publish_newsletter_form():
    return _messages()


@bp.post("/newsletters")
@login_required
@timing
def publish_newsletter():
    """Send an issue to every confirmed subscriber."""

    data = newsletter_issue_schema.load(request_payload())
    issue = NewsletterIssueIn(
        title=data["title"],
        html_content=data["html_content"],
        text_content=data["text_content"],
    )
    try:
        newsletter_service().publish(issue)
    except ServiceError as exc:
        raise_translated(exc)
    flash(ISSUE_PUBLISHED)
    return see_other("/admin/newsletters")
