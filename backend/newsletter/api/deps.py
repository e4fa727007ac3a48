"""Shared API helpers for request parsing, service wiring and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from http import HTTPStatus
from typing import Any, NoReturn, TypeVar

from flask import Response, current_app, g, jsonify, redirect, request

from newsletter.api.session import current_session
from newsletter.core.extensions import get_extension
from newsletter.services._shared.base import BaseService
from newsletter.services._shared.errors import ServiceError
from newsletter.services.auth import AuthService
from newsletter.services.confirmation import ConfirmationService
from newsletter.services.newsletters import NewsletterDeliveryService
from newsletter.services.subscriptions import SubscriptionService

F = TypeVar("F", bound=Callable[..., Any])

LOGIN_PATH = "/login"

_translator = BaseService()


# --------------------------------------------------------------------------- #
# Service wiring (adapters come from app.extensions, never from globals)
# --------------------------------------------------------------------------- #


def subscription_service() -> SubscriptionService:
    return SubscriptionService(
        email_notifier=get_extension("email_client"),
        base_url=current_app.config["APPLICATION_BASE_URL"],
    )


def confirmation_service() -> ConfirmationService:
    return ConfirmationService()


def auth_service() -> AuthService:
    return AuthService(password_hasher=get_extension("password_hasher"))


def newsletter_service() -> NewsletterDeliveryService:
    return NewsletterDeliveryService(email_notifier=get_extension("email_client"))


def raise_translated(exc: Exception) -> NoReturn:
    """Re-raise a service error as the matching API error, chaining the cause."""
    translated = _translator.translate_exceptions(exc)
    if translated is exc:
        raise exc
    raise translated from exc


# --------------------------------------------------------------------------- #
# Request / response helpers
# --------------------------------------------------------------------------- #


def request_payload() -> dict[str, Any]:
    """Return the JSON body when present, else the submitted form fields."""

    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def see_other(location: str) -> Response:
    """Redirect with 303 so the browser follows up with a GET."""

    return redirect(location, code=HTTPStatus.SEE_OTHER)


def login_required(func: F) -> F:
    """Redirect anonymous sessions to the login page; expose ``g.user_id`` otherwise."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        try:
            user_id = current_session().get_user_id()
        except ServiceError as exc:
            raise_translated(exc)
        if user_id is None:
            return see_other(LOGIN_PATH)
        g.user_id = user_id
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
