"""Subscription and confirmation endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from newsletter.api.deps import (
    confirmation_service,
    json_response,
    raise_translated,
    request_payload,
    subscription_service,
    timing,
)
from newsletter.api.schemas import ConfirmQuerySchema, SubscribeSchema
from newsletter.services._shared.errors import ServiceError
from newsletter.services.subscriptions.dto import SubscribeIn

bp = Blueprint("subscriptions", __name__)

subscribe_schema = SubscribeSchema()
confirm_query_schema = ConfirmQuerySchema()


@bp.post("")
@timing
def subscribe():
    """Register a pending subscriber and send the confirmation email."""

    data = subscribe_schema.load(request_payload())
    try:
        subscription_service().subscribe(SubscribeIn(name=data["name"], email=data["email"]))
    except ServiceError as exc:
        raise_translated(exc)
    return json_response({"status": "pending_confirmation"})


@bp.get("/confirm")
@timing
def confirm():
    """Confirm the subscriber bound to ``subscription_token``."""

    data = confirm_query_schema.load(request.args)
    try:
        confirmation_service().confirm(data["subscription_token"])
    except ServiceError as exc:
        raise_translated(exc)
    return json_response({"status": "confirmed"})
