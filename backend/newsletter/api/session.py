"""Session-cookie middleware building the per-request :class:`TypedSession`."""

from __future__ import annotations

import logging

from flask import Flask, Response, current_app, g, request

from newsletter.core.extensions import get_extension
from newsletter.services._shared.errors import TransientStoreError
from newsletter.services._shared.session import TypedSession

log = logging.getLogger(__name__)


def current_session() -> TypedSession:
    """
    Return the request's session capability, creating it on first use.

    An id presented by the client is adopted only if the store knows it;
    unknown or expired ids are replaced by a freshly issued anonymous
    session, so a client can never choose its own session id.

    :raises TransientStoreError: The session store is unreachable.
    """
    existing = g.get("typed_session")
    if existing is not None:
        return existing

    store = get_extension("session_store")
    presented = request.cookies.get(current_app.config["SESSION_COOKIE_ID_NAME"])
    try:
        if presented and store.exists(presented):
            session_id = presented
        else:
            session_id = store.create()
    except Exception as exc:
        raise TransientStoreError("Session store failed while loading a session") from exc

    g.typed_session = TypedSession(store, session_id)
    g.presented_session_id = presented
    return g.typed_session


def init_app(app: Flask) -> None:
    """Write the session cookie back whenever the request touched the session."""

    @app.before_request
    def _reset_session_state() -> None:
        # ``g`` outlives the request when an app context is already pushed.
        g.pop("typed_session", None)
        g.pop("presented_session_id", None)
        g.pop("user_id", None)

    @app.after_request
    def _persist_session_cookie(response: Response) -> Response:
        session: TypedSession | None = g.get("typed_session")
        if session is None:
            return response
        cookie_name = app.config["SESSION_COOKIE_ID_NAME"]
        if session.destroyed:
            response.delete_cookie(cookie_name, path="/")
        elif session.session_id != g.get("presented_session_id"):
            response.set_cookie(
                cookie_name,
                session.session_id,
                path="/",
                httponly=True,
                secure=bool(app.config.get("SESSION_COOKIE_SECURE", False)),
                samesite="Lax",
            )
        return response
