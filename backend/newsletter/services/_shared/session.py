"""Typed, request-scoped session capability handed to the workflows."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar
from uuid import UUID

from newsletter.services._shared.errors import TransientStoreError
from newsletter.services._shared.ports import SessionStore

log = logging.getLogger(__name__)

T = TypeVar("T")

USER_ID_KEY = "user_id"


class TypedSession:
    """
    Explicit handle on the caller's server-side session.

    The HTTP layer builds one per request from the session cookie and passes
    it into the authentication workflow; the workflow never reaches for
    ambient request state. After the call, :attr:`session_id` holds the id
    the client must be given (it changes on :meth:`renew`), and
    :attr:`destroyed` tells whether the cookie must be cleared.

    :param store: Backing session store.
    :param session_id: Id currently presented by the client.
    """

    def __init__(self, store: SessionStore, session_id: str) -> None:
        self._store = store
        self.session_id = session_id
        self.destroyed = False

    def _call(self, op: str, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except Exception as exc:
            raise TransientStoreError(f"Session store failed during {op}") from exc

    def renew(self) -> None:
        """Rotate the session id, carrying attributes over."""
        self.session_id = self._call("rotate", lambda: self._store.rotate(self.session_id))

    def insert_user_id(self, user_id: UUID) -> None:
        self._call("insert", lambda: self._store.insert(self.session_id, USER_ID_KEY, str(user_id)))

    def get_user_id(self) -> UUID | None:
        raw: Any = self._call("get", lambda: self._store.get(self.session_id, USER_ID_KEY))
        if raw is None:
            return None
        try:
            return UUID(str(raw))
        except ValueError:
            log.warning("Discarding malformed user id stored in session")
            return None

    def log_out(self) -> None:
        """Destroy the whole session so its id cannot be replayed."""
        self._call("delete", lambda: self._store.delete(self.session_id))
        self.destroyed = True
