from __future__ import annotations

import secrets
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Protocol


def new_session_id() -> str:
    """Return an unguessable, URL-safe session identifier."""
    return secrets.token_urlsafe(32)


class SessionStore(Protocol):
    """
    Opaque-id keyed attribute store with idle expiry.

    Every operation is individually atomic; none is composed into a larger
    transaction. Any successful access pushes the idle deadline forward, and
    an expired session behaves exactly like an unknown one.
    """

    def create(self) -> str:
        """Persist a new, empty session and return its id."""

    def exists(self, session_id: str) -> bool:
        """Return ``True`` if ``session_id`` names a live session."""

    def get(self, session_id: str, key: str) -> Any | None:
        """Return the attribute value or ``None`` when absent or expired."""

    def insert(self, session_id: str, key: str, value: Any) -> None:
        """Store a JSON-serializable attribute, creating the session if needed."""

    def rotate(self, session_id: str) -> str:
        """
        Move the attributes of ``session_id`` under a fresh id.

        :returns: The new session id. The old id no longer resolves afterwards.
        """

    def delete(self, session_id: str) -> None:
        """Destroy the session entirely (no-op when unknown)."""


@dataclass(slots=True)
class _Entry:
    data: dict[str, Any]
    deadline: float


@dataclass
class InMemorySessionStore(SessionStore):
    """
    Process-local session store.

    .. note::
       A lock makes each operation atomic, rotation included. Suitable for a
       single worker and for tests; use the Redis store otherwise.

    :param idle_timeout: Idle expiry applied on every access.
    :param clock: Monotonic clock returning seconds; injectable for tests.
    """

    idle_timeout: timedelta = timedelta(minutes=10)
    clock: Callable[[], float] = time.monotonic
    _sessions: dict[str, _Entry] = field(default_factory=dict, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _next_sweep: float = field(default=0.0, init=False, repr=False)

    # ------------------------- helpers -------------------------

    def _deadline(self) -> float:
        return self.clock() + self.idle_timeout.total_seconds()

    def _live(self, session_id: str) -> _Entry | None:
        """Return the entry if still live, evicting it otherwise. Caller holds the lock."""
        entry = self._sessions.get(session_id)
        if entry is None:
            return None
        if entry.deadline <= self.clock():
            del self._sessions[session_id]
            return None
        entry.deadline = self._deadline()
        return entry

    def _sweep(self) -> None:
        """Drop every expired entry, at most once per idle timeout. Caller holds the lock."""
        now = self.clock()
        if now < self._next_sweep:
            return
        expired = [sid for sid, entry in self._sessions.items() if entry.deadline <= now]
        for sid in expired:
            del self._sessions[sid]
        self._next_sweep = now + self.idle_timeout.total_seconds()

    # -------------------------- API ----------------------------

    def create(self) -> str:
        session_id = new_session_id()
        with self._lock:
            self._sweep()
            self._sessions[session_id] = _Entry(data={}, deadline=self._deadline())
        return session_id

    def exists(self, session_id: str) -> bool:
        with self._lock:
            return self._live(session_id) is not None

    def get(self, session_id: str, key: str) -> Any | None:
        with self._lock:
            entry = self._live(session_id)
            return None if entry is None else entry.data.get(key)

    def insert(self, session_id: str, key: str, value: Any) -> None:
        with self._lock:
            entry = self._live(session_id)
            if entry is None:
                entry = _Entry(data={}, deadline=self._deadline())
                self._sessions[session_id] = entry
            entry.data[key] = value

    def rotate(self, session_id: str) -> str:
        new_id = new_session_id()
        with self._lock:
            self._sweep()
            entry = self._live(session_id)
            data = dict(entry.data) if entry is not None else {}
            self._sessions.pop(session_id, None)
            self._sessions[new_id] = _Entry(data=data, deadline=self._deadline())
        return new_id

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)
