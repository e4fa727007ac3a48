# comments in English; reST docstrings
from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

import redis  # type: ignore[import-untyped]

from newsletter.services._shared.ports import SessionStore, new_session_id

# Sentinel field so an attribute-less session still exists as a Redis hash.
_ALIVE_FIELD = "__alive__"


@dataclass(slots=True)
class RedisSessionStore(SessionStore):
    """
    Redis-backed session store.

    Each session is one hash (``session:{id}``) whose fields are JSON
    encoded attribute values. Every successful access refreshes the key TTL,
    which implements the idle timeout. Rotation copies the hash under a new
    key and deletes the old one inside a single MULTI/EXEC.

    :param r: A Redis client (already connected).
    :param idle_timeout: Idle expiry applied on every access.
    """

    r: redis.Redis
    idle_timeout: timedelta = field(default=timedelta(minutes=10))

    # -------------------- helpers --------------------

    @staticmethod
    def _k(session_id: str) -> str:
        return f"session:{session_id}"

    @property
    def _ttl(self) -> int:
        return max(1, int(self.idle_timeout.total_seconds()))

    def _touch(self, key: str) -> bool:
        return bool(self.r.expire(key, self._ttl))

    # -------------------- API ------------------------

    def create(self) -> str:
        session_id = new_session_id()
        key = self._k(session_id)
        pipe = self.r.pipeline(transaction=True)
        pipe.hset(key, _ALIVE_FIELD, "1")
        pipe.expire(key, self._ttl)
        pipe.execute()
        return session_id

    def exists(self, session_id: str) -> bool:
        # EXPIRE returns 0 for missing (or already expired) keys.
        return self._touch(self._k(session_id))

    def get(self, session_id: str, key: str) -> Any | None:
        k = self._k(session_id)
        if not self._touch(k):
            return None
        raw = self.r.hget(k, key)
        if raw is None:
            return None
        return json.loads(raw)

    def insert(self, session_id: str, key: str, value: Any) -> None:
        k = self._k(session_id)
        pipe = self.r.pipeline(transaction=True)
        pipe.hset(k, mapping={_ALIVE_FIELD: "1", key: json.dumps(value)})
        pipe.expire(k, self._ttl)
        pipe.execute()

    def rotate(self, session_id: str) -> str:
        """
        Move the hash to a fresh id atomically.

        WATCH/MULTI/EXEC (optimistic locking): a concurrent write to the old
        session aborts the transaction and the copy is retried.
        """
        k_old = self._k(session_id)
        while True:
            new_id = new_session_id()
            k_new = self._k(new_id)
            try:
                with self.r.pipeline() as p:
                    p.watch(k_old)
                    data = p.hgetall(k_old)
                    p.multi()
                    mapping = dict(data) if data else {}
                    mapping[_ALIVE_FIELD] = "1"
                    p.hset(k_new, mapping=mapping)
                    p.expire(k_new, self._ttl)
                    p.delete(k_old)
                    p.execute()
                return new_id
            except redis.WatchError:
                # Concurrent modification detected; retry loop
                continue

    def delete(self, session_id: str) -> None:
        self.r.delete(self._k(session_id))
