"""
newsletter.services._shared.ports
=================================

Collection of *ports* (hexagonal interfaces) that the workflows depend on.

Modules
-------
- :mod:`session_store`:
    Defines :class:`~.SessionStore` and the process-local
    :class:`~.InMemorySessionStore`.

- :mod:`email_notifier`:
    Defines :class:`~.EmailNotifier`, :class:`~.OutboundEmail` and the
    collecting :class:`~.InMemoryEmailNotifier` double.

- :mod:`password_hasher`:
    Defines :class:`~.PasswordHasher`.

Design Notes
------------
Concrete adapters (Redis, HTTP email API, Argon2) live under
``newsletter.infra`` and are injected by the application factory.
"""

from __future__ import annotations

from .email_notifier import EmailNotifier, InMemoryEmailNotifier, OutboundEmail
from .password_hasher import PasswordHasher
from .session_store import InMemorySessionStore, SessionStore, new_session_id

__all__ = [
    "EmailNotifier",
    "InMemoryEmailNotifier",
    "OutboundEmail",
    "PasswordHasher",
    "SessionStore",
    "InMemorySessionStore",
    "new_session_id",
]
