"""Argon2id password hashing backed by argon2-cffi."""

from __future__ import annotations

import secrets

from argon2 import PasswordHasher as _Argon2
from argon2 import Type
from argon2.exceptions import HashingError as Argon2HashingError
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from newsletter.services._shared.errors import HashingError
from newsletter.services._shared.ports import PasswordHasher


class Argon2PasswordHasher(PasswordHasher):
    """
    Argon2id hasher producing PHC strings (``$argon2id$v=19$m=...,t=...,p=...$salt$hash``).

    The cost parameters only apply to new hashes. ``verify`` reads them from
    the stored string, so hashes computed under older settings stay valid.

    :param time_cost: Iterations.
    :param memory_cost: Memory in KiB.
    :param parallelism: Lanes.
    :ivar fallback_hash: Hash of a random secret computed with the configured
        cost, verified against when a username is unknown.
    """

    def __init__(self, *, time_cost: int = 2, memory_cost: int = 15000, parallelism: int = 1) -> None:
        self._ph = _Argon2(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            type=Type.ID,
        )
        self.fallback_hash = self.hash(secrets.token_urlsafe(32))

    def hash(self, password: str) -> str:
        """
        :raises HashingError: argon2 could not compute the hash.
        """
        try:
            return self._ph.hash(password)
        except Argon2HashingError as exc:
            raise HashingError("Failed to hash a password") from exc

    def verify(self, password_hash: str, password: str) -> bool:
        """
        Constant-time comparison via argon2-cffi.

        :returns: ``False`` on mismatch.
        :raises HashingError: The stored hash is malformed or cannot be verified.
        """
        try:
            return self._ph.verify(password_hash, password)
        except VerifyMismatchError:
            return False
        except (InvalidHashError, VerificationError) as exc:
            raise HashingError("Failed to verify a password hash") from exc
