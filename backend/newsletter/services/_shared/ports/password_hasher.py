from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """
    One-way, salted, memory-hard password hashing.

    Hash strings are self-describing (algorithm, version, cost, salt,
    digest) so that :meth:`verify` keeps working for hashes computed under
    older cost parameters.

    ``fallback_hash`` is a valid hash computed with the current parameters
    that no caller knows the password for. Verifying against it costs the
    same as verifying a real credential.
    """

    fallback_hash: str

    def hash(self, password: str) -> str:
        """
        Return a fresh salted hash computed with the current parameters.

        :raises HashingError: When the hash cannot be computed.
        """

    def verify(self, password_hash: str, password: str) -> bool:
        """
        Compare ``password`` against ``password_hash`` in constant time.

        :returns: ``False`` on mismatch.
        :raises HashingError: When ``password_hash`` is malformed.
        """
