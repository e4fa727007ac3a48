"""Confirmation token issuance."""

from __future__ import annotations

import secrets
import string

TOKEN_LENGTH = 25
TOKEN_ALPHABET = string.ascii_letters + string.digits


def generate_subscription_token() -> str:
    """Return 25 case-sensitive alphanumeric characters from a CSPRNG.

    Uniqueness is not checked here; a collision surfaces as a primary-key
    violation when the token row is flushed.
    """
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))
