# newsletter/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Credentials:
    """
    Login input.

    :param username: Login name, matched exactly.
    :type username: str
    :param password: Raw password (to be verified, never stored or logged).
    :type password: str
    """

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class ChangePasswordIn:
    """
    Password-change form input.

    :param current_password: Password the user is logged in with.
    :param new_password: Replacement password.
    :param new_password_check: Confirmation; must equal ``new_password``.
    """

    current_password: str = field(repr=False)
    new_password: str = field(repr=False)
    new_password_check: str = field(repr=False)
