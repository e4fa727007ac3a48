# newsletter/services/auth/service.py
from __future__ import annotations

import logging
import uuid

from newsletter.services._shared.base import BaseService
from newsletter.services._shared.errors import (
    AuthenticationRequiredError,
    InvalidCredentialsError,
    PasswordMismatchError,
    UnexpectedError,
    ValidationError,
)
from newsletter.services._shared.ports import PasswordHasher
from newsletter.services._shared.session import TypedSession
from newsletter.services.auth.dto import ChangePasswordIn, Credentials

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Authentication lifecycle (login / logout / password change).

    The session is passed in explicitly on every call as a
    :class:`~newsletter.services._shared.session.TypedSession`; the service
    never recovers it from request state.

    :param password_hasher: Argon2 (or test) hasher.
    """

    def __init__(self, *, password_hasher: PasswordHasher) -> None:
        self.hasher = password_hasher

    # ------------------------------------------------------------------ #
    # Credential validation
    # ------------------------------------------------------------------ #

    def validate_credentials(self, credentials: Credentials) -> uuid.UUID:
        """
        Check a username/password pair.

        Exactly one hash verification runs whether or not the username
        exists. Unknown usernames are checked against the hasher's
        ``fallback_hash``, computed with the same cost as real credentials,
        so wall-clock time does not reveal which factor was wrong.

        :returns: The authenticated user's id.
        :raises InvalidCredentialsError: Unknown username or wrong password.
        :raises TransientStoreError: The credential lookup failed.
        :raises HashingError: The stored hash is malformed.
        """
        stored = self.in_store(
            "fetch stored credentials", lambda: self._get_credentials(credentials.username)
        )
        if stored is None:
            user_id, expected_hash = None, self.hasher.fallback_hash
        else:
            user_id, expected_hash = stored

        matches = self.hasher.verify(expected_hash, credentials.password)
        if user_id is None or not matches:
            raise InvalidCredentialsError()
        return user_id

    def _get_credentials(self, username: str) -> tuple[uuid.UUID, str] | None:
        with self.ro_uow() as uow:
            return uow.users.get_credentials(username)

    # ------------------------------------------------------------------ #
    # Session transitions
    # ------------------------------------------------------------------ #

    def login(self, session: TypedSession, credentials: Credentials) -> uuid.UUID:
        """
        Validate credentials, rotate the session id and mark it authenticated.

        On failure the session is left untouched.
        """
        user_id = self.validate_credentials(credentials)
        session.renew()
        session.insert_user_id(user_id)
        log.info(
            "User logged in",
            extra={"user_id": str(user_id), "username": credentials.username},
        )
        return user_id

    def logout(self, session: TypedSession) -> bool:
        """
        Destroy an authenticated session.

        :returns: ``False`` when the session was anonymous (nothing done).
        """
        user_id = session.get_user_id()
        if user_id is None:
            return False
        session.log_out()
        log.info("User logged out", extra={"user_id": str(user_id)})
        return True

    def require_user(self, session: TypedSession) -> uuid.UUID:
        """
        :raises AuthenticationRequiredError: The session is anonymous.
        """
        user_id = session.get_user_id()
        if user_id is None:
            raise AuthenticationRequiredError()
        return user_id

    # ------------------------------------------------------------------ #
    # Queries / commands
    # ------------------------------------------------------------------ #

    def get_username(self, user_id: uuid.UUID) -> str:
        """
        :raises UnexpectedError: An authenticated session refers to a missing user.
        """
        username = self.in_store("fetch a username", lambda: self._get_username(user_id))
        if username is None:
            raise UnexpectedError(f"Authenticated user {user_id} does not exist")
        return username

    def _get_username(self, user_id: uuid.UUID) -> str | None:
        with self.ro_uow() as uow:
            return uow.users.get_username(user_id)

    def change_password(self, session: TypedSession, dto: ChangePasswordIn) -> None:
        """
        Replace the logged-in user's password.

        :raises AuthenticationRequiredError: The session is anonymous.
        :raises PasswordMismatchError: The two new-password fields differ.
        :raises InvalidCredentialsError: ``current_password`` is wrong.
        :raises HashingError: The new hash could not be computed.
        :raises UnexpectedError: The user disappeared before the update.
        """
        user_id = self.require_user(session)
        if dto.new_password != dto.new_password_check:
            raise PasswordMismatchError()

        username = self.get_username(user_id)
        self.validate_credentials(Credentials(username=username, password=dto.current_password))

        new_hash = self.hasher.hash(dto.new_password)
        updated = self.in_store(
            "update a password hash", lambda: self._store_password_hash(user_id, new_hash)
        )
        if not updated:
            raise UnexpectedError(f"Authenticated user {user_id} does not exist")
        log.info("Password changed", extra={"user_id": str(user_id)})

    def _store_password_hash(self, user_id: uuid.UUID, password_hash: str) -> bool:
        with self.rw_uow() as uow:
            return uow.users.update_password_hash(user_id, password_hash)

    def provision_user(self, username: str, password: str) -> uuid.UUID:
        """
        Create a credential out of band (CLI / seeding).

        :raises ValidationError: Blank username or password.
        """
        if not username.strip():
            raise ValidationError("username", "must not be empty")
        if not password:
            raise ValidationError("password", "must not be empty")
        password_hash = self.hasher.hash(password)

        def _create() -> uuid.UUID:
            with self.rw_uow() as uow:
                return uow.users.create(username, password_hash)

        user_id = self.in_store("create a user", _create)
        log.info("User provisioned", extra={"user_id": str(user_id), "username": username})
        return user_id

    def user_exists(self, username: str) -> bool:
        def _exists() -> bool:
            with self.ro_uow() as uow:
                return uow.users.exists_by_username(username)

        return self.in_store("look up a user", _exists)
