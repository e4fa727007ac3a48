# tests/unit/services/test_auth_service.py
from __future__ import annotations

import uuid

import pytest
from newsletter.services._shared.errors import (
    AuthenticationRequiredError,
    InvalidCredentialsError,
    PasswordMismatchError,
    UnexpectedError,
    ValidationError,
)
from newsletter.services._shared.ports import InMemorySessionStore
from newsletter.services._shared.session import TypedSession
from newsletter.services.auth import AuthService, ChangePasswordIn, Credentials

from tests.factories.user import DEFAULT_PASSWORD, UserFactory


class SpyHasher:
    """Delegates to the real hasher and records every verification."""

    def __init__(self, inner) -> None:
        self.inner = inner
        self.fallback_hash = inner.fallback_hash
        self.verified: list[str] = []

    def hash(self, password):
        return self.inner.hash(password)

    def verify(self, password_hash, password):
        self.verified.append(password_hash)
        return self.inner.verify(password_hash, password)


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def hasher(password_hasher) -> SpyHasher:
    return SpyHasher(password_hasher)


@pytest.fixture()
def service(hasher) -> AuthService:
    return AuthService(password_hasher=hasher)


@pytest.fixture()
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture()
def typed_session(store) -> TypedSession:
    return TypedSession(store, store.create())


@pytest.fixture()
def user(session):
    u = UserFactory(username="admin")
    session.commit()
    return u


# -------------------------- Credential checks ----------------------------- #
def test_valid_credentials_return_the_user_id(service, user, hasher):
    user_id = service.validate_credentials(Credentials("admin", DEFAULT_PASSWORD))

    assert user_id == user.user_id
    assert hasher.verified == [user.password_hash]


def test_unknown_username_still_runs_one_verification(service, hasher):
    with pytest.raises(InvalidCredentialsError):
        service.validate_credentials(Credentials("ghost", DEFAULT_PASSWORD))

    assert hasher.verified == [hasher.fallback_hash]


def test_wrong_password_runs_one_verification(service, user, hasher):
    with pytest.raises(InvalidCredentialsError):
        service.validate_credentials(Credentials("admin", "not-the-password"))

    assert hasher.verified == [user.password_hash]


def test_both_failure_paths_raise_the_same_error(service, user):
    with pytest.raises(InvalidCredentialsError) as unknown:
        service.validate_credentials(Credentials("ghost", DEFAULT_PASSWORD))
    with pytest.raises(InvalidCredentialsError) as wrong:
        service.validate_credentials(Credentials("admin", "nope"))

    assert str(unknown.value) == str(wrong.value)


def test_credentials_repr_hides_the_password():
    assert "hunter2" not in repr(Credentials("admin", "hunter2"))


# ------------------------------- Sessions --------------------------------- #
def test_login_rotates_the_session_and_stores_the_user(service, user, store, typed_session):
    old_id = typed_session.session_id

    service.login(typed_session, Credentials("admin", DEFAULT_PASSWORD))

    assert typed_session.session_id != old_id
    assert not store.exists(old_id)
    assert typed_session.get_user_id() == user.user_id
    assert service.require_user(typed_session) == user.user_id


def test_failed_login_leaves_the_session_untouched(service, user, store, typed_session):
    old_id = typed_session.session_id

    with pytest.raises(InvalidCredentialsError):
        service.login(typed_session, Credentials("admin", "wrong"))

    assert typed_session.session_id == old_id
    assert store.exists(old_id)
    assert typed_session.get_user_id() is None


def test_require_user_rejects_anonymous_sessions(service, typed_session):
    with pytest.raises(AuthenticationRequiredError):
        service.require_user(typed_session)


def test_logout_destroys_the_session(service, user, store, typed_session):
    service.login(typed_session, Credentials("admin", DEFAULT_PASSWORD))
    logged_in_id = typed_session.session_id

    assert service.logout(typed_session) is True
    assert typed_session.destroyed
    assert not store.exists(logged_in_id)


def test_logout_of_an_anonymous_session_does_nothing(service, store, typed_session):
    assert service.logout(typed_session) is False
    assert not typed_session.destroyed
    assert store.exists(typed_session.session_id)


def test_malformed_user_id_in_session_reads_as_anonymous(store, typed_session):
    store.insert(typed_session.session_id, "user_id", "not-a-uuid")

    assert typed_session.get_user_id() is None


# ---------------------------- Password change ----------------------------- #
def _logged_in(service, typed_session):
    service.login(typed_session, Credentials("admin", DEFAULT_PASSWORD))
    return typed_session


def test_change_password_replaces_the_credential(service, user, typed_session):
    _logged_in(service, typed_session)

    service.change_password(
        typed_session,
        ChangePasswordIn(DEFAULT_PASSWORD, "a-new-password", "a-new-password"),
    )

    assert service.validate_credentials(Credentials("admin", "a-new-password")) == user.user_id
    with pytest.raises(InvalidCredentialsError):
        service.validate_credentials(Credentials("admin", DEFAULT_PASSWORD))


def test_change_password_requires_matching_new_fields(service, user, typed_session, hasher):
    _logged_in(service, typed_session)
    hasher.verified.clear()

    with pytest.raises(PasswordMismatchError):
        service.change_password(
            typed_session, ChangePasswordIn(DEFAULT_PASSWORD, "first", "second")
        )

    assert hasher.verified == []


def test_change_password_rejects_a_wrong_current_password(service, user, typed_session):
    _logged_in(service, typed_session)

    with pytest.raises(InvalidCredentialsError):
        service.change_password(typed_session, ChangePasswordIn("wrong", "new-one", "new-one"))

    assert service.validate_credentials(Credentials("admin", DEFAULT_PASSWORD)) == user.user_id


def test_change_password_requires_login(service, typed_session):
    with pytest.raises(AuthenticationRequiredError):
        service.change_password(typed_session, ChangePasswordIn("a", "b", "b"))


def test_session_of_a_vanished_user_is_an_unexpected_error(service, typed_session):
    typed_session.insert_user_id(uuid.uuid4())

    with pytest.raises(UnexpectedError):
        service.get_username(typed_session.get_user_id())


# ------------------------------ Provisioning ------------------------------ #
def test_provision_user_creates_a_usable_credential(service, session):
    user_id = service.provision_user("editor", "s3cret-pass")
    session.commit()

    assert service.user_exists("editor")
    assert service.validate_credentials(Credentials("editor", "s3cret-pass")) == user_id


@pytest.mark.parametrize("username,password", [("   ", "pw"), ("editor", "")])
def test_provision_user_rejects_blank_input(service, username, password):
    with pytest.raises(ValidationError):
        service.provision_user(username, password)


def test_password_change_for_a_vanished_user_is_an_unexpected_error(
    service, user, typed_session, monkeypatch
):
    # The user row is gone by the time the new hash is written.
    typed_session.insert_user_id(uuid.uuid4())
    monkeypatch.setattr(service, "get_username", lambda user_id: "admin")

    with pytest.raises(UnexpectedError):
        service.change_password(
            typed_session, ChangePasswordIn(DEFAULT_PASSWORD, "new-one", "new-one")
        )

    assert service.validate_credentials(Credentials("admin", DEFAULT_PASSWORD)) == user.user_id
