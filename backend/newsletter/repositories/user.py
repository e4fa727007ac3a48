"""User repository: credential lookup and password-hash updates."""

from __future__ import annotations

import uuid

from sqlalchemy import select, update

from newsletter.models.user import User
from newsletter.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    This repository never hashes or verifies passwords; it only moves stored
    hash strings in and out of the database.
    """

    model = User

    def get_credentials(self, username: str) -> tuple[uuid.UUID, str] | None:
        """Fetch ``(user_id, password_hash)`` for ``username``.

        :param username: Exact login name.
        :type username: str
        :returns: Stored credentials or ``None`` when the user does not exist.
        :rtype: tuple[uuid.UUID, str] | None
        """
        stmt = select(User.user_id, User.password_hash).where(User.username == username)
        row = self.session.execute(stmt).first()
        if row is None:
            return None
        return row.user_id, row.password_hash

    def get_username(self, user_id: uuid.UUID) -> str | None:
        stmt = select(User.username).where(User.user_id == user_id)
        return self.session.execute(stmt).scalar_one_or_none()

    def exists_by_username(self, username: str) -> bool:
        stmt = select(User.user_id).where(User.username == username)
        return bool(self.session.execute(stmt).first())

    def create(self, username: str, password_hash: str) -> uuid.UUID:
        """Stage a new user row and return its id."""
        user = User(user_id=uuid.uuid4(), username=username, password_hash=password_hash)
        self.add(user)
        return user.user_id

    def update_password_hash(self, user_id: uuid.UUID, password_hash: str) -> bool:
        """Overwrite the stored hash; the previous one is not retained.

        :returns: ``False`` when no user has ``user_id``.
        """
        stmt = (
            update(User)
            .where(User.user_id == user_id)
            .values(password_hash=password_hash)
            .execution_options(synchronize_session="fetch")
        )
        result = self.session.execute(stmt)
        return result.rowcount > 0
