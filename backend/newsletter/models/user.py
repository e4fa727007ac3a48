"""Administrator credential model."""

from __future__ import annotations

import uuid

from sqlalchemy import String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from newsletter.core.extensions import db

from .base import ReprMixin


class User(ReprMixin, db.Model):
    """
    Username plus a self-describing password hash.

    Fields
    ------
    user_id : uuid.UUID
        Opaque identifier stored in authenticated sessions.
    username : str
        Login name. Unique per system.
    password_hash : str
        PHC-formatted hash (algorithm, version, cost, salt, digest). Hashing
        happens in the service layer; the model never sees a raw password.
    """

    __tablename__ = "users"
    __repr_key__ = "username"

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    username: Mapped[str] = mapped_column(String(150), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (UniqueConstraint("username", name="uq_users_username"),)
