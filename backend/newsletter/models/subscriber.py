"""Subscriber and confirmation-token models."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, Text, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from newsletter.core.extensions import db

from .base import ReprMixin, UUIDPKMixin

STATUS_PENDING = "pending_confirmation"
STATUS_CONFIRMED = "confirmed"


class Subscriber(UUIDPKMixin, ReprMixin, db.Model):
    """
    A person who submitted the subscription form.

    Fields
    ------
    email : str
        Validated address, unique across subscribers.
    name : str
        Validated display name (at most 256 graphemes).
    subscribed_at : datetime
        Creation timestamp filled by the database.
    status : str
        ``pending_confirmation`` until a token is confirmed, then ``confirmed``.
        The only column ever mutated after insert.
    """

    __tablename__ = "subscriptions"

    email: Mapped[str] = mapped_column(String(320), nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    subscribed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=STATUS_PENDING)

    __table_args__ = (
        UniqueConstraint("email", name="uq_subscriptions_email"),
        CheckConstraint(
            f"status IN ('{STATUS_PENDING}', '{STATUS_CONFIRMED}')",
            name="status_valid",
        ),
    )


class SubscriptionToken(ReprMixin, db.Model):
    """
    One-time confirmation token bound to a subscriber.

    A subscriber may own several tokens; each token resolves to exactly one
    subscriber.
    """

    __tablename__ = "subscription_tokens"
    __repr_key__ = "subscriber_id"

    subscription_token: Mapped[str] = mapped_column(String(25), primary_key=True)
    subscriber_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("subscriptions.id"),
        nullable=False,
        index=True,
    )
