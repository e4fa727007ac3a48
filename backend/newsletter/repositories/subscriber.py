"""Repositories for subscribers and their confirmation tokens."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import select, update

from newsletter.domain import NewSubscriber
from newsletter.models.subscriber import (
    STATUS_CONFIRMED,
    STATUS_PENDING,
    Subscriber,
    SubscriptionToken,
)
from newsletter.repositories.base import BaseRepository


class SubscriberRepository(BaseRepository[Subscriber]):
    """Persistence-only repository for :class:`Subscriber`."""

    model = Subscriber

    def insert_subscriber(self, new_subscriber: NewSubscriber) -> uuid.UUID:
        """Stage a ``pending_confirmation`` subscriber and return its id.

        :param new_subscriber: Already validated input.
        :type new_subscriber: :class:`~newsletter.domain.NewSubscriber`
        :returns: Identifier of the new row.
        :rtype: uuid.UUID
        """
        subscriber = Subscriber(
            id=uuid.uuid4(),
            email=new_subscriber.email.value,
            name=new_subscriber.name.value,
            subscribed_at=datetime.now(UTC),
            status=STATUS_PENDING,
        )
        self.add(subscriber)
        return subscriber.id

    def set_confirmed(self, subscriber_id: uuid.UUID) -> None:
        """Flip the status to ``confirmed``; a no-op when already confirmed."""
        stmt = (
            update(Subscriber)
            .where(Subscriber.id == subscriber_id)
            .values(status=STATUS_CONFIRMED)
            .execution_options(synchronize_session="fetch")
        )
        self.session.execute(stmt)

    def list_confirmed_emails(self) -> list[str]:
        """Return the stored address of every confirmed subscriber."""
        stmt = (
            select(Subscriber.email)
            .where(Subscriber.status == STATUS_CONFIRMED)
            .order_by(Subscriber.subscribed_at, Subscriber.id)
        )
        return list(self.session.execute(stmt).scalars().all())


class SubscriptionTokenRepository(BaseRepository[SubscriptionToken]):
    """Persistence-only repository for :class:`SubscriptionToken`."""

    model = SubscriptionToken

    def insert_token(self, subscriber_id: uuid.UUID, token: str) -> None:
        """Stage a token row bound to ``subscriber_id``.

        A colliding token value surfaces as an ``IntegrityError`` on flush.
        """
        self.add(SubscriptionToken(subscription_token=token, subscriber_id=subscriber_id))

    def resolve_token(self, token: str) -> uuid.UUID | None:
        """Return the subscriber id bound to ``token``, or ``None`` if unknown."""
        stmt = select(SubscriptionToken.subscriber_id).where(
            SubscriptionToken.subscription_token == token
        )
        return self.session.execute(stmt).scalar_one_or_none()
