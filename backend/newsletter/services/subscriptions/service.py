"""
SubscriptionService
===================

Registers a new subscriber in two phases:

1. In one transaction: insert the ``pending_confirmation`` subscriber, issue a
   confirmation token, insert the token row, commit.
2. Only after the commit: email the confirmation link.

If phase 2 fails the subscriber stays pending with a usable token. The
failure is reported to the caller; the commit is not compensated and the
send is not retried.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable

from newsletter.domain import NewSubscriber, SubscriberEmail
from newsletter.services._shared.base import BaseService
from newsletter.services._shared.errors import NotificationError
from newsletter.services._shared.ports import EmailNotifier
from newsletter.services.subscriptions.dto import SubscribeIn, SubscribeOut
from newsletter.services.subscriptions.tokens import generate_subscription_token

log = logging.getLogger(__name__)

CONFIRMATION_SUBJECT = "Welcome!"


def confirmation_link(base_url: str, token: str) -> str:
    """Build the link a subscriber follows to confirm."""
    return f"{base_url.rstrip('/')}/subscriptions/confirm?subscription_token={token}"


class SubscriptionService(BaseService):
    """
    Orchestrates subscriber creation and the confirmation email.

    :param email_notifier: Outbound email adapter.
    :param base_url: Public origin prefixed to confirmation links.
    :param token_issuer: Token generator; injectable for tests.
    """

    def __init__(
        self,
        *,
        email_notifier: EmailNotifier,
        base_url: str,
        token_issuer: Callable[[], str] = generate_subscription_token,
    ) -> None:
        self.email_notifier = email_notifier
        self.base_url = base_url
        self.issue_token = token_issuer

    def subscribe(self, dto: SubscribeIn) -> SubscribeOut:
        """
        Validate, persist atomically, then send the confirmation email.

        :param dto: Raw form input.
        :returns: Identifier of the new subscriber.
        :raises ValidationError: Input rejected; nothing was written.
        :raises TransientStoreError: The transaction failed; nothing is visible.
        :raises NotificationError: Committed, but the email could not be sent.
        """
        new_subscriber = NewSubscriber.parse(name=dto.name, email=dto.email)

        subscriber_id, token = self.in_store(
            "store a new subscriber", lambda: self._persist(new_subscriber)
        )
        log.info(
            "New subscriber details have been saved",
            extra={"subscriber_id": str(subscriber_id)},
        )

        self.send_confirmation_email(new_subscriber.email, token)
        return SubscribeOut(subscriber_id=subscriber_id)

    def _persist(self, new_subscriber: NewSubscriber) -> tuple[uuid.UUID, str]:
        with self.rw_uow() as uow:
            subscriber_id = uow.subscribers.insert_subscriber(new_subscriber)
            token = self.issue_token()
            uow.subscription_tokens.insert_token(subscriber_id, token)
        return subscriber_id, token

    def send_confirmation_email(self, recipient: SubscriberEmail, token: str) -> None:
        """
        Email the confirmation link for ``token`` to ``recipient`` (one attempt).

        :raises NotificationError: On any delivery failure.
        """
        link = confirmation_link(self.base_url, token)
        html_body = (
            "Welcome to our newsletter!<br />"
            f'Click <a href="{link}">here</a> to confirm your subscription.'
        )
        text_body = f"Welcome to our newsletter!\nVisit {link} to confirm your subscription."
        try:
            self.email_notifier.send(recipient.value, CONFIRMATION_SUBJECT, html_body, text_body)
        except NotificationError:
            raise
        except Exception as exc:
            raise NotificationError("Failed to send a confirmation email") from exc
