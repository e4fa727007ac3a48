"""
NewsletterDeliveryService
=========================

Sends a newsletter issue to every confirmed subscriber, one attempt per
recipient. Pending subscribers never receive issues. The first failed send
aborts delivery; there is no outbox and no retry.
"""

from __future__ import annotations

import logging

from newsletter.domain import SubscriberEmail
from newsletter.services._shared.base import BaseService
from newsletter.services._shared.errors import NotificationError, ValidationError
from newsletter.services._shared.ports import EmailNotifier
from newsletter.services.newsletters.dto import DeliveryReport, NewsletterIssueIn

log = logging.getLogger(__name__)


class NewsletterDeliveryService(BaseService):
    """
    :param email_notifier: Outbound email adapter.
    """

    def __init__(self, *, email_notifier: EmailNotifier) -> None:
        self.email_notifier = email_notifier

    def publish(self, issue: NewsletterIssueIn) -> DeliveryReport:
        """
        Deliver ``issue`` to all confirmed subscribers.

        :raises ValidationError: A field of the issue is blank.
        :raises TransientStoreError: Subscribers could not be read.
        :raises NotificationError: A send failed; earlier recipients already got the issue.
        """
        for field_name in ("title", "html_content", "text_content"):
            if not getattr(issue, field_name).strip():
                raise ValidationError(field_name, "must not be empty")

        emails = self.in_store("fetch confirmed subscribers", self._confirmed_emails)

        delivered = skipped = 0
        for raw_email in emails:
            try:
                recipient = SubscriberEmail.parse(raw_email)
            except ValidationError as exc:
                log.warning(
                    "Skipping a confirmed subscriber. Their stored contact details are invalid: %s",
                    exc,
                )
                skipped += 1
                continue
            try:
                self.email_notifier.send(
                    recipient.value, issue.title, issue.html_content, issue.text_content
                )
            except Exception as exc:
                raise NotificationError(
                    f"Failed to send newsletter issue to {recipient.value}"
                ) from exc
            delivered += 1

        log.info("Newsletter issue published: delivered=%s skipped=%s", delivered, skipped)
        return DeliveryReport(delivered=delivered, skipped=skipped)

    def _confirmed_emails(self) -> list[str]:
        with self.ro_uow() as uow:
            return uow.subscribers.list_confirmed_emails()
