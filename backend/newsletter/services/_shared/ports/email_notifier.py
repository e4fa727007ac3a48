from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True, slots=True)
class OutboundEmail:
    """
    A transactional email as handed to the notifier.

    :ivar recipient: Destination address.
    :ivar subject: Subject line.
    :ivar html_body: HTML part.
    :ivar text_body: Plain-text part.
    """

    recipient: str
    subject: str
    html_body: str
    text_body: str


class EmailNotifier(Protocol):
    """
    Outbound transactional email.

    One attempt per call; implementations raise
    :class:`~newsletter.services._shared.errors.NotificationError` on any
    failure, timeouts included. Callers never retry.
    """

    def send(self, recipient: str, subject: str, html_body: str, text_body: str) -> None:
        """Deliver a single email or raise ``NotificationError``."""


@dataclass
class InMemoryEmailNotifier(EmailNotifier):
    """Collects sent emails in :attr:`outbox` instead of delivering them."""

    outbox: list[OutboundEmail] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def send(self, recipient: str, subject: str, html_body: str, text_body: str) -> None:
        with self._lock:
            self.outbox.append(
                OutboundEmail(
                    recipient=recipient,
                    subject=subject,
                    html_body=html_body,
                    text_body=text_body,
                )
            )
