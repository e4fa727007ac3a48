# tests/unit/services/test_subscription_service.py
from __future__ import annotations

import re

import pytest
from newsletter.models import STATUS_PENDING, Subscriber, SubscriptionToken
from newsletter.services._shared.errors import (
    NotificationError,
    TransientStoreError,
    ValidationError,
)
from newsletter.services._shared.ports import InMemoryEmailNotifier
from newsletter.services.subscriptions import SubscriptionService, confirmation_link
from newsletter.services.subscriptions.dto import SubscribeIn
from sqlalchemy import select

from tests.factories.subscriber import SubscriptionTokenFactory

BASE_URL = "http://127.0.0.1:8000"
LINK_RE = re.compile(r"subscription_token=([A-Za-z0-9]+)")


class ExplodingNotifier:
    """Notifier whose provider is always down."""

    def __init__(self) -> None:
        self.calls = 0

    def send(self, recipient, subject, html_body, text_body):
        self.calls += 1
        raise ConnectionError("provider unreachable")


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def notifier() -> InMemoryEmailNotifier:
    return InMemoryEmailNotifier()


@pytest.fixture()
def service(notifier) -> SubscriptionService:
    return SubscriptionService(email_notifier=notifier, base_url=BASE_URL)


def _subscribers(session, email):
    return session.execute(select(Subscriber).where(Subscriber.email == email)).scalars().all()


# -------------------------------- Tests ----------------------------------- #
def test_subscribe_persists_a_pending_subscriber_with_one_token(service, session):
    out = service.subscribe(SubscribeIn(name="Ursula Le Guin", email="ursula@example.com"))

    rows = _subscribers(session, "ursula@example.com")
    assert len(rows) == 1
    assert rows[0].id == out.subscriber_id
    assert rows[0].name == "Ursula Le Guin"
    assert rows[0].status == STATUS_PENDING

    tokens = session.execute(
        select(SubscriptionToken).where(SubscriptionToken.subscriber_id == out.subscriber_id)
    ).scalars().all()
    assert len(tokens) == 1


def test_subscribe_emails_a_link_carrying_the_stored_token(service, notifier, session):
    out = service.subscribe(SubscribeIn(name="Ursula Le Guin", email="ursula@example.com"))

    assert len(notifier.outbox) == 1
    sent = notifier.outbox[0]
    assert sent.recipient == "ursula@example.com"
    assert sent.subject == "Welcome!"

    html_token = LINK_RE.search(sent.html_body).group(1)
    text_token = LINK_RE.search(sent.text_body).group(1)
    assert html_token == text_token
    assert len(html_token) == 25
    assert session.get(SubscriptionToken, html_token).subscriber_id == out.subscriber_id
    assert confirmation_link(BASE_URL, html_token) in sent.text_body


@pytest.mark.parametrize(
    "name,email,field",
    [
        ("", "ursula@example.com", "name"),
        ("Ursula Le Guin", "", "email"),
        ("Ursula Le Guin", "definitely-not-an-email", "email"),
        ("Ursula {Le Guin}", "ursula@example.com", "name"),
    ],
)
def test_invalid_input_is_rejected_and_nothing_is_written(
    service, notifier, session, name, email, field
):
    with pytest.raises(ValidationError) as info:
        service.subscribe(SubscribeIn(name=name, email=email))

    assert info.value.field == field
    assert session.query(Subscriber).count() == 0
    assert notifier.outbox == []


def test_token_insert_failure_leaves_no_subscriber_behind(notifier, session):
    taken = SubscriptionTokenFactory().subscription_token
    session.commit()
    service = SubscriptionService(
        email_notifier=notifier,
        base_url=BASE_URL,
        token_issuer=lambda: taken,
    )

    with pytest.raises(TransientStoreError) as info:
        service.subscribe(SubscribeIn(name="Ursula Le Guin", email="ursula@example.com"))

    assert info.value.__cause__ is not None
    assert _subscribers(session, "ursula@example.com") == []
    assert notifier.outbox == []


def test_duplicate_email_is_a_store_failure(service, session):
    service.subscribe(SubscribeIn(name="Ursula Le Guin", email="ursula@example.com"))

    with pytest.raises(TransientStoreError):
        service.subscribe(SubscribeIn(name="Someone Else", email="ursula@example.com"))

    assert len(_subscribers(session, "ursula@example.com")) == 1


def test_email_failure_keeps_the_pending_subscriber_and_its_token(session):
    notifier = ExplodingNotifier()
    service = SubscriptionService(email_notifier=notifier, base_url=BASE_URL)

    with pytest.raises(NotificationError) as info:
        service.subscribe(SubscribeIn(name="Ursula Le Guin", email="ursula@example.com"))

    assert isinstance(info.value.__cause__, ConnectionError)
    assert notifier.calls == 1

    (row,) = _subscribers(session, "ursula@example.com")
    assert row.status == STATUS_PENDING
    token = session.execute(
        select(SubscriptionToken.subscription_token).where(
            SubscriptionToken.subscriber_id == row.id
        )
    ).scalar_one()
    assert len(token) == 25


def test_confirmation_link_joins_base_url_and_token():
    assert (
        confirmation_link("https://news.example.com/", "abc")
        == "https://news.example.com/subscriptions/confirm?subscription_token=abc"
    )
