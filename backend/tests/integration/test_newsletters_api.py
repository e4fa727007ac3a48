"""Integration tests for publishing newsletter issues."""

from __future__ import annotations

import json

import pytest
import responses
from newsletter.models import STATUS_CONFIRMED

from tests.factories.subscriber import SubscriberFactory
from tests.factories.user import DEFAULT_PASSWORD, UserFactory
from tests.helpers.utils import (
    EMAIL_API_URL,
    assert_is_redirect_to,
    confirmation_tokens,
    flashed_messages,
    login,
)

ISSUE = {
    "title": "Newsletter title",
    "html_content": "<p>Newsletter body as HTML</p>",
    "text_content": "Newsletter body as plain text",
}


@pytest.fixture()
def logged_in(client, session):
    UserFactory(username="admin")
    session.commit()
    login(client, "admin", DEFAULT_PASSWORD)
    return client


def _recipients(email_api) -> list[str]:
    return [json.loads(call.request.body)["To"] for call in email_api.calls]


def test_newsletters_are_not_delivered_to_unconfirmed_subscribers(logged_in, email_api):
    logged_in.post("/subscriptions", data={"name": "le guin", "email": "pending@example.com"})
    assert len(email_api.calls) == 1  # the confirmation email

    resp = logged_in.post("/admin/newsletters", data=ISSUE)

    assert_is_redirect_to(resp, "/admin/newsletters")
    assert len(email_api.calls) == 1


def test_newsletters_are_delivered_to_confirmed_subscribers(logged_in, email_api):
    logged_in.post("/subscriptions", data={"name": "le guin", "email": "reader@example.com"})
    token, _ = confirmation_tokens(email_api.calls[0].request)
    logged_in.get("/subscriptions/confirm", query_string={"subscription_token": token})

    resp = logged_in.post("/admin/newsletters", data=ISSUE)

    assert_is_redirect_to(resp, "/admin/newsletters")
    assert flashed_messages(logged_in, "/admin/newsletters") == [
        "The newsletter issue has been published!"
    ]
    issue_call = json.loads(email_api.calls[-1].request.body)
    assert issue_call["To"] == "reader@example.com"
    assert issue_call["Subject"] == ISSUE["title"]
    assert issue_call["HtmlBody"] == ISSUE["html_content"]
    assert issue_call["TextBody"] == ISSUE["text_content"]


def test_every_confirmed_subscriber_receives_the_issue(logged_in, session, email_api):
    for email in ("a@example.com", "b@example.com"):
        SubscriberFactory(email=email, status=STATUS_CONFIRMED)
    SubscriberFactory(email="c@example.com")
    session.commit()

    logged_in.post("/admin/newsletters", data=ISSUE)

    assert sorted(_recipients(email_api)) == ["a@example.com", "b@example.com"]


@pytest.mark.parametrize("missing", ["title", "html_content", "text_content"])
def test_incomplete_issues_are_rejected(logged_in, email_api, missing):
    form = {k: v for k, v in ISSUE.items() if k != missing}

    resp = logged_in.post("/admin/newsletters", data=form)

    assert resp.status_code == 400
    assert len(email_api.calls) == 0


def test_blank_issue_fields_are_a_validation_error(logged_in, email_api):
    resp = logged_in.post("/admin/newsletters", data={**ISSUE, "title": "   "})

    assert resp.status_code == 400
    assert resp.get_json()["details"]["field"] == "title"


def test_provider_failure_is_a_500(logged_in, session, email_api):
    SubscriberFactory(email="reader@example.com", status=STATUS_CONFIRMED)
    session.commit()
    email_api.replace(responses.POST, EMAIL_API_URL, status=500)

    resp = logged_in.post("/admin/newsletters", data=ISSUE)

    assert resp.status_code == 500
    assert resp.mimetype == "application/problem+json"
