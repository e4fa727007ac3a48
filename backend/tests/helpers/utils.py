"""Tiny helpers shared across test modules."""

from __future__ import annotations

import json
import re

SESSION_COOKIE = "id"
EMAIL_API_URL = "https://email.test/email"

_TOKEN_RE = re.compile(r"subscription_token=([A-Za-z0-9]+)")


def assert_is_redirect_to(response, location: str) -> None:
    """Assert a 303 redirect to ``location``.

    Parameters
    ----------
    response:
        Flask test-client response.
    location:
        Expected path of the ``Location`` header.
    """
    assert response.status_code == 303, response.get_data(as_text=True)
    assert response.headers["Location"] == location


def flashed_messages(client, path: str) -> list[str]:
    """GET ``path`` and return the flash messages it renders."""
    resp = client.get(path)
    assert resp.status_code == 200
    return resp.get_json()["messages"]


def login(client, username: str, password: str):
    """Submit the login form and return the raw response."""
    return client.post("/login", data={"username": username, "password": password})


def session_cookie(client) -> str | None:
    cookie = client.get_cookie(SESSION_COOKIE)
    return cookie.value if cookie is not None else None


def confirmation_tokens(email_request) -> tuple[str, str]:
    """Extract the confirmation token from both bodies of a captured email API call.

    Parameters
    ----------
    email_request:
        ``requests.PreparedRequest`` recorded by ``responses``.

    Returns
    -------
    tuple[str, str]
        The token found in the HTML body and the one in the text body.
    """
    body = json.loads(email_request.body)
    html = _TOKEN_RE.search(body["HtmlBody"])
    text = _TOKEN_RE.search(body["TextBody"])
    assert html is not None and text is not None
    return html.group(1), text.group(1)
