"""HTTP client for the transactional email API (Postmark-compatible)."""

from __future__ import annotations

import logging

import requests

from newsletter.services._shared.errors import NotificationError
from newsletter.services._shared.ports import EmailNotifier

log = logging.getLogger(__name__)

AUTH_HEADER = "X-Postmark-Server-Token"


class EmailClient(EmailNotifier):
    """
    Send one email per call through ``POST {base_url}/email``.

    Every call is bounded by ``timeout``; non-2xx answers, timeouts and
    connection errors raise :class:`NotificationError` chained to the
    underlying ``requests`` exception. No retries.

    :param base_url: API origin, e.g. ``https://api.postmarkapp.com``.
    :param sender: ``From`` address.
    :param authorization_token: Server token sent in :data:`AUTH_HEADER`.
    :param timeout: Seconds before the call is abandoned.
    :param http: Optional pre-configured ``requests.Session``.
    """

    def __init__(
        self,
        *,
        base_url: str,
        sender: str,
        authorization_token: str,
        timeout: float = 10.0,
        http: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.sender = sender
        self._authorization_token = authorization_token
        self.timeout = timeout
        self.http = http or requests.Session()

    def send(self, recipient: str, subject: str, html_body: str, text_body: str) -> None:
        payload = {
            "From": self.sender,
            "To": recipient,
            "Subject": subject,
            "HtmlBody": html_body,
            "TextBody": text_body,
        }
        try:
            resp = self.http.post(
                f"{self.base_url}/email",
                json=payload,
                headers={AUTH_HEADER: self._authorization_token},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise NotificationError(f"Email API call failed: {exc}") from exc
        log.debug("Email accepted by the provider: subject=%r", subject)
