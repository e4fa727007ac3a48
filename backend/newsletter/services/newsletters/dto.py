# newsletter/services/newsletters/dto.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NewsletterIssueIn:
    """
    A newsletter issue as submitted by an administrator.

    :param title: Used as the email subject.
    :param html_content: HTML body.
    :param text_content: Plain-text body.
    """

    title: str
    html_content: str
    text_content: str


@dataclass(frozen=True, slots=True)
class DeliveryReport:
    """
    :param delivered: Number of emails handed to the notifier.
    :param skipped: Confirmed subscribers whose stored address no longer validates.
    """

    delivered: int
    skipped: int
