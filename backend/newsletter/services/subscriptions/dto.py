# newsletter/services/subscriptions/dto.py
from __future__ import annotations

import uuid
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SubscribeIn:
    """
    Raw subscription form input (not yet validated).

    :param name: Display name as typed by the visitor.
    :type name: str
    :param email: Email address as typed by the visitor.
    :type email: str
    """

    name: str
    email: str


@dataclass(frozen=True, slots=True)
class SubscribeOut:
    """
    Result of a committed subscription.

    :param subscriber_id: Identifier of the new pending subscriber.
    :type subscriber_id: uuid.UUID
    """

    subscriber_id: uuid.UUID
