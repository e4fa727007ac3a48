"""Validated domain value types."""

from newsletter.domain.subscriber import (
    FORBIDDEN_NAME_CHARACTERS,
    MAX_NAME_GRAPHEMES,
    NewSubscriber,
    SubscriberEmail,
    SubscriberName,
)

__all__ = [
    "FORBIDDEN_NAME_CHARACTERS",
    "MAX_NAME_GRAPHEMES",
    "NewSubscriber",
    "SubscriberEmail",
    "SubscriberName",
]
