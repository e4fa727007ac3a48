"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from newsletter.repositories.base import BaseRepository
from newsletter.repositories.subscriber import SubscriberRepository, SubscriptionTokenRepository
from newsletter.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "SubscriberRepository",
    "SubscriptionTokenRepository",
    "UserRepository",
]
