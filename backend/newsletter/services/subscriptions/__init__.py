"""Subscription workflow."""

from .service import SubscriptionService, confirmation_link
from .tokens import generate_subscription_token

__all__ = ["SubscriptionService", "confirmation_link", "generate_subscription_token"]
