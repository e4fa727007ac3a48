from newsletter.models.subscriber import (
    STATUS_CONFIRMED,
    STATUS_PENDING,
    Subscriber,
    SubscriptionToken,
)
from newsletter.models.user import User

__all__ = [
    "STATUS_CONFIRMED",
    "STATUS_PENDING",
    "Subscriber",
    "SubscriptionToken",
    "User",
]
