"""Newsletter delivery workflow."""

from .dto import DeliveryReport, NewsletterIssueIn
from .service import NewsletterDeliveryService

__all__ = ["DeliveryReport", "NewsletterDeliveryService", "NewsletterIssueIn"]
