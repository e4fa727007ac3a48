"""Confirmation workflow."""

from .service import ConfirmationService

__all__ = ["ConfirmationService"]
