"""Authentication workflow."""

from .dto import ChangePasswordIn, Credentials
from .service import AuthService

__all__ = ["AuthService", "ChangePasswordIn", "Credentials"]
