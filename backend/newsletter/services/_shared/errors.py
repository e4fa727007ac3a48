"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
concerns. Each workflow raises a closed set of them:

* caller-fixable faults (:class:`ValidationError`, :class:`PasswordMismatchError`)
  are classified where they are detected and passed up unchanged;
* :class:`InvalidCredentialsError` and :class:`UnknownTokenError` are safe to
  show to the end user but carry no detail;
* infrastructure faults are :class:`UnexpectedError` subclasses, raised with
  ``raise ... from exc`` so the final log entry keeps the causal chain.

The translation to HTTP responses (RFC 7807) is handled by
``newsletter/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories, adapters or domain logic.
    """

    pass


@dataclass(slots=True, eq=False)
class ValidationError(ServiceError):
    """
    Raised when a caller-supplied value fails validation.

    :param field: Name of the offending input field.
    :type field: str
    :param reason: Human-readable reason, safe to return to the caller.
    :type reason: str
    """

    field: str
    reason: str

    def __str__(self) -> str:
        return f"{self.field}: {self.reason}"


class InvalidCredentialsError(ServiceError):
    """Unknown username or wrong password; the two are never distinguished."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class UnknownTokenError(ServiceError):
    """Raised when a confirmation token does not resolve to any subscriber."""

    def __init__(self) -> None:
        super().__init__("There is no subscriber associated with the provided token")


class AuthenticationRequiredError(ServiceError):
    """Raised when an operation needs an authenticated session and has none."""

    def __init__(self) -> None:
        super().__init__("The user has not logged in")


class PasswordMismatchError(ServiceError):
    """The two new-password fields of a change request differ."""

    def __init__(self) -> None:
        super().__init__("You entered two different new passwords - the field values must match.")


class UnexpectedError(ServiceError):
    """
    Infrastructure fault the caller cannot fix.

    The message is intended for logs only; the HTTP layer replaces it with an
    opaque one.
    """


class TransientStoreError(UnexpectedError):
    """Persistence or session-store fault."""


class NotificationError(UnexpectedError):
    """The outbound email call failed, timed out, or was rejected."""


class HashingError(UnexpectedError):
    """A stored password hash could not be parsed or verified."""
