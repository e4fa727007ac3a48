# newsletter/services/_shared/base.py
from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.exc import SQLAlchemyError

from newsletter.core import errors as api_errors
from newsletter.services._shared.errors import (
    AuthenticationRequiredError,
    InvalidCredentialsError,
    PasswordMismatchError,
    ServiceError,
    TransientStoreError,
    UnexpectedError,
    UnknownTokenError,
    ValidationError,
)
from newsletter.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

T = TypeVar("T")


class BaseService:
    """
    Base class for the workflows.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Wrap persistence faults into :class:`TransientStoreError` with the cause chained.
    * Centralize translation of service errors to API errors.

    Notes
    -----
    - Services never touch the global session directly; always use a Unit of Work.
    - Services never read configuration; adapters are injected.
    """

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        return SQLAlchemyReadOnlyUnitOfWork()

    def in_store(self, what: str, fn: Callable[[], T]) -> T:
        """
        Run ``fn`` and re-raise any SQLAlchemy error as a transient store fault.

        :param what: Short description of the step, used in the log message.
        :param fn: Callable performing the persistence work.
        :raises TransientStoreError: Chained to the original database error.
        """
        try:
            return fn()
        except SQLAlchemyError as exc:
            raise TransientStoreError(f"Failed to {what}") from exc

    # -------------------------- Error handling ------------------------------

    def translate_exceptions(self, exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised ``from exc``.
        :rtype: Exception
        """
        if isinstance(exc, ValidationError):
            # → 400 with the offending field and reason
            return api_errors.BadRequest(
                str(exc), details={"field": exc.field, "reason": exc.reason}
            )

        if isinstance(exc, PasswordMismatchError):
            return api_errors.BadRequest(str(exc))

        if isinstance(exc, UnknownTokenError | InvalidCredentialsError | AuthenticationRequiredError):
            # → 401 without detail
            return api_errors.Unauthorized(str(exc))

        if isinstance(exc, UnexpectedError):
            # → 500; the cause stays in the log, never in the body
            return api_errors.InternalError()

        if isinstance(exc, ServiceError):
            return api_errors.APIError(message=str(exc), status_code=400, code="bad_request")

        # Fallback: return untouched (will bubble up to Flask handler)
        return exc
