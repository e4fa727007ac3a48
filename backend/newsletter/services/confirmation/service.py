# newsletter/services/confirmation/service.py
from __future__ import annotations

import logging
import uuid

from newsletter.services._shared.base import BaseService
from newsletter.services._shared.errors import UnknownTokenError

log = logging.getLogger(__name__)


class ConfirmationService(BaseService):
    """
    Resolve a confirmation token and mark its subscriber as confirmed.

    Lookup and update run as two independent statements. The update is
    idempotent, so confirming twice is a no-op success.
    """

    def confirm(self, token: str) -> uuid.UUID:
        """
        Confirm the subscriber bound to ``token``.

        :param token: Value taken from the confirmation link.
        :returns: The confirmed subscriber's id.
        :raises UnknownTokenError: No subscriber is bound to ``token``.
        :raises TransientStoreError: Lookup or update failed.
        """
        subscriber_id = self.in_store("resolve a confirmation token", lambda: self._resolve(token))
        if subscriber_id is None:
            raise UnknownTokenError()

        self.in_store("mark a subscriber as confirmed", lambda: self._set_confirmed(subscriber_id))
        log.info("Subscriber confirmed", extra={"subscriber_id": str(subscriber_id)})
        return subscriber_id

    def _resolve(self, token: str) -> uuid.UUID | None:
        with self.ro_uow() as uow:
            return uow.subscription_tokens.resolve_token(token)

    def _set_confirmed(self, subscriber_id: uuid.UUID) -> None:
        with self.rw_uow() as uow:
            uow.subscribers.set_confirmed(subscriber_id)
