"""
Registration domain service - payload validation and confirmation.

Registration data is not stored here; the system of record lives
behind the front-end. This service only checks that every required
field is present and notifies the user over Telegram.
"""

import logging
import time
from dataclasses import dataclass, fields

from .exceptions import MissingField, NotificationError
from .ports import IdentityStore, Notifier

logger = logging.getLogger(__name__)

CONFIRMATION_MESSAGE = "Tabriklaymiz, {full_name}! Siz muvaffaqiyatli ro'yxatdan o'tdingiz.\n\nLogin: {login}"


@dataclass
class Registration:
    """Registration form as submitted by the front-end."""

    full_name: str | None = None
    student_id: str | None = None
    email: str | None = None
    phone: str | None = None
    telegram: str | None = None
    login: str | None = None
    password: str | None = None


# Field check order
REQUIRED_FIELDS = tuple(f.name for f in fields(Registration))


@dataclass
class RegistrationHandler:
    """
    Domain service for registration confirmation.

    Validates the form and sends a best-effort confirmation message.
    """

    identity_store: IdentityStore
    notifier: Notifier

    def __post_init__(self) -> None:
        self._last_id = 0

    async def register(self, registration: Registration) -> int:
        """
        Validate a registration and confirm it over Telegram.

        Args:
            registration: Submitted form

        Returns:
            Synthetic registration id (process-local, strictly increasing)

        Raises:
            MissingField: For the first required field that is absent or empty
        """
        for name in REQUIRED_FIELDS:
            if not getattr(registration, name):
                raise MissingField(name)

        destination = self.identity_store.lookup_destination(registration.telegram)
        if destination is not None:
            text = CONFIRMATION_MESSAGE.format(
                full_name=registration.full_name, login=registration.login
            )
            try:
                await self.notifier.send_message(destination, text)
            except NotificationError as exc:
                logger.warning(
                    "Registration confirmation not delivered to %s: %s",
                    registration.telegram,
                    exc,
                )
        else:
            logger.info("No chat id for %s, skipping confirmation", registration.telegram)

        return self._next_id()

    def _next_id(self) -> int:
        """Epoch milliseconds, bumped when two registrations share a tick."""
        self._last_id = max(self._last_id + 1, time.time_ns() // 1_000_000)
        return self._last_id
