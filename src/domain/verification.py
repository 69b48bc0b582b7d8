"""
Verification domain service - one-time code lifecycle.

This module contains the core business logic for issuing and consuming
Telegram verification codes.

Code Lifecycle (per username)
=============================

States:
- NONE: No pending code
- PENDING: Code issued, waiting for verification
- CONSUMED: Correct code submitted before expiry (entry removed)
- EXPIRED: Verification attempted after expiry (entry removed)

Transitions:
    NONE     -> PENDING   (request_code)
    PENDING  -> PENDING   (request_code again, previous code replaced)
    PENDING  -> PENDING   (wrong code, entry kept for a retry)
    PENDING  -> CONSUMED  (matching code before expiry)
    PENDING  -> EXPIRED   (any code after expiry)

Note: Failed attempts are not counted. There is no lockout, so a pending
code can be guessed by repeated submissions within its validity window.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from .exceptions import DeliveryFailed, NotificationError, UnknownRecipient
from .ports import CodeRegistry, IdentityStore, Notifier, VerifyResult
from .usernames import normalize_username

logger = logging.getLogger(__name__)

CODE_MESSAGE = "Sizning tasdiqlash kodingiz: {code}\n\nBu kod {minutes} daqiqa davomida amal qiladi."


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class VerificationService:
    """
    Domain service for Telegram verification codes.

    Orchestrates recipient lookup, code issuance, delivery and
    single-use verification.
    """

    identity_store: IdentityStore
    code_registry: CodeRegistry
    notifier: Notifier
    ttl_seconds: int = 600
    clock: Callable[[], datetime] = field(default=utc_now)

    def __post_init__(self) -> None:
        if self.ttl_seconds <= 0 or self.ttl_seconds % 60:
            raise ValueError(f"ttl_seconds must be a positive multiple of 60, got {self.ttl_seconds}")

    async def request_code(self, username: str) -> None:
        """
        Issue a verification code and send it to the user's chat.

        Args:
            username: Telegram username (with or without leading "@")

        Raises:
            UnknownRecipient: If the user never started the bot
            DeliveryFailed: If Telegram rejected the message; the issued
                code stays valid
        """
        destination = self.identity_store.lookup_destination(username)
        if destination is None:
            logger.info("Chat id not found for username: %s", username)
            raise UnknownRecipient(normalize_username(username))

        code = self.code_registry.issue(username)
        text = CODE_MESSAGE.format(code=code, minutes=self.ttl_seconds // 60)
        try:
            await self.notifier.send_message(destination, text)
        except NotificationError as exc:
            logger.error("Failed to deliver verification code to %s: %s", username, exc)
            raise DeliveryFailed(normalize_username(username)) from exc

        logger.info("Verification code sent to %s", username)

    def verify_code(self, username: str, submitted_code: str) -> VerifyResult:
        """
        Check a submitted code against the pending one.

        The comparison is exact: no trimming or normalization of the code.
        Expired and consumed codes are removed; mismatches leave the
        pending code in place.

        Returns:
            VerifyResult indicating success or specific failure reason
        """
        pending = self.code_registry.peek(username)
        if pending is None:
            logger.info("No verification code found for %s", username)
            return VerifyResult.NO_PENDING_CODE

        if self.clock() > pending.expires_at:
            logger.info("Verification code expired for %s", username)
            self.code_registry.invalidate(username)
            return VerifyResult.CODE_EXPIRED

        if pending.code != submitted_code:
            logger.info("Invalid verification code for %s", username)
            return VerifyResult.CODE_MISMATCH

        self.code_registry.invalidate(username)
        logger.info("Verification successful for %s", username)
        return VerifyResult.SUCCESS
