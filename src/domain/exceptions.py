"""
Domain exceptions - Semantic error types for verification and registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
Verification outcomes are reported through VerifyResult instead.
"""


class BridgeError(Exception):
    """Base class for verification bridge domain errors."""

    pass


class UnknownRecipient(BridgeError):
    """Username has no recorded chat id (user never sent /start)."""

    pass


class DeliveryFailed(BridgeError):
    """Verification code was issued but could not be delivered."""

    pass


class MissingField(BridgeError):
    """A required registration field is absent or empty."""

    def __init__(self, field: str) -> None:
        super().__init__(f"{field} is required")
        self.field = field


class NotificationError(Exception):
    """Raised by Notifier adapters when a message cannot be sent."""

    pass
