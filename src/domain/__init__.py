"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for the Telegram verification
bridge: code lifecycle, identity lookup and registration confirmation. It
defines its own port interfaces for infrastructure abstraction.
"""

from .exceptions import (
    BridgeError,
    DeliveryFailed,
    MissingField,
    NotificationError,
    UnknownRecipient,
)
from .ports import CodeRegistry, IdentityStore, Notifier, PendingCode, VerifyResult
from .registration import Registration, RegistrationHandler
from .usernames import normalize_username
from .verification import VerificationService

__all__ = [
    "BridgeError",
    "CodeRegistry",
    "DeliveryFailed",
    "IdentityStore",
    "MissingField",
    "NotificationError",
    "Notifier",
    "PendingCode",
    "Registration",
    "RegistrationHandler",
    "UnknownRecipient",
    "VerificationService",
    "VerifyResult",
    "normalize_username",
]
