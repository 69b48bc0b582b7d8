"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol

Destination = int | str


@dataclass(frozen=True)
class PendingCode:
    """A verification code waiting to be consumed."""

    code: str
    expires_at: datetime


class VerifyResult(Enum):
    """
    Result of a verification attempt.

    Used by verify_code() to indicate success or specific failure.
    """

    SUCCESS = "success"
    NO_PENDING_CODE = "no_pending_code"
    CODE_EXPIRED = "code_expired"
    CODE_MISMATCH = "code_mismatch"


class IdentityStore(Protocol):
    """Port interface for username -> chat id persistence."""

    # True while the backing storage is failing and lookups are memory-only
    degraded: bool

    def load(self) -> None:
        """Populate the in-memory mapping from the backing storage."""
        ...

    def record_contact(self, username: str, destination: Destination) -> None:
        """
        Upsert the chat id for a username and persist the mapping.

        Args:
            username: Telegram username (normalized by the store)
            destination: Chat id the bot can deliver messages to
        """
        ...

    def lookup_destination(self, username: str) -> Destination | None:
        """
        Find the chat id recorded for a username.

        Returns:
            The chat id, or None when the user never contacted the bot
        """
        ...

    def close(self) -> None:
        """Release storage resources at shutdown."""
        ...


class CodeRegistry(Protocol):
    """Port interface for pending verification codes."""

    def issue(self, username: str) -> str:
        """
        Generate and store a fresh code, replacing any pending one.

        Returns:
            6-digit verification code
        """
        ...

    def peek(self, username: str) -> PendingCode | None:
        """Return the pending code for a username without consuming it."""
        ...

    def invalidate(self, username: str) -> None:
        """Remove the pending code for a username. Idempotent."""
        ...

    def clear(self) -> None:
        """Drop every pending code."""
        ...


class Notifier(Protocol):
    """Port interface for outbound chat messages."""

    async def send_message(self, destination: Destination, text: str) -> None:
        """
        Deliver a text message to a chat.

        Args:
            destination: Chat id resolved through the IdentityStore
            text: Message body

        Raises:
            NotificationError: If the message could not be delivered
        """
        ...
