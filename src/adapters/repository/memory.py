"""
In-memory code registry - Implements CodeRegistry protocol.

Pending codes live only in this process and are lost on restart.
"""

import logging
import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from src.domain.ports import PendingCode
from src.domain.usernames import normalize_username

logger = logging.getLogger(__name__)

CODE_MIN = 100000
CODE_MAX = 999999


def generate_code() -> str:
    """
    Generate a 6-digit verification code in [100000, 999999].

    Uses secrets module for cryptographic randomness. The lower bound
    guarantees six digits without zero padding.
    """
    return str(CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1))


class InMemoryCodeRegistry:
    """
    Implements CodeRegistry protocol with a dict keyed by username.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        ttl_seconds: int = 600,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        Initialize an empty registry.

        Args:
            ttl_seconds: Validity window of issued codes
            clock: Returns the current aware datetime (UTC by default)
        """
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock or (lambda: datetime.now(UTC))
        self._codes: dict[str, PendingCode] = {}

    def issue(self, username: str) -> str:
        code = generate_code()
        self._codes[normalize_username(username)] = PendingCode(
            code=code, expires_at=self._clock() + self._ttl
        )
        return code

    def peek(self, username: str) -> PendingCode | None:
        return self._codes.get(normalize_username(username))

    def invalidate(self, username: str) -> None:
        self._codes.pop(normalize_username(username), None)

    def clear(self) -> None:
        if self._codes:
            logger.info("Discarding %d pending verification code(s)", len(self._codes))
        self._codes.clear()

    def __len__(self) -> int:
        return len(self._codes)
