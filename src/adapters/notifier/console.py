"""
Console notifier adapter - Implements Notifier protocol.

This module provides a console-based implementation of the domain's
notifier port, logging outgoing messages instead of sending them.
Used when no Telegram bot token is configured.
"""

import logging
import re

from src.domain.ports import Destination
from src.domain.verification import CODE_MESSAGE

logger = logging.getLogger(__name__)

# Only messages built from CODE_MESSAGE carry a verification code
_CODE_PATTERN = re.compile(re.escape(CODE_MESSAGE.split("{code}")[0]) + r"(\d{6})")


class ConsoleNotifier:
    """
    Implements Notifier protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For development purposes - prints messages and verification codes to stdout.
    """

    async def send_message(self, destination: Destination, text: str) -> None:
        """
        Log a message to console (simulates Telegram delivery).

        Messages carrying a verification code are tagged so the code can be
        picked out of docker-compose logs.

        Args:
            destination: Chat id the message would be delivered to
            text: Message body
        """
        match = _CODE_PATTERN.match(text)
        if match:
            logger.info("[VERIFICATION] Chat: %s Code: %s", destination, match.group(1))
        else:
            logger.info("[MESSAGE] Chat: %s Text: %s", destination, text)
