"""
Telegram notifier adapter - Implements Notifier protocol.

Sends messages through the Bot API using python-telegram-bot.
"""

import logging

from telegram import Bot
from telegram.error import TelegramError

from src.domain.exceptions import NotificationError
from src.domain.ports import Destination

logger = logging.getLogger(__name__)


class TelegramNotifier:
    """
    Implements Notifier protocol via telegram.Bot.send_message.

    Uses structural subtyping - no explicit inheritance from Protocol.
    A single attempt is made per message; request timeouts are the ones
    configured on the bot's HTTP client.
    """

    def __init__(self, bot: Bot) -> None:
        self._bot = bot

    async def send_message(self, destination: Destination, text: str) -> None:
        try:
            await self._bot.send_message(chat_id=destination, text=text)
        except TelegramError as exc:
            logger.error("Error sending Telegram message to %s: %s", destination, exc)
            raise NotificationError(str(exc)) from exc
