"""Telegram bot adapter - Inbound commands."""

from .handlers import build_bot_application, start_bot, stop_bot

__all__ = ["build_bot_application", "start_bot", "stop_bot"]
