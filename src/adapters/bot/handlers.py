"""
Telegram bot command handlers.

/start links the sender's username to their chat id so verification codes
can be delivered later. /help shows static usage text.
"""

import asyncio
import logging

from telegram import BotCommand, Update
from telegram.error import TelegramError
from telegram.ext import Application, CommandHandler, ContextTypes

from src.domain.ports import IdentityStore

logger = logging.getLogger(__name__)

IDENTITY_STORE_KEY = "identity_store"

GREETING_TEXT = (
    "Salom, {first_name}! Men tasdiqlash kodlarini yuborish uchun botman. "
    "Ro'yxatdan o'tish jarayonida sizga kod yuboriladi."
)
NO_USERNAME_TEXT = (
    "Salom! Iltimos, Telegram profilingizda username o'rnating, "
    "aks holda tizim sizni aniqlay olmaydi."
)
HELP_TEXT = (
    "Men tasdiqlash kodlarini yuborish uchun botman. "
    "Ro'yxatdan o'tish jarayonida sizga kod yuboriladi."
)


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command - record the user's chat id and greet them."""
    user = update.effective_user
    chat = update.effective_chat

    if not user.username:
        await update.message.reply_text(NO_USERNAME_TEXT)
        return

    identity_store: IdentityStore = context.bot_data[IDENTITY_STORE_KEY]
    # File write and lock stay off the event loop
    await asyncio.to_thread(identity_store.record_contact, user.username, chat.id)
    logger.info("User @%s started the bot (chat %s)", user.username, chat.id)

    await update.message.reply_text(GREETING_TEXT.format(first_name=user.first_name))


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help command - show usage text."""
    await update.message.reply_text(HELP_TEXT)


async def set_bot_commands(application: Application) -> None:
    """Register bot commands menu in Telegram on startup."""
    commands = [
        BotCommand("start", "Botni ishga tushirish"),
        BotCommand("help", "Yordam"),
    ]
    try:
        await application.bot.set_my_commands(commands)
    except TelegramError as exc:
        logger.warning("Could not register bot commands menu: %s", exc)
        return
    logger.info("Bot commands menu registered")


def build_bot_application(token: str, identity_store: IdentityStore) -> Application:
    """
    Build the Telegram application with command handlers registered.

    The identity store is shared with handlers through bot_data.
    Polling is started by the caller.
    """
    application = Application.builder().token(token).build()
    application.bot_data[IDENTITY_STORE_KEY] = identity_store

    application.add_handler(CommandHandler("start", start_command))
    application.add_handler(CommandHandler("help", help_command))
    return application


async def start_bot(application: Application) -> None:
    """Initialize the application and start long polling in the running loop."""
    await application.initialize()
    await set_bot_commands(application)
    await application.start()
    await application.updater.start_polling(
        drop_pending_updates=True, allowed_updates=["message"]
    )
    logger.info("Telegram bot started successfully")


async def stop_bot(application: Application) -> None:
    """Stop polling and release the application's resources."""
    await application.updater.stop()
    await application.stop()
    await application.shutdown()
    logger.info("Telegram bot stopped")
