"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures exception handlers and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.adapters.bot import build_bot_application, start_bot, stop_bot
from src.adapters.notifier import ConsoleNotifier, TelegramNotifier
from src.adapters.repository import InMemoryCodeRegistry, JsonFileIdentityStore
from src.api.models import ErrorResponse
from src.api.routes import router
from src.config.settings import get_settings
from src.domain.registration import RegistrationHandler

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "verification",
        "description": "Telegram verification codes and registration confirmation",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Loads saved chat IDs on startup
    - Starts the Telegram bot (polling) when a token is configured
    - Stops the bot and releases the stores on shutdown
    """
    settings = get_settings()

    logger.info("Starting application...")

    identity_store = JsonFileIdentityStore(settings.chat_ids_path)
    identity_store.load()
    code_registry = InMemoryCodeRegistry(ttl_seconds=settings.code_ttl_seconds)

    bot_application = None
    if settings.telegram_bot_token:
        bot_application = build_bot_application(settings.telegram_bot_token, identity_store)
        await start_bot(bot_application)
        notifier = TelegramNotifier(bot_application.bot)
    else:
        logger.warning("TELEGRAM_BOT_TOKEN is not set, messages will be logged to console")
        notifier = ConsoleNotifier()

    # Store collaborators in app state for dependency injection
    app.state.identity_store = identity_store
    app.state.code_registry = code_registry
    app.state.notifier = notifier
    app.state.registration_handler = RegistrationHandler(
        identity_store=identity_store, notifier=notifier
    )

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Stopping bot and server...")
    if bot_application is not None:
        await stop_bot(bot_application)
    identity_store.close()
    code_registry.clear()
    logger.info("Shutdown complete")


app = FastAPI(
    title="tg-verify-bridge",
    description="Telegram verification bridge - Delivers one-time codes and "
    "registration confirmations through a Telegram bot",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

app.include_router(router)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies with the standard failure body."""
    logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error="Invalid request body").model_dump(),
    )


@app.get("/health")
async def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with persistence validation.

    Returns "degraded" when the identity store could not read or write
    its file and is serving from memory only.
    """
    identity_store = request.app.state.identity_store
    if identity_store.degraded:
        return {"status": "degraded"}
    return {"status": "healthy"}
