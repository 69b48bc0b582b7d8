"""
API routes - Verification and registration endpoints.

This module defines the HTTP endpoints:
- POST /send-verification-code - Deliver a code over Telegram
- POST /verify-code - Consume a code
- POST /register - Validate registration and send confirmation

Failures are returned as {"success": false, "error": ...}; no exception
escapes the route.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_registration_handler, get_verification_service
from src.api.models import (
    ErrorResponse,
    RegisterRequest,
    RegisterResponse,
    SendCodeRequest,
    SuccessResponse,
    VerifyCodeRequest,
)
from src.config.settings import get_settings
from src.domain.exceptions import DeliveryFailed, MissingField, UnknownRecipient
from src.domain.ports import VerifyResult
from src.domain.registration import Registration, RegistrationHandler
from src.domain.verification import VerificationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["verification"])

_VERIFY_ERRORS = {
    VerifyResult.NO_PENDING_CODE: "No verification code found for this user",
    VerifyResult.CODE_EXPIRED: "Verification code has expired",
    VerifyResult.CODE_MISMATCH: "Invalid verification code",
}


def failure(status_code: int, error: str) -> JSONResponse:
    """Build the standard failure body."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error).model_dump(),
    )


@router.post(
    "/send-verification-code",
    response_model=SuccessResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or unknown Telegram username"},
        500: {"model": ErrorResponse, "description": "Telegram delivery failed"},
    },
    summary="Send a verification code",
    description="Issue a 6-digit code valid for 10 minutes and send it to the "
    "user's Telegram chat. The user must have sent /start to the bot first.",
)
async def send_verification_code(
    request_data: SendCodeRequest,
    service: VerificationService = Depends(get_verification_service),
) -> SuccessResponse | JSONResponse:
    if not request_data.telegram:
        return failure(status.HTTP_400_BAD_REQUEST, "Telegram username is required")

    logger.info("Received request to send verification code to: %s", request_data.telegram)
    try:
        await service.request_code(request_data.telegram)
    except UnknownRecipient:
        bot_username = get_settings().telegram_bot_username
        return failure(
            status.HTTP_400_BAD_REQUEST,
            "Telegram username not found. Please start the bot first "
            f"by sending /start to @{bot_username}",
        )
    except DeliveryFailed:
        return failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to send Telegram message")
    except Exception:
        logger.exception("Error sending verification code")
        return failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to send verification code")
    return SuccessResponse()


@router.post(
    "/verify-code",
    response_model=SuccessResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing fields, no code, expired or invalid code"},
        500: {"model": ErrorResponse, "description": "Unexpected failure"},
    },
    summary="Verify a code",
    description="Check the code the user received on Telegram. A correct code "
    "can be used once; a wrong code may be retried until it expires.",
)
async def verify_code(
    request_data: VerifyCodeRequest,
    service: VerificationService = Depends(get_verification_service),
) -> SuccessResponse | JSONResponse:
    if not request_data.telegram or not request_data.code:
        return failure(
            status.HTTP_400_BAD_REQUEST, "Telegram username and code are required"
        )

    try:
        result = service.verify_code(request_data.telegram, request_data.code)
    except Exception:
        logger.exception("Error verifying code")
        return failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to verify code")

    if result is not VerifyResult.SUCCESS:
        return failure(status.HTTP_400_BAD_REQUEST, _VERIFY_ERRORS[result])
    return SuccessResponse()


@router.post(
    "/register",
    response_model=RegisterResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Required field missing"},
        500: {"model": ErrorResponse, "description": "Unexpected failure"},
    },
    summary="Register a user",
    description="Validate the registration form and send a confirmation "
    "message to the user's Telegram chat when it is known.",
)
async def register(
    request_data: RegisterRequest,
    handler: RegistrationHandler = Depends(get_registration_handler),
) -> RegisterResponse | JSONResponse:
    registration = Registration(**request_data.model_dump())
    try:
        user_id = await handler.register(registration)
    except MissingField as exc:
        alias = RegisterRequest.model_fields[exc.field].alias or exc.field
        return failure(status.HTTP_400_BAD_REQUEST, f"{alias} is required")
    except Exception:
        logger.exception("Error registering user")
        return failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to register user")
    return RegisterResponse(user_id=user_id)
