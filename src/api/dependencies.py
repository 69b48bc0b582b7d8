"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
Collaborators are created during app lifespan startup and stored in app.state.
"""

from fastapi import Request

from src.config.settings import get_settings
from src.domain.ports import CodeRegistry, IdentityStore, Notifier
from src.domain.registration import RegistrationHandler
from src.domain.verification import VerificationService


def get_identity_store(request: Request) -> IdentityStore:
    """Get the identity store from app state."""
    return request.app.state.identity_store


def get_code_registry(request: Request) -> CodeRegistry:
    """Get the code registry from app state."""
    return request.app.state.code_registry


def get_notifier(request: Request) -> Notifier:
    """Get the notifier (Telegram or console) from app state."""
    return request.app.state.notifier


def get_verification_service(request: Request) -> VerificationService:
    """
    Create verification service with injected dependencies.

    Wires together the identity store, code registry and notifier.
    """
    return VerificationService(
        identity_store=get_identity_store(request),
        code_registry=get_code_registry(request),
        notifier=get_notifier(request),
        ttl_seconds=get_settings().code_ttl_seconds,
    )


def get_registration_handler(request: Request) -> RegistrationHandler:
    """Get the registration handler (singleton per app, owns the id sequence)."""
    return request.app.state.registration_handler
