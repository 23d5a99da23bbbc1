"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
Configuration is read once via get_settings() and passed into
adapter constructors explicitly.
"""

from fastapi import Depends, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresUserRepository
from src.adapters.smtp.console import ConsoleEmailSender
from src.adapters.smtp.smtp import SmtpEmailSender
from src.adapters.tokens.jwt_tokens import JwtVerificationTokens
from src.config.settings import Settings, get_settings
from src.domain.passwords import PasswordHasher
from src.domain.ports import EmailSender
from src.domain.registration import RegistrationService
from src.domain.verification import EmailVerificationService


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(request: Request) -> PostgresUserRepository:
    """Create repository with connection pool from app state."""
    pool = get_pool(request)
    return PostgresUserRepository(pool)


def get_token_service(settings: Settings = Depends(get_settings)) -> JwtVerificationTokens:
    """Build the token issuer/verifier from the configured secret."""
    return JwtVerificationTokens(
        secret=settings.jwt_secret.get_secret_value(),
        ttl_seconds=settings.verification_token_ttl_seconds,
    )


def get_email_sender(settings: Settings = Depends(get_settings)) -> EmailSender:
    """Select the mail transport configured by mail_backend."""
    if settings.mail_backend == "smtp":
        return SmtpEmailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            sender=settings.mail_from,
            username=settings.smtp_username,
            password=settings.smtp_password.get_secret_value() if settings.smtp_password else None,
            use_tls=settings.smtp_use_tls,
            timeout=settings.smtp_timeout_seconds,
        )
    return ConsoleEmailSender()


def get_registration_service(
    repository: PostgresUserRepository = Depends(get_repository),
    tokens: JwtVerificationTokens = Depends(get_token_service),
    email_sender: EmailSender = Depends(get_email_sender),
    settings: Settings = Depends(get_settings),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the repository, hasher, token issuer and email sender.
    """
    return RegistrationService(
        repository=repository,
        hasher=PasswordHasher(rounds=settings.bcrypt_cost),
        tokens=tokens,
        email_sender=email_sender,
        verification_url=settings.verification_url,
        send_verification=settings.email_verification_enabled,
    )


def get_verification_service(
    repository: PostgresUserRepository = Depends(get_repository),
    tokens: JwtVerificationTokens = Depends(get_token_service),
) -> EmailVerificationService:
    """Create email verification service with injected dependencies."""
    return EmailVerificationService(repository=repository, tokens=tokens)
