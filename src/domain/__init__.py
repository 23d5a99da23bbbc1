"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for account registration
and email verification. It defines its own port interfaces for
infrastructure abstraction, ensuring true hexagonal architecture decoupling.
"""

from .exceptions import (
    AlreadyVerified,
    DuplicateEmail,
    ExpiredToken,
    InvalidToken,
    MailDeliveryFailed,
    MissingFields,
    MissingToken,
    PasswordTooLong,
    PasswordTooShort,
    RegistrationError,
    UserAlreadyExists,
    UserNotFound,
    VerificationFailed,
)
from .passwords import PasswordHasher
from .ports import EmailSender, TokenClaims, UserRepository, VerificationTokens
from .registration import RegistrationService
from .user import User
from .verification import EmailVerificationService

__all__ = [
    "AlreadyVerified",
    "DuplicateEmail",
    "EmailSender",
    "EmailVerificationService",
    "ExpiredToken",
    "InvalidToken",
    "MailDeliveryFailed",
    "MissingFields",
    "MissingToken",
    "PasswordHasher",
    "PasswordTooLong",
    "PasswordTooShort",
    "RegistrationError",
    "RegistrationService",
    "TokenClaims",
    "User",
    "UserAlreadyExists",
    "UserNotFound",
    "UserRepository",
    "VerificationFailed",
    "VerificationTokens",
]
