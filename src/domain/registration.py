"""
Registration domain service - Account creation state machine.

This module contains the core business logic for user registration.

Registration flow (aborts at any gate)
======================================

    Received -> Validated -> Checked -> Hashed -> Persisted
             -> [TokenIssued -> MailSent] -> Complete

- Validated: email and password present, password length within bounds
- Checked: no existing user with this email
- Hashed: bcrypt hash computed, plaintext discarded
- Persisted: user row inserted with is_verified = FALSE
- TokenIssued/MailSent: only when verification mail is enabled

Note: The lookup in Checked only produces a friendly error. The store's
UNIQUE constraint is authoritative and surfaces as DuplicateEmail when two
registrations race past the lookup.

A mail failure after Persisted leaves the user in place. There is no
compensation and no retry.
"""

import logging
from dataclasses import dataclass
from urllib.parse import urlencode

from .exceptions import MissingFields, PasswordTooLong, PasswordTooShort, UserAlreadyExists
from .passwords import MAX_PASSWORD_BYTES, MIN_PASSWORD_LENGTH, PasswordHasher, password_too_long
from .ports import EmailSender, UserRepository, VerificationTokens
from .user import User

logger = logging.getLogger(__name__)


@dataclass
class RegistrationService:
    """
    Domain service for user registration.

    Orchestrates the registration flow: input validation, email
    normalization, uniqueness check, password hashing, persistence
    and verification mail dispatch.
    """

    repository: UserRepository
    hasher: PasswordHasher
    tokens: VerificationTokens
    email_sender: EmailSender
    verification_url: str
    send_verification: bool = True

    def register(self, email: str | None, password: str | None) -> User:
        """
        Register a new user.

        Args:
            email: User's email address (will be normalized)
            password: User's plaintext password (will be hashed)

        Returns:
            The persisted, unverified user

        Raises:
            MissingFields: If email or password is absent or blank
            PasswordTooShort: If password is under the minimum length
            PasswordTooLong: If password encodes to more than 72 bytes
            UserAlreadyExists: If email is already registered
                (DuplicateEmail when the store constraint catches it)
            MailDeliveryFailed: If the verification email could not be sent
        """
        if not email or not email.strip() or not password:
            raise MissingFields("email and password are required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise PasswordTooShort(f"password must be at least {MIN_PASSWORD_LENGTH} characters")
        if password_too_long(password):
            raise PasswordTooLong(f"password must be at most {MAX_PASSWORD_BYTES} bytes")

        normalized_email = self._normalize_email(email)

        if self.repository.find_by_email(normalized_email) is not None:
            raise UserAlreadyExists(normalized_email)

        password_hash = self.hasher.hash(password)
        user = self.repository.create(normalized_email, password_hash)
        logger.info("Registered user %s", user.id)

        if self.send_verification:
            self._send_verification(user)

        return user

    def build_verification_link(self, token: str) -> str:
        """Embed a token in the configured verification URL."""
        return f"{self.verification_url}?{urlencode({'token': token})}"

    def _send_verification(self, user: User) -> None:
        token = self.tokens.issue(str(user.id), user.email)
        link = self.build_verification_link(token)
        self.email_sender.send_verification_link(user.email, link)
        logger.info("Verification email dispatched for user %s", user.id)

    def _normalize_email(self, email: str) -> str:
        """
        Normalize email address for consistent storage and lookup.

        Applies: strip whitespace + lowercase
        """
        return email.strip().lower()
