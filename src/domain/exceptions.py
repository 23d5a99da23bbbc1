"""
Domain exceptions - Semantic error types for registration and verification.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class MissingFields(RegistrationError):
    """Email or password was not supplied."""

    pass


class PasswordTooShort(RegistrationError):
    """Plaintext password is below the minimum length."""

    pass


class PasswordTooLong(RegistrationError):
    """Plaintext password encodes to more bytes than bcrypt accepts."""

    pass


class UserAlreadyExists(RegistrationError):
    """A user with this email is already registered."""

    pass


class DuplicateEmail(UserAlreadyExists):
    """Store rejected the insert on its unique email constraint."""

    pass


class MailDeliveryFailed(RegistrationError):
    """Verification email could not be handed to the mail transport."""

    pass


class VerificationFailed(RegistrationError):
    """Base class for email verification failures."""

    pass


class MissingToken(VerificationFailed):
    """No verification token was supplied."""

    pass


class InvalidToken(VerificationFailed):
    """Token is malformed, tampered with, or lacks required claims."""

    pass


class ExpiredToken(InvalidToken):
    """Token signature is valid but its expiry has passed."""

    pass


class UserNotFound(VerificationFailed):
    """Token refers to a user that does not exist."""

    pass


class AlreadyVerified(VerificationFailed):
    """User has already completed email verification."""

    pass
