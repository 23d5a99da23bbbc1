"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from dataclasses import dataclass
from typing import Protocol

from .user import User


@dataclass(frozen=True)
class TokenClaims:
    """Identity bound into a verification token."""

    user_id: str
    email: str


class UserRepository(Protocol):
    """Port interface for user persistence."""

    def find_by_email(self, email: str) -> User | None:
        """Return the user registered under this normalized email, if any."""
        ...

    def find_by_id(self, user_id: str) -> User | None:
        """
        Return the user with this id, if any.

        Malformed ids are treated as unknown and return None.
        """
        ...

    def create(self, email: str, password_hash: str) -> User:
        """
        Atomically insert a new unverified user.

        The uniqueness check is the store's own constraint, so two
        concurrent calls with the same email cannot both succeed.

        Args:
            email: Normalized email address
            password_hash: bcrypt hashed password

        Returns:
            The persisted user with store-assigned id and created_at

        Raises:
            DuplicateEmail: If the email is already present
        """
        ...

    def mark_verified(self, user_id: str) -> bool:
        """
        Flip is_verified from False to True.

        Returns:
            True if this call performed the transition, False if the
            user was already verified (or does not exist)
        """
        ...


class VerificationTokens(Protocol):
    """Port interface for signed, expiring email verification tokens."""

    def issue(self, user_id: str, email: str) -> str:
        """Create a signed token binding user id and email."""
        ...

    def verify(self, token: str) -> TokenClaims:
        """
        Validate a token and return its claims.

        Raises:
            InvalidToken: Signature invalid, malformed, or claims missing
            ExpiredToken: Token lifetime has elapsed
        """
        ...


class EmailSender(Protocol):
    """Port interface for email delivery."""

    def send_verification_link(self, email: str, link: str) -> None:
        """
        Send a verification link to an email address.

        Args:
            email: Recipient email address
            link: Absolute URL embedding the verification token

        Raises:
            MailDeliveryFailed: If the message could not be handed off
        """
        ...
