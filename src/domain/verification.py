"""
Email verification domain service.

    TokenReceived -> Decoded -> Loaded -> CheckedVerified -> MarkedVerified

is_verified only ever moves False -> True. Replaying a link after success
fails with AlreadyVerified instead of succeeding silently.
"""

import logging
from dataclasses import dataclass, replace

from .exceptions import AlreadyVerified, InvalidToken, MissingToken, UserNotFound
from .ports import UserRepository, VerificationTokens
from .user import User

logger = logging.getLogger(__name__)


@dataclass
class EmailVerificationService:
    """Domain service that redeems verification tokens."""

    repository: UserRepository
    tokens: VerificationTokens

    def verify_email(self, token: str | None) -> User:
        """
        Mark the user bound into the token as verified.

        Args:
            token: Verification token from the emailed link

        Returns:
            The user, now verified

        Raises:
            MissingToken: If token is absent or blank
            InvalidToken: If token fails signature or format checks,
                or names a different email than the stored user
            ExpiredToken: If token lifetime has elapsed
            UserNotFound: If the token's user does not exist
            AlreadyVerified: If the user was verified before this call
        """
        if not token or not token.strip():
            raise MissingToken("verification token is required")

        claims = self.tokens.verify(token.strip())

        user = self.repository.find_by_id(claims.user_id)
        if user is None:
            raise UserNotFound(claims.user_id)

        # A token minted for an address the account no longer holds is void
        if claims.email != user.email:
            raise InvalidToken("token email does not match the account")

        if user.is_verified:
            raise AlreadyVerified(claims.user_id)

        # Conditional update: a concurrent redemption of the same link loses here
        if not self.repository.mark_verified(claims.user_id):
            raise AlreadyVerified(claims.user_id)

        logger.info("Verified email for user %s", user.id)
        return replace(user, is_verified=True)
