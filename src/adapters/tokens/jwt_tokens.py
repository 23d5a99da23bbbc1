"""
JWT token adapter - Implements VerificationTokens protocol.

Tokens are HS256-signed JWTs carrying the user id in ``sub`` and the
email in ``email``, with ``iat``/``exp`` bounding their lifetime.
"""

import logging
import time
from typing import Any

import jwt

from src.domain.exceptions import ExpiredToken, InvalidToken
from src.domain.ports import TokenClaims

logger = logging.getLogger(__name__)

_ALGORITHM = "HS256"


class JwtVerificationTokens:
    """
    Implements VerificationTokens protocol via PyJWT.

    Uses structural subtyping - no explicit inheritance from Protocol.
    The signing secret is handed in once at construction and never changes.
    """

    def __init__(self, secret: str, ttl_seconds: int = 3600) -> None:
        """
        Args:
            secret: HMAC signing key
            ttl_seconds: Token lifetime from issuance
        """
        self._secret = secret
        self._ttl_seconds = ttl_seconds

    def issue(self, user_id: str, email: str, *, issued_at: int | None = None) -> str:
        """
        Create a signed token expiring ttl_seconds after issuance.

        Args:
            user_id: Identifier of the user to verify
            email: Email address the link is sent to
            issued_at: Unix timestamp to issue at (defaults to now)
        """
        now = int(time.time()) if issued_at is None else issued_at
        payload: dict[str, Any] = {
            "sub": user_id,
            "email": email,
            "iat": now,
            "exp": now + self._ttl_seconds,
        }
        return jwt.encode(payload, self._secret, algorithm=_ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a token.

        Raises:
            ExpiredToken: exp claim is in the past
            InvalidToken: any other signature, format or claim failure
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[_ALGORITHM],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise ExpiredToken("verification token has expired") from e
        except jwt.PyJWTError as e:
            logger.debug(f"Verification token rejected: {e}")
            raise InvalidToken("verification token is invalid") from e

        user_id = payload.get("sub")
        email = payload.get("email")
        if not isinstance(user_id, str) or not isinstance(email, str) or not email:
            raise InvalidToken("verification token is missing claims")

        return TokenClaims(user_id=user_id, email=email)
