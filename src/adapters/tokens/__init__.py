"""Token adapters - Verification token implementations."""

from .jwt_tokens import JwtVerificationTokens

__all__ = ["JwtVerificationTokens"]
