"""
Credential hashing - bcrypt password hashing policy.

Every call draws a fresh salt, so hashing the same plaintext twice
never yields the same stored value.

bcrypt only reads the first 72 bytes of its input. Longer passwords are
rejected outright rather than silently truncated.
"""

from dataclasses import dataclass

import bcrypt

from .exceptions import PasswordTooLong

MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    """True if the UTF-8 encoding exceeds what bcrypt can hash."""
    return len(password.encode()) > MAX_PASSWORD_BYTES


@dataclass(frozen=True)
class PasswordHasher:
    """bcrypt hasher with a configurable cost factor."""

    rounds: int = 10

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password with a per-call random salt.

        Raises:
            PasswordTooLong: If the password encodes to more than 72 bytes
        """
        if password_too_long(password):
            raise PasswordTooLong(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time check of a plaintext password against a stored hash."""
        if password_too_long(password):
            return False
        return bcrypt.checkpw(password.encode(), password_hash.encode())
