"""User entity - The persisted account record."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class User:
    """
    Registered account.

    Lifecycle: created unverified by registration, flipped to verified
    exactly once by email verification, never deleted.
    """

    id: UUID
    email: str
    password_hash: str
    is_verified: bool
    created_at: datetime
