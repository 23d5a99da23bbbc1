"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Domain object factories
- Database connection pool (skipped when PostgreSQL is unreachable)
"""

import os
from collections.abc import Callable, Generator
from datetime import datetime, timezone
from uuid import uuid4

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from src.adapters.repository.postgres import run_migrations
from src.config.settings import get_settings
from src.domain.user import User

# Settings refuse to load without a signing key.
os.environ.setdefault("JWT_SECRET", "test-only-signing-key-0123456789abcdef")


@pytest.fixture
def make_user() -> Callable[..., User]:
    """Factory for User entities with sensible defaults."""

    def _make_user(
        email: str = "user@example.com",
        is_verified: bool = False,
        password_hash: str = "$2b$10$hashedpasswordvalue",
    ) -> User:
        return User(
            id=uuid4(),
            email=email,
            password_hash=password_hash,
            is_verified=is_verified,
            created_at=datetime.now(timezone.utc),
        )

    return _make_user


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool against DATABASE_URL and apply migrations."""
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=False,
    )
    try:
        pool.open(wait=True, timeout=5)
    except PoolTimeout:
        pool.close()
        pytest.skip(f"PostgreSQL not reachable at {settings.database_url}")

    run_migrations(pool)
    yield pool
    pool.close()
