"""
Shared fixtures for adversarial tests.

Provides common test infrastructure for race condition tests.
"""

from collections.abc import Generator

import pytest
from psycopg_pool import ConnectionPool


@pytest.fixture(autouse=True)
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Clean users table before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM users")
        conn.commit()
    yield
