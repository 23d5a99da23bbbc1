"""
PostgreSQL repository adapter - Implements UserRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Concurrency Design:
-------------------
1. **create()**: A single INSERT ... ON CONFLICT (email) DO NOTHING RETURNING.
   The UNIQUE constraint on users.email decides the winner of concurrent
   registrations; the loser gets no row back and DuplicateEmail is raised.

2. **mark_verified()**: UPDATE ... WHERE is_verified = FALSE. Two concurrent
   redemptions of the same link both reach the UPDATE, but only one of them
   matches the row, so exactly one reports the transition.
"""

import logging
from pathlib import Path
from uuid import UUID

from psycopg.rows import class_row
from psycopg_pool import ConnectionPool

from src.domain.exceptions import DuplicateEmail
from src.domain.user import User

logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, email, password_hash, is_verified, created_at"


class PostgresUserRepository:
    """
    Implements UserRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_by_email(self, email: str) -> User | None:
        sql = f"SELECT {_USER_COLUMNS} FROM users WHERE email = %s"

        with self._pool.connection() as conn, conn.cursor(row_factory=class_row(User)) as cursor:
            cursor.execute(sql, (email,))
            return cursor.fetchone()

    def find_by_id(self, user_id: str) -> User | None:
        try:
            uid = UUID(user_id)
        except (ValueError, TypeError):
            return None

        sql = f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s"

        with self._pool.connection() as conn, conn.cursor(row_factory=class_row(User)) as cursor:
            cursor.execute(sql, (uid,))
            return cursor.fetchone()

    def create(self, email: str, password_hash: str) -> User:
        """
        Insert a new unverified user.

        Args:
            email: Normalized email address (lowercase, stripped)
            password_hash: bcrypt-hashed password from domain layer

        Returns:
            Persisted user with database-assigned id and created_at

        Raises:
            DuplicateEmail: If a user with this email already exists
        """
        sql = f"""
            INSERT INTO users (email, password_hash)
            VALUES (%s, %s)
            ON CONFLICT (email) DO NOTHING
            RETURNING {_USER_COLUMNS}
        """

        with self._pool.connection() as conn, conn.cursor(row_factory=class_row(User)) as cursor:
            cursor.execute(sql, (email, password_hash))
            user = cursor.fetchone()
            conn.commit()

        if user is None:
            # ON CONFLICT swallowed the insert - another registration owns this email
            raise DuplicateEmail(email)
        return user

    def mark_verified(self, user_id: str) -> bool:
        """
        Flip is_verified to TRUE if it is currently FALSE.

        Returns:
            True if a row transitioned, False otherwise
        """
        try:
            uid = UUID(user_id)
        except (ValueError, TypeError):
            return False

        sql = """
            UPDATE users
            SET is_verified = TRUE
            WHERE id = %s AND is_verified = FALSE
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (uid,))
            conn.commit()
            return cursor.rowcount == 1


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
