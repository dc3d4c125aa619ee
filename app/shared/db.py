"""
Database Connection Helper
==========================
Single place where the PostgreSQL DSN is read.

Stores receive a connection factory (defaults to get_db) so that tests can
inject fakes without a database.
"""

import os
import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

import psycopg2
from psycopg2.extras import RealDictCursor

from app.shared.errors import StorageError

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL")

ConnectionFactory = Callable[[], Optional["psycopg2.extensions.connection"]]


def get_db():
    """Get database connection."""
    try:
        return psycopg2.connect(DATABASE_URL, cursor_factory=RealDictCursor)
    except Exception as e:
        logger.error(f"Database connection error: {e}")
        return None


@contextmanager
def db_cursor(connect: ConnectionFactory = get_db, commit: bool = False) -> Iterator:
    """
    Yield a cursor, committing on success when asked and always closing.

    Raises:
        StorageError: If no connection can be opened or the statement fails
    """
    conn = connect()
    if not conn:
        raise StorageError("Database connection failed")

    try:
        cur = conn.cursor()
        try:
            yield cur
            if commit:
                conn.commit()
        finally:
            cur.close()
    except StorageError:
        raise
    except psycopg2.Error as e:
        try:
            conn.rollback()
        except psycopg2.Error:
            pass
        logger.error(f"Database error: {e}")
        raise StorageError(f"Database error: {e}") from e
    finally:
        conn.close()
