"""
Profile Store

Access to the user_profiles table: lookups for auto-population and the
upsert behind the profile endpoint.
"""

import logging
from typing import Optional

from app.shared.db import ConnectionFactory, db_cursor, get_db
from .models import ProfileRecord

logger = logging.getLogger(__name__)


def _row_to_record(row) -> ProfileRecord:
    return ProfileRecord(
        user_id=str(row['user_id']),
        has_diabetes=row['has_diabetes'],
        date_of_birth=row['date_of_birth'],
    )


class PostgresProfileStore:

    def __init__(self, connect: ConnectionFactory = get_db):
        self._connect = connect

    def find_user(self, user_id: str) -> Optional[ProfileRecord]:
        with db_cursor(self._connect) as cur:
            cur.execute("""
                SELECT user_id, has_diabetes, date_of_birth
                FROM user_profiles
                WHERE user_id = %s
            """, (user_id,))
            row = cur.fetchone()
        return _row_to_record(row) if row else None

    def upsert(self, record: ProfileRecord) -> ProfileRecord:
        """Insert or replace the profile row of record.user_id."""
        with db_cursor(self._connect, commit=True) as cur:
            cur.execute("""
                INSERT INTO user_profiles (user_id, has_diabetes, date_of_birth)
                VALUES (%s, %s, %s)
                ON CONFLICT (user_id) DO UPDATE
                SET has_diabetes = EXCLUDED.has_diabetes,
                    date_of_birth = EXCLUDED.date_of_birth,
                    updated_at = NOW()
                RETURNING user_id, has_diabetes, date_of_birth
            """, (
                record.user_id,
                record.has_diabetes is True,
                record.date_of_birth,
            ))
            row = cur.fetchone()
        logger.info(f"Saved profile for user {record.user_id}")
        return _row_to_record(row)
