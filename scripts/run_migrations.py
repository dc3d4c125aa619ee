#!/usr/bin/env python3
"""
Schema Migration Runner
=======================
Applies pending migrations/NNN_*.sql files in order and reports the seeded
question bank per illness type.

Usage:
    python scripts/run_migrations.py
    python scripts/run_migrations.py --dry-run
"""

import os
import re
import sys
import hashlib
import logging
from pathlib import Path
from typing import Dict, List, Set

import psycopg2
from psycopg2.extras import RealDictCursor

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).parent.parent / "migrations"
MIGRATION_PATTERN = re.compile(r'^\d+_.+\.sql$')


def get_db_connection():
    database_url = os.environ.get('DATABASE_URL')
    if not database_url:
        raise RuntimeError("DATABASE_URL is not set")
    return psycopg2.connect(database_url, cursor_factory=RealDictCursor)


def ensure_migrations_table(conn):
    with conn.cursor() as cur:
        cur.execute("""
            CREATE TABLE IF NOT EXISTS schema_migrations (
                filename VARCHAR(255) PRIMARY KEY,
                checksum VARCHAR(64) NOT NULL,
                applied_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
            )
        """)
    conn.commit()


def get_applied_migrations(conn) -> Set[str]:
    with conn.cursor() as cur:
        cur.execute("SELECT filename FROM schema_migrations")
        return {row['filename'] for row in cur.fetchall()}


def get_pending_migrations(migrations_dir: Path, applied: Set[str]) -> List[Path]:
    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return []
    return sorted(
        (f for f in migrations_dir.glob("*.sql")
         if MIGRATION_PATTERN.match(f.name) and f.name not in applied),
        key=lambda f: f.name,
    )


def apply_migration(conn, migration_file: Path) -> bool:
    """Apply one file in its own transaction."""
    content = migration_file.read_text()
    checksum = hashlib.sha256(content.encode()).hexdigest()

    try:
        with conn.cursor() as cur:
            cur.execute(content)
            cur.execute(
                "INSERT INTO schema_migrations (filename, checksum) VALUES (%s, %s)",
                (migration_file.name, checksum),
            )
        conn.commit()
        logger.info(f"Applied {migration_file.name}")
        return True
    except psycopg2.Error as e:
        conn.rollback()
        logger.error(f"Migration {migration_file.name} failed: {e}")
        return False


def question_counts(conn) -> Dict[str, int]:
    with conn.cursor() as cur:
        cur.execute("""
            SELECT illness_type, COUNT(*) AS questions
            FROM question_bank
            GROUP BY illness_type
            ORDER BY illness_type
        """)
        return {row['illness_type']: row['questions'] for row in cur.fetchall()}


def run_pending_migrations(migrations_dir: Path = MIGRATIONS_DIR, dry_run: bool = False) -> dict:
    result = {'success': True, 'applied': [], 'pending': [], 'failed': None}

    conn = get_db_connection()
    try:
        ensure_migrations_table(conn)
        pending = get_pending_migrations(migrations_dir, get_applied_migrations(conn))
        result['pending'] = [f.name for f in pending]

        if dry_run or not pending:
            logger.info(f"Pending migrations: {result['pending'] or 'none'}")
            return result

        for migration_file in pending:
            if not apply_migration(conn, migration_file):
                # Later files may depend on this one
                result['success'] = False
                result['failed'] = migration_file.name
                break
            result['applied'].append(migration_file.name)

        if result['success']:
            for illness_type, count in question_counts(conn).items():
                logger.info(f"Question bank: {illness_type} has {count} questions")
    finally:
        conn.close()

    return result


def main():
    import argparse

    parser = argparse.ArgumentParser(description='Apply database migrations')
    parser.add_argument('--dir', '-d', type=Path, default=MIGRATIONS_DIR, help='Migrations directory')
    parser.add_argument('--dry-run', action='store_true', help='List pending migrations only')
    args = parser.parse_args()

    result = run_pending_migrations(args.dir, dry_run=args.dry_run)
    sys.exit(0 if result['success'] else 1)


if __name__ == '__main__':
    main()
