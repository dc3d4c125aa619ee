"""
Question Bank Store

PostgreSQL-backed store for the question_bank table.
Schema: migrations/001_assessment_engine.sql
"""

import logging
from typing import List, Optional

from psycopg2 import errors as pg_errors

from app.shared.db import ConnectionFactory, db_cursor, get_db
from app.shared.errors import DuplicateQuestionError
from .models import QuestionBankItem

logger = logging.getLogger(__name__)

QUESTION_COLUMNS = """
    illness_type,
    question_id,
    text,
    weight,
    auto_populate,
    auto_populate_from
"""


def _row_to_item(row) -> QuestionBankItem:
    return QuestionBankItem(
        illness_type=row['illness_type'],
        question_id=row['question_id'],
        text=row['text'],
        weight=float(row['weight']),
        auto_populate=bool(row['auto_populate']),
        auto_populate_from=row['auto_populate_from'],
    )


class PostgresQuestionBankStore:
    """Reads and administers question bank rows."""

    def __init__(self, connect: ConnectionFactory = get_db):
        self._connect = connect

    def find_by_type(self, illness_type: str) -> List[QuestionBankItem]:
        with db_cursor(self._connect) as cur:
            cur.execute(f"""
                SELECT {QUESTION_COLUMNS}
                FROM question_bank
                WHERE illness_type = %s
                ORDER BY question_id
            """, (illness_type,))
            rows = cur.fetchall()
        return [_row_to_item(row) for row in rows]

    def get(self, illness_type: str, question_id: str) -> Optional[QuestionBankItem]:
        with db_cursor(self._connect) as cur:
            cur.execute(f"""
                SELECT {QUESTION_COLUMNS}
                FROM question_bank
                WHERE illness_type = %s AND question_id = %s
            """, (illness_type, question_id))
            row = cur.fetchone()
        return _row_to_item(row) if row else None

    def create(self, item: QuestionBankItem) -> QuestionBankItem:
        """
        Raises:
            DuplicateQuestionError: If (illness_type, question_id) exists
        """
        with db_cursor(self._connect, commit=True) as cur:
            try:
                cur.execute(f"""
                    INSERT INTO question_bank ({QUESTION_COLUMNS})
                    VALUES (%s, %s, %s, %s, %s, %s)
                    RETURNING {QUESTION_COLUMNS}
                """, (
                    item.illness_type,
                    item.question_id,
                    item.text,
                    item.weight,
                    item.auto_populate,
                    item.auto_populate_from,
                ))
            except pg_errors.UniqueViolation as e:
                raise DuplicateQuestionError(item.illness_type, item.question_id) from e
            row = cur.fetchone()
        logger.info(f"Created question {item.illness_type}/{item.question_id}")
        return _row_to_item(row)

    def update(self, item: QuestionBankItem) -> Optional[QuestionBankItem]:
        with db_cursor(self._connect, commit=True) as cur:
            cur.execute(f"""
                UPDATE question_bank
                SET text = %s,
                    weight = %s,
                    auto_populate = %s,
                    auto_populate_from = %s,
                    updated_at = NOW()
                WHERE illness_type = %s AND question_id = %s
                RETURNING {QUESTION_COLUMNS}
            """, (
                item.text,
                item.weight,
                item.auto_populate,
                item.auto_populate_from,
                item.illness_type,
                item.question_id,
            ))
            row = cur.fetchone()
        return _row_to_item(row) if row else None

    def delete(self, illness_type: str, question_id: str) -> bool:
        with db_cursor(self._connect, commit=True) as cur:
            cur.execute("""
                DELETE FROM question_bank
                WHERE illness_type = %s AND question_id = %s
            """, (illness_type, question_id))
            deleted = cur.rowcount > 0
        if deleted:
            logger.info(f"Deleted question {illness_type}/{question_id}")
        return deleted
