"""
Assessment Store

Append-only persistence for assessments. Rows are inserted once and read
back exactly as stored; nothing is recomputed on read.
"""

import logging
from datetime import date, timedelta
from typing import List, Optional

from psycopg2.extras import Json

from app.shared.db import ConnectionFactory, db_cursor, get_db
from .models import Assessment, TrendPoint

logger = logging.getLogger(__name__)

ASSESSMENT_COLUMNS = """
    assessment_id,
    user_id,
    illness_type,
    responses,
    total_score,
    risk_level,
    recommendations,
    warnings,
    assessment_hash,
    created_at
"""

DEFAULT_HISTORY_LIMIT = 10
DEFAULT_TREND_LIMIT = 30


def _row_to_assessment(row) -> Assessment:
    return Assessment(
        assessment_id=str(row['assessment_id']),
        user_id=str(row['user_id']),
        illness_type=row['illness_type'],
        responses=row['responses'] or [],
        total_score=float(row['total_score']),
        risk_level=row['risk_level'],
        recommendations=row['recommendations'] or [],
        warnings=row['warnings'] or [],
        assessment_hash=row['assessment_hash'],
        created_at=row['created_at'],
    )


class PostgresAssessmentStore:

    def __init__(self, connect: ConnectionFactory = get_db):
        self._connect = connect

    def insert(self, assessment: Assessment) -> str:
        """
        Raises:
            StorageError: If the write fails; nothing is persisted
        """
        data = assessment.model_dump(mode="json")
        with db_cursor(self._connect, commit=True) as cur:
            cur.execute(f"""
                INSERT INTO assessments ({ASSESSMENT_COLUMNS})
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                RETURNING assessment_id
            """, (
                assessment.assessment_id,
                assessment.user_id,
                assessment.illness_type,
                Json(data['responses']),
                assessment.total_score,
                assessment.risk_level,
                Json(data['recommendations']),
                Json(data['warnings']),
                assessment.assessment_hash,
                assessment.created_at,
            ))
            row = cur.fetchone()
        return str(row['assessment_id'])

    def get(self, assessment_id: str) -> Optional[Assessment]:
        with db_cursor(self._connect) as cur:
            cur.execute(f"""
                SELECT {ASSESSMENT_COLUMNS}
                FROM assessments
                WHERE assessment_id = %s
            """, (assessment_id,))
            row = cur.fetchone()
        return _row_to_assessment(row) if row else None

    def list_for_user(
        self,
        user_id: str,
        illness_type: Optional[str] = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[Assessment]:
        """Newest first. end_date includes the whole end day."""
        conditions = ["user_id = %s"]
        params: list = [user_id]

        if illness_type:
            conditions.append("illness_type = %s")
            params.append(illness_type)
        if start_date:
            conditions.append("created_at >= %s")
            params.append(start_date)
        if end_date:
            conditions.append("created_at < %s")
            params.append(end_date + timedelta(days=1))

        params.append(limit)
        with db_cursor(self._connect) as cur:
            cur.execute(f"""
                SELECT {ASSESSMENT_COLUMNS}
                FROM assessments
                WHERE {' AND '.join(conditions)}
                ORDER BY created_at DESC
                LIMIT %s
            """, tuple(params))
            rows = cur.fetchall()
        return [_row_to_assessment(row) for row in rows]

    def trends(
        self,
        user_id: str,
        illness_type: Optional[str] = None,
        limit: int = DEFAULT_TREND_LIMIT,
    ) -> List[TrendPoint]:
        """Oldest first, for trend lines."""
        params: list = [user_id]
        type_filter = ""
        if illness_type:
            type_filter = "AND illness_type = %s"
            params.append(illness_type)
        params.append(limit)

        with db_cursor(self._connect) as cur:
            cur.execute(f"""
                SELECT assessment_id, illness_type, total_score, risk_level, created_at
                FROM assessments
                WHERE user_id = %s {type_filter}
                ORDER BY created_at ASC
                LIMIT %s
            """, tuple(params))
            rows = cur.fetchall()
        return [
            TrendPoint(
                assessment_id=str(row['assessment_id']),
                illness_type=row['illness_type'],
                total_score=float(row['total_score']),
                risk_level=row['risk_level'],
                created_at=row['created_at'],
            )
            for row in rows
        ]
