"""
Deployment Health Check Endpoint
================================
Returns status of the database, schema tables and scoring strategies.
"""

from fastapi import APIRouter
from datetime import datetime
import os

from app.scoring.strategies import STRATEGY_TABLE
from app.shared.db import get_db

router = APIRouter(prefix="/api/v1/health", tags=["Health"])

API_VERSION = "1.0.0"
REQUIRED_TABLES = ("question_bank", "user_profiles", "assessments")


@router.get("")
def deployment_health():
    """
    Deployment health check.
    Verifies the database, required tables and loaded strategies.
    """
    status = {
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "api_version": API_VERSION,
        "environment": os.environ.get("APP_ENVIRONMENT", "unknown"),
        "components": {}
    }

    status["components"]["scoring"] = {
        "status": "healthy",
        "illness_types": sorted(t.value for t in STRATEGY_TABLE),
    }

    conn = get_db()
    if not conn:
        status["components"]["database"] = {"status": "error", "error": "Connection failed"}
    else:
        try:
            cur = conn.cursor()
            tables = {}
            for table in REQUIRED_TABLES:
                cur.execute("""
                    SELECT EXISTS (
                        SELECT FROM information_schema.tables
                        WHERE table_name = %s
                    ) AS present
                """, (table,))
                tables[table] = bool(cur.fetchone()['present'])
            cur.close()
            status["components"]["database"] = {
                "status": "healthy" if all(tables.values()) else "degraded",
                "tables": tables,
            }
        except Exception as e:
            status["components"]["database"] = {"status": "error", "error": str(e)}
        finally:
            conn.close()

    all_healthy = all(
        c.get("status") == "healthy"
        for c in status["components"].values()
    )
    status["overall_status"] = "healthy" if all_healthy else "degraded"

    return status


@router.get("/quick")
def quick_health():
    """Quick health check for load balancers."""
    return {"status": "ok", "timestamp": datetime.utcnow().isoformat() + "Z"}
