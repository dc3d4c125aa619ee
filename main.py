"""
Health Risk Self-Assessment API Entry Point

  uvicorn main:app --host 0.0.0.0 --port $PORT
"""

import os
import logging

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(levelname)s - %(name)s - %(message)s'
)

from api_server import app  # noqa: E402

logger = logging.getLogger(__name__)
logger.info(f"Registered {len(app.routes)} routes")


# For local development
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")), reload=True)
