"""
Health Risk Self-Assessment API Server

Users answer weighted yes/no questionnaires per illness type (glaucoma,
cancer, or any configured type); the server scores them, classifies the
risk and keeps an immutable history per user.
"""

import os
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.health.router import router as health_router
from app.history.router import router as history_router
from app.profile.router import router as profiles_router
from app.questions.admin import router as questions_router
from app.scoring.router import router as assessments_router

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

# ============================================
# App Configuration
# ============================================
app = FastAPI(
    title="Health Risk Self-Assessment API",
    description="Questionnaire scoring, risk classification and assessment history",
    version=API_VERSION,
)

# ============================================
# CORS Configuration
# ============================================
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# ============================================
# Routers
# ============================================
app.include_router(health_router)
app.include_router(questions_router)
app.include_router(profiles_router)
app.include_router(assessments_router)
app.include_router(history_router)


@app.get("/")
def root():
    return {
        "service": "health-risk-assessment",
        "version": API_VERSION,
        "docs": "/docs",
    }
