"""
Health Check Endpoints

Provides:
1. /health - Liveness plus a profile store round trip
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config.settings import Settings
from web.dependencies import get_app_settings, get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = datetime.utcnow()


@router.get("/health")
def health(
    session: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    database = "healthy"
    try:
        session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        database = "unhealthy"

    body = {
        "status": "healthy" if database == "healthy" else "degraded",
        "version": settings.version,
        "environment": settings.environment,
        "database": database,
        "uptime_seconds": int((datetime.utcnow() - _start_time).total_seconds()),
    }
    return JSONResponse(status_code=200 if database == "healthy" else 503, content=body)
