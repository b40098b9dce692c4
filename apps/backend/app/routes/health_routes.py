"""Lightweight health endpoint."""
import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.config import HEALTH_DB_FAILED_MESSAGE, HEALTH_OK_MESSAGE
from app.db import database

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    """Report liveness plus whether the database answers a trivial query."""
    try:
        database.ping()
    except Exception as e:
        logger.warning("Health check: database unreachable: %s", e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": "error", "message": HEALTH_DB_FAILED_MESSAGE, "error": str(e)},
        )
    return {"status": "ok", "message": HEALTH_OK_MESSAGE, "database": "connected"}
