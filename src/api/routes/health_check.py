import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlmodel.ext.asyncio.session import AsyncSession

from src.depends import get_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

SERVICE_NAME = "auth-service"


@router.get("/health")
async def health(session: AsyncSession = Depends(get_session)):
    """
    Health check for monitoring and load balancers.

    Returns 503 when the database cannot be reached.
    """
    timestamp = datetime.now(UTC).isoformat()
    try:
        await session.execute(text("SELECT 1"))
    except Exception as exc:
        logger.error(f"Health check failed: {exc}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unhealthy",
                "timestamp": timestamp,
                "service": SERVICE_NAME,
                "database": "disconnected",
            },
        )

    return {
        "status": "healthy",
        "timestamp": timestamp,
        "service": SERVICE_NAME,
        "database": "connected",
    }
