from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from subsentinel import __version__
from subsentinel.db.session import get_db

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(request: Request):
    """Basic health check."""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "requestId": getattr(request.state, "request_id", None),
    }


@router.get("/health/ready")
async def health_ready(db: AsyncSession = Depends(get_db)):
    """Readiness check with database connection."""
    try:
        await db.execute(text("SELECT 1"))
        return {"status": "ready", "database": "connected"}
    except Exception as e:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not ready", "database": "disconnected", "error": type(e).__name__},
        )


@router.get("/")
async def root():
    return {
        "status": "SubSentinel Backend",
        "message": "Welcome to SubSentinel Backend",
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
