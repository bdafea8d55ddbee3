import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from src.depends import get_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/custom-health")
async def custom_health(session: AsyncSession = Depends(get_session)):
    """
    Health check - reports whether the database is reachable.

    Returns 200 with status UP, or 503 with status DOWN.
    """
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error(f"Health check failed: {exc}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "DOWN", "details": {"database": "DB connection failed"}},
        )
    return {"status": "UP", "details": {"database": "DB is reachable"}}
