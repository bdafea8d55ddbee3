"""
Cleanup Sessions Use Case

Retention sweep: physically deletes old inactive or expired sessions.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .constants import DEFAULT_RETENTION_DAYS
from .dtos import CleanupSessionsResponse

logger = logging.getLogger(__name__)


class CleanupSessionsUseCase:
    """
    Use case for the retention sweep.

    Business Rules:
    - Deletes sessions that are inactive (or EXPIRED) and whose expires_at
      is older than now - older_than_days
    - older_than_days defaults to 30 when absent or negative
    - Idempotent: running twice deletes nothing the second time
    """

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Callable[[], datetime] = utcnow,
        default_retention_days: int = DEFAULT_RETENTION_DAYS,
    ):
        self.uow = uow
        self.clock = clock
        self.default_retention_days = default_retention_days

    async def execute(self, older_than_days: Optional[int] = None) -> Result[CleanupSessionsResponse]:
        logger.info(f"cleanUpSession older_than_days={older_than_days}")
        if older_than_days is None or older_than_days < 0:
            older_than_days = self.default_retention_days

        try:
            async with self.uow:
                threshold = self.clock() - timedelta(days=older_than_days)
                deleted = await self.uow.sessions.delete_expired(threshold)

                await self.uow.commit()

                logger.info(f"Deleted {deleted} session(s) expired before {threshold}")
                return Return.ok(
                    CleanupSessionsResponse(deleted=deleted, threshold_date=threshold)
                )
        except OverflowError:
            return Return.err(Error("INVALID_PAYLOAD", "olderThanDays out of range"))
        except Exception:
            logger.exception("cleanUpSession failed")
            return Return.err(Error("INTERNAL_ERROR", "Failed to CleanUp Session"))
