"""
Extend Session Use Case
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import SessionStatus
from .constants import redact_token
from .dtos import SessionExpiryResponse

logger = logging.getLogger(__name__)


class ExtendSessionUseCase:
    """
    Use case for extending an active session by a number of minutes.

    The new expiry is counted from now, not from the current expires_at.
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, session_token: Optional[str], additional_minutes: Optional[int]
    ) -> Result[SessionExpiryResponse]:
        logger.info(
            f"extendSession token={redact_token(session_token)} additional_minutes={additional_minutes}"
        )
        if session_token is None or not session_token.strip():
            return Return.err(Error("INVALID_PAYLOAD", "token required"))
        if additional_minutes is None or additional_minutes <= 0:
            return Return.err(
                Error("INVALID_PAYLOAD", "additionalMinutes must be > 0")
            )

        try:
            async with self.uow:
                session = await self.uow.sessions.get_by_token(session_token, active_only=True)
                if session is None:
                    return Return.err(
                        Error(
                            "NOT_ACTIVE",
                            "Session is revoked or expired and cannot be extended",
                        )
                    )

                now = self.clock()
                if session.is_expired(now):
                    session.status = SessionStatus.expired
                    session.active_flag = False
                    await self.uow.sessions.update(session)
                    await self.uow.commit()
                    return Return.err(
                        Error(
                            "NOT_ACTIVE",
                            "Session is revoked or expired and cannot be extended",
                        )
                    )

                session.expires_at = now + timedelta(minutes=additional_minutes)
                session.last_seen_at = now
                await self.uow.sessions.update(session)

                await self.uow.commit()

                return Return.ok(
                    SessionExpiryResponse(
                        session_id=session.id,
                        session_token=session.session_token,
                        expires_at=session.expires_at,
                    )
                )
        except OverflowError:
            return Return.err(Error("INVALID_PAYLOAD", "additionalMinutes out of range"))
        except Exception:
            logger.exception("extendSession failed")
            return Return.err(Error("INTERNAL_ERROR", "Failed to Extend Session"))
