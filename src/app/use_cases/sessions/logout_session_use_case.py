"""
Logout Session Use Case

Ends a session at the holder's request. Unlike revocation, no revoked_at or
revoked_by is recorded.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import SessionStatus
from .constants import redact_token
from .dtos import LogoutSessionResponse

logger = logging.getLogger(__name__)


class LogoutSessionUseCase:
    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(self, session_token: Optional[str]) -> Result[LogoutSessionResponse]:
        logger.info(f"logoutSession token={redact_token(session_token)}")
        if session_token is None or not session_token.strip():
            return Return.err(Error("INVALID_PAYLOAD", "token required"))

        try:
            async with self.uow:
                session = await self.uow.sessions.get_by_token(session_token, active_only=True)
                if session is None:
                    return Return.err(Error("NOT_FOUND", "Session Not Found"))

                session.active_flag = False
                session.status = SessionStatus.logged_out
                session.last_seen_at = self.clock()
                await self.uow.sessions.update(session)

                await self.uow.commit()

                return Return.ok(
                    LogoutSessionResponse(
                        success=True,
                        session_id=session.id,
                        status=session.status.value,
                    )
                )
        except Exception:
            logger.exception("logoutSession failed")
            return Return.err(Error("INTERNAL_ERROR", "Failed to Logout Session"))
