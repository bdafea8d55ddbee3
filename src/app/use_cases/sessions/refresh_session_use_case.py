"""
Refresh Session Use Case

Pushes the expiry of an active session forward without issuing a new token.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import SessionStatus
from .constants import DEFAULT_TTL_MINUTES, redact_token, resolve_ttl
from .dtos import SessionExpiryResponse

logger = logging.getLogger(__name__)


class RefreshSessionUseCase:
    """
    Use case for refreshing a session.

    Business Rules:
    - Token is kept; expires_at = now + ttl (default when absent or not positive)
    - Terminal sessions cannot be refreshed
    - A session already past expiry is expired instead of refreshed
    """

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Callable[[], datetime] = utcnow,
        default_ttl_minutes: int = DEFAULT_TTL_MINUTES,
    ):
        self.uow = uow
        self.clock = clock
        self.default_ttl_minutes = default_ttl_minutes

    async def execute(
        self, session_token: Optional[str], ttl_minutes: Optional[int] = None
    ) -> Result[SessionExpiryResponse]:
        logger.info(
            f"refreshSession token={redact_token(session_token)} ttl_minutes={ttl_minutes}"
        )
        if session_token is None or not session_token.strip():
            return Return.err(Error("INVALID_PAYLOAD", "token required"))

        try:
            async with self.uow:
                session = await self.uow.sessions.get_by_token(session_token, active_only=True)
                if session is None:
                    return Return.err(
                        Error("CANNOT_REFRESH", "Session is revoked or expired")
                    )

                now = self.clock()
                if session.is_expired(now):
                    session.status = SessionStatus.expired
                    session.active_flag = False
                    await self.uow.sessions.update(session)
                    await self.uow.commit()
                    return Return.err(
                        Error("CANNOT_REFRESH", "Session is revoked or expired")
                    )

                ttl = resolve_ttl(ttl_minutes, self.default_ttl_minutes)
                session.expires_at = now + timedelta(minutes=ttl)
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
            return Return.err(Error("INVALID_PAYLOAD", "ttlMinutes out of range"))
        except Exception:
            logger.exception("refreshSession failed")
            return Return.err(Error("INTERNAL_ERROR", "Failed to Refresh Session"))
