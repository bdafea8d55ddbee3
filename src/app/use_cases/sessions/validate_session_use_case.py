"""
Validate Session Use Case

Checks a session on every request, by token or by id.
"""

import logging
from datetime import datetime
from typing import Callable, Optional, Union

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Session, SessionStatus
from .constants import REASON_EXPIRED, REASON_INVALID_OR_REVOKED, redact_token
from .dtos import (
    InvalidSessionResponse,
    ValidSessionResponse,
    ValidSessionWithTokenResponse,
)

logger = logging.getLogger(__name__)

ValidationOutcome = Union[ValidSessionResponse, InvalidSessionResponse]


class ValidateSessionUseCase:
    """
    Use case for validating a session.

    Business Rules:
    - Only sessions with active_flag=True can be valid
    - A session past expires_at is moved to EXPIRED on first sight and
      reported with reason EXPIRED; later checks see an inactive session
    - expires_at equal to now is still valid
    - A valid check touches last_seen_at
    - Missing, revoked and logged-out sessions share the reason
      INVALID_OR_REVOKED
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.uow = uow
        self.clock = clock

    async def validate_by_token(self, session_token: Optional[str]) -> Result[ValidationOutcome]:
        """
        Validate a session by its token.

        Args:
            session_token: Token presented by the client

        Returns:
            Result with ValidSessionResponse or InvalidSessionResponse,
            UNAUTHORIZED Error when no token was presented
        """
        logger.info(f"validateSessionByToken token={redact_token(session_token)}")
        if session_token is None or not session_token.strip():
            return Return.err(Error("UNAUTHORIZED", "Missing token"))

        try:
            async with self.uow:
                session = await self.uow.sessions.get_by_token(session_token, active_only=True)
                return await self._check(session, include_token=False)
        except Exception:
            logger.exception("validateSessionByToken failed")
            return Return.err(Error("INTERNAL_ERROR", "Failed to Validate Session"))

    async def validate_by_id(self, session_id: Optional[int]) -> Result[ValidationOutcome]:
        """
        Validate a session by its id.

        Args:
            session_id: Session primary key

        Returns:
            Result with ValidSessionWithTokenResponse or InvalidSessionResponse,
            INVALID_PAYLOAD Error when no id was given
        """
        logger.info(f"validateSessionById session_id={session_id}")
        if session_id is None:
            return Return.err(Error("INVALID_PAYLOAD", "sessionId required"))

        try:
            async with self.uow:
                session = await self.uow.sessions.get_by_id(session_id, active_only=True)
                return await self._check(session, include_token=True)
        except Exception:
            logger.exception(f"validateSessionById failed for session_id={session_id}")
            return Return.err(Error("INTERNAL_ERROR", "Failed to Validate Session"))

    async def _check(self, session: Optional[Session], include_token: bool) -> Result[ValidationOutcome]:
        if session is None:
            return Return.ok(InvalidSessionResponse(reason=REASON_INVALID_OR_REVOKED))

        now = self.clock()
        if session.is_expired(now):
            session.status = SessionStatus.expired
            session.active_flag = False
            await self.uow.sessions.update(session)
            await self.uow.commit()
            logger.info(f"Session {session.id} expired at {session.expires_at}")
            return Return.ok(
                InvalidSessionResponse(reason=REASON_EXPIRED, expires_at=session.expires_at)
            )

        session.last_seen_at = now
        await self.uow.sessions.update(session)
        await self.uow.commit()

        view = dict(
            session_id=session.id,
            user_id=session.user_id,
            user_name=session.user_name,
            roles=session.role_names,
            status=session.status.value,
            created_date=session.created_date,
            last_seen_at=session.last_seen_at,
            expires_at=session.expires_at,
            ip_address=session.ip_address,
            user_agent=session.user_agent,
        )
        if include_token:
            return Return.ok(
                ValidSessionWithTokenResponse(session_token=session.session_token, **view)
            )
        return Return.ok(ValidSessionResponse(**view))
