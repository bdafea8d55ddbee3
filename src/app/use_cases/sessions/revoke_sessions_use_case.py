"""
Revoke Sessions Use Case

Handles session revocation for security and session management.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import SessionStatus
from .constants import SYSTEM_ACTOR, redact_token
from .dtos import RevokeAllSessionsResponse, RevokeSessionResponse

logger = logging.getLogger(__name__)


class RevokeSessionsUseCase:
    """
    Use case for revoking sessions.

    Business Rules:
    - A single session is looked up by token first, then by id
    - Only active sessions can be revoked; a second revoke is NOT_FOUND
    - revoked_by defaults to SYSTEM
    - Revoke-all is one conditional update over the user's active sessions
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.uow = uow
        self.clock = clock

    async def revoke_session(
        self,
        session_token: Optional[str] = None,
        session_id: Optional[int] = None,
        revoked_by: Optional[str] = None,
    ) -> Result[RevokeSessionResponse]:
        """
        Revoke a specific session.

        Args:
            session_token: Token of the session (takes precedence)
            session_id: Id of the session, used when no token is given
            revoked_by: Actor recorded on the session

        Returns:
            Result with RevokeSessionResponse, or Error
        """
        logger.info(
            f"revokeSession token={redact_token(session_token)} session_id={session_id} by={revoked_by}"
        )
        has_token = session_token is not None and session_token.strip() != ""
        if not has_token and session_id is None:
            return Return.err(Error("INVALID_PAYLOAD", "token or sessionId required"))

        try:
            async with self.uow:
                if has_token:
                    session = await self.uow.sessions.get_by_token(session_token, active_only=True)
                else:
                    session = await self.uow.sessions.get_by_id(session_id, active_only=True)

                if session is None:
                    return Return.err(Error("NOT_FOUND", "Session Not Found"))

                now = self.clock()
                session.active_flag = False
                session.status = SessionStatus.revoked
                session.revoked_at = now
                session.revoked_by = revoked_by or SYSTEM_ACTOR
                session.last_seen_at = now
                await self.uow.sessions.update(session)

                await self.uow.commit()

                return Return.ok(
                    RevokeSessionResponse(
                        success=True,
                        session_id=session.id,
                        revoked_at=session.revoked_at,
                    )
                )
        except Exception:
            logger.exception(f"revokeSession failed for session_id={session_id}")
            return Return.err(Error("INTERNAL_ERROR", "Failed to Revoke Session"))

    async def revoke_all_sessions(
        self,
        user_id: Optional[int],
        user_name: Optional[str],
        revoked_by: Optional[str] = None,
    ) -> Result[RevokeAllSessionsResponse]:
        """
        Revoke all active sessions for a user.

        Args:
            user_id: User whose sessions will be revoked
            user_name: User name, echoed back
            revoked_by: Actor recorded on the sessions

        Returns:
            Result with count of revoked sessions, or Error
        """
        logger.info(
            f"revokeAllSession user_id={user_id} user_name={user_name} by={revoked_by}"
        )
        if user_id is None or user_name is None:
            return Return.err(
                Error("INVALID_PAYLOAD", "UserId or UserName is Required")
            )

        try:
            async with self.uow:
                now = self.clock()
                count = await self.uow.sessions.revoke_all_by_user_id(
                    user_id, now, revoked_by or SYSTEM_ACTOR, SessionStatus.revoked
                )

                await self.uow.commit()

                return Return.ok(
                    RevokeAllSessionsResponse(
                        revoked=count,
                        revoked_at=now,
                        user_id=user_id,
                        user_name=user_name,
                    )
                )
        except Exception:
            logger.exception(f"revokeAllSession failed for user_id={user_id}")
            return Return.err(Error("INTERNAL_ERROR", "Failed to Revoke All Session"))
