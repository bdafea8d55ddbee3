"""
Get Session Use Case

Returns a session by id, redacted according to who is asking.
"""

import logging
from typing import Iterable, Optional, Union

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .constants import DEFAULT_ADMIN_ROLES
from .views import (
    CallerContext,
    FullSessionView,
    RestrictedSessionView,
    build_session_view,
)

logger = logging.getLogger(__name__)


class GetSessionUseCase:
    """
    Use case for the authorized session detail view.

    Business Rules:
    - Owner or admin: full view including the raw token
    - Anyone else: restricted view, token masked, no client metadata
    - Inactive sessions are still visible
    """

    def __init__(self, uow: UnitOfWork, admin_roles: Iterable[str] = DEFAULT_ADMIN_ROLES):
        self.uow = uow
        self.admin_roles = tuple(admin_roles)

    async def execute(
        self, session_id: Optional[int], caller: CallerContext
    ) -> Result[Union[FullSessionView, RestrictedSessionView]]:
        logger.info(f"getSessionById session_id={session_id} caller={caller.user_name}")
        if session_id is None:
            return Return.err(Error("INVALID_PAYLOAD", "sessionId required"))

        try:
            async with self.uow:
                session = await self.uow.sessions.get_by_id(session_id)
                if session is None:
                    return Return.err(Error("NOT_FOUND", "Session not found"))

                return Return.ok(
                    build_session_view(
                        session,
                        is_owner=caller.owns(session),
                        is_admin=caller.is_admin(self.admin_roles),
                    )
                )
        except Exception:
            logger.exception(f"getSessionById failed for session_id={session_id}")
            return Return.err(Error("INTERNAL_ERROR", "Failed to Fetch Session"))
