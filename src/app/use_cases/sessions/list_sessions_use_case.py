"""
List Sessions Use Case

Administrative listing with optional filters and pagination.
"""

import logging
import math

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SessionStatus
from .constants import DEFAULT_PAGE_SIZE
from .dtos import SessionListQuery, SessionListResponse, SessionSummary

logger = logging.getLogger(__name__)

SORT_DESCRIPTION = "created_date,desc"


class ListSessionsUseCase:
    """
    Use case for listing sessions.

    Business Rules:
    - Filters left unset match every value
    - status is parsed case-insensitively; unknown literals are rejected
      with the list of valid values
    - Newest sessions first
    - Negative page falls back to 0, non-positive size to the default size
    """

    def __init__(self, uow: UnitOfWork, default_page_size: int = DEFAULT_PAGE_SIZE):
        self.uow = uow
        self.default_page_size = default_page_size

    async def execute(self, query: SessionListQuery) -> Result[SessionListResponse]:
        logger.info(
            f"sessionList user_id={query.user_id} user_name={query.user_name} "
            f"status={query.status} active_flag={query.active_flag} page={query.page} size={query.size}"
        )
        page = query.page if query.page is not None and query.page >= 0 else 0
        size = query.size if query.size is not None and query.size > 0 else self.default_page_size

        status = None
        if query.status is not None and query.status.strip():
            parsed = SessionStatus.parse(query.status)
            if parsed.is_err():
                return Return.err(parsed.error)
            status = parsed.value

        try:
            async with self.uow:
                sessions, total = await self.uow.sessions.find_filtered(
                    user_id=query.user_id,
                    user_name=query.user_name,
                    status=status,
                    active_flag=query.active_flag,
                    page=page,
                    size=size,
                )

                content = [
                    SessionSummary(
                        session_id=s.id,
                        user_id=s.user_id,
                        user_name=s.user_name,
                        roles=s.role_names,
                        status=s.status.value,
                        created_date=s.created_date,
                        last_seen_at=s.last_seen_at,
                        expires_at=s.expires_at,
                        ip_address=s.ip_address,
                        active_flag=s.active_flag,
                    )
                    for s in sessions
                ]

                return Return.ok(
                    SessionListResponse(
                        page=page,
                        size=size,
                        total_elements=total,
                        total_pages=math.ceil(total / size),
                        sort=SORT_DESCRIPTION,
                        content=content,
                    )
                )
        except Exception:
            logger.exception("sessionList failed")
            return Return.err(Error("INTERNAL_ERROR", "Failed to Fetch List Session"))
