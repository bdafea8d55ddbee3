"""
Create Session Use Case

Issues a new session token and enforces one active session per user.
"""

import json
import logging
from datetime import datetime, timedelta
from typing import Callable

from libs.result import Error, Result, Return
from src.app.services.token_generator import TokenGenerator
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Session, SessionRole, SessionStatus
from .constants import DEFAULT_TTL_MINUTES, SYSTEM_ACTOR, resolve_ttl
from .dtos import CreateSessionCommand, CreateSessionResponse

logger = logging.getLogger(__name__)


class CreateSessionUseCase:
    """
    Use case for issuing a session after the caller has authenticated.

    Business Rules:
    - user_name is required
    - Every active session matching the user_id or user_name is revoked
      by SYSTEM first
    - Revoking the old sessions and inserting the new one is a single
      transaction: a failed insert leaves the previous session untouched
    - TTL defaults to 1440 minutes when absent or not positive
    - Roles are snapshotted; later role changes do not affect the session
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_generator: TokenGenerator,
        clock: Callable[[], datetime] = utcnow,
        default_ttl_minutes: int = DEFAULT_TTL_MINUTES,
    ):
        self.uow = uow
        self.token_generator = token_generator
        self.clock = clock
        self.default_ttl_minutes = default_ttl_minutes

    async def execute(self, command: CreateSessionCommand) -> Result[CreateSessionResponse]:
        """
        Execute create session use case.

        Args:
            command: Identity, roles and client metadata handed off by login

        Returns:
            Result with CreateSessionResponse, or Error
        """
        logger.info(
            f"createSession for user_name={command.user_name} user_id={command.user_id}"
        )
        if command.user_name is None or not command.user_name.strip():
            return Return.err(Error("INVALID_PAYLOAD", "Invalid UserName or UserId"))

        try:
            async with self.uow:
                now = self.clock()

                existing = await self.uow.sessions.list_active_by_user(
                    command.user_id, command.user_name
                )
                if existing:
                    for previous in existing:
                        previous.active_flag = False
                        previous.status = SessionStatus.revoked
                        previous.revoked_by = SYSTEM_ACTOR
                        previous.revoked_at = now
                    await self.uow.sessions.update_all(existing)
                    logger.info(
                        f"Revoked {len(existing)} previous session(s) for user_name={command.user_name}"
                    )

                ttl = resolve_ttl(command.ttl_minutes, self.default_ttl_minutes)
                # dict.fromkeys keeps first-seen order while dropping duplicates
                role_names = list(dict.fromkeys(command.roles or []))

                session = Session(
                    session_token=self.token_generator.generate(),
                    user_id=command.user_id,
                    user_name=command.user_name,
                    status=SessionStatus.active,
                    active_flag=True,
                    ip_address=command.ip_address,
                    user_agent=command.user_agent,
                    meta_data=(
                        json.dumps(command.meta_data)
                        if command.meta_data is not None
                        else None
                    ),
                    created_by=command.user_name,
                    created_date=now,
                    last_seen_at=now,
                    expires_at=now + timedelta(minutes=ttl),
                    roles=[SessionRole(role_name=name) for name in role_names],
                )
                await self.uow.sessions.create(session)

                await self.uow.commit()

                return Return.ok(
                    CreateSessionResponse(
                        session_id=session.id,
                        session_token=session.session_token,
                        created_date=session.created_date,
                        expires_at=session.expires_at,
                        user_id=session.user_id,
                        user_name=session.user_name,
                        roles=session.role_names,
                    )
                )
        except OverflowError:
            return Return.err(Error("INVALID_PAYLOAD", "ttlMinutes out of range"))
        except Exception:
            logger.exception(f"createSession failed for user_name={command.user_name}")
            return Return.err(Error("INTERNAL_ERROR", "Failed to Create Session"))
