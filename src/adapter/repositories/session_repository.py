from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import delete, func, or_
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import ISessionRepository
from src.domain.entities import Session, SessionRole, SessionStatus


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, session_id: int, active_only: bool = False) -> Optional[Session]:
        """Get session by ID"""
        stmt = select(Session).where(Session.id == session_id)
        if active_only:
            stmt = stmt.where(Session.active_flag == True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_token(self, session_token: str, active_only: bool = False) -> Optional[Session]:
        """Get session by token"""
        stmt = select(Session).where(Session.session_token == session_token)
        if active_only:
            stmt = stmt.where(Session.active_flag == True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_active_by_user(
        self, user_id: Optional[int], user_name: str
    ) -> List[Session]:
        """Active sessions matching the user's id or name"""
        if user_id is not None:
            owner_clause = or_(Session.user_id == user_id, Session.user_name == user_name)
        else:
            owner_clause = Session.user_name == user_name
        stmt = select(Session).where(owner_clause, Session.active_flag == True)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        return session_obj

    async def update(self, session_obj: Session) -> Session:
        """Update existing session"""
        self.session.add(session_obj)
        await self.session.flush()
        return session_obj

    async def update_all(self, sessions: List[Session]) -> List[Session]:
        """Update a batch of sessions in one flush"""
        self.session.add_all(sessions)
        await self.session.flush()
        return sessions

    async def revoke_all_by_user_id(
        self,
        user_id: int,
        revoked_at: datetime,
        revoked_by: str,
        status: SessionStatus,
    ) -> int:
        """Revoke all active sessions for a user"""
        stmt = (
            update(Session)
            .where(Session.user_id == user_id, Session.active_flag == True)
            .values(
                active_flag=False,
                status=status,
                revoked_at=revoked_at,
                revoked_by=revoked_by,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_expired(self, before: datetime) -> int:
        """Delete inactive/expired sessions (and their role rows) older than the threshold"""
        criteria = (
            Session.expires_at < before,
            or_(Session.active_flag == False, Session.status == SessionStatus.expired),
        )
        expired_ids = select(Session.id).where(*criteria)
        await self.session.execute(
            delete(SessionRole)
            .where(SessionRole.session_id.in_(expired_ids))
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(
            delete(Session).where(*criteria).execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return result.rowcount

    async def find_filtered(
        self,
        user_id: Optional[int] = None,
        user_name: Optional[str] = None,
        status: Optional[SessionStatus] = None,
        active_flag: Optional[bool] = None,
        page: int = 0,
        size: int = 20,
    ) -> Tuple[List[Session], int]:
        """Filtered page of sessions ordered by created_date DESC"""
        conditions = []
        if user_id is not None:
            conditions.append(Session.user_id == user_id)
        if user_name is not None:
            conditions.append(Session.user_name == user_name)
        if status is not None:
            conditions.append(Session.status == status)
        if active_flag is not None:
            conditions.append(Session.active_flag == active_flag)

        count_stmt = select(func.count()).select_from(Session)
        stmt = select(Session)
        if conditions:
            count_stmt = count_stmt.where(*conditions)
            stmt = stmt.where(*conditions)
        total = (await self.session.execute(count_stmt)).scalar_one()

        stmt = (
            stmt.order_by(Session.created_date.desc(), Session.id.desc())
            .offset(page * size)
            .limit(size)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total
