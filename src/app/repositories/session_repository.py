from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from src.domain.entities import Session, SessionStatus


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, session_id: int, active_only: bool = False) -> Optional[Session]:
        """Get session by ID, optionally only if active_flag is set"""
        pass

    @abstractmethod
    async def get_by_token(self, session_token: str, active_only: bool = False) -> Optional[Session]:
        """Get session by its token, optionally only if active_flag is set"""
        pass

    @abstractmethod
    async def list_active_by_user(
        self, user_id: Optional[int], user_name: str
    ) -> List[Session]:
        """Active sessions for a user, matched on user_id or user_name"""
        pass

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def update(self, session: Session) -> Session:
        """Update existing session"""
        pass

    @abstractmethod
    async def update_all(self, sessions: List[Session]) -> List[Session]:
        """Update a batch of sessions"""
        pass

    @abstractmethod
    async def revoke_all_by_user_id(
        self,
        user_id: int,
        revoked_at: datetime,
        revoked_by: str,
        status: SessionStatus,
    ) -> int:
        """Revoke every active session of a user. Returns count of revoked sessions."""
        pass

    @abstractmethod
    async def delete_expired(self, before: datetime) -> int:
        """Delete inactive or expired sessions whose expires_at is before the threshold. Returns count."""
        pass

    @abstractmethod
    async def find_filtered(
        self,
        user_id: Optional[int] = None,
        user_name: Optional[str] = None,
        status: Optional[SessionStatus] = None,
        active_flag: Optional[bool] = None,
        page: int = 0,
        size: int = 20,
    ) -> Tuple[List[Session], int]:
        """Page of sessions, newest first. Unset filters match everything. Returns (items, total)."""
        pass
