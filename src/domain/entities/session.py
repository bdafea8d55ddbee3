"""
Session Entity

Server-side record of one authenticated client context.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import Text
from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from src.domain.base import utcnow
from .enums import SessionStatus


class SessionRole(SQLModel, table=True):
    """Role name snapshotted onto a session at creation time"""

    __tablename__ = "session_roles"

    id: Optional[int] = Field(default=None, primary_key=True)
    session_id: Optional[int] = Field(default=None, foreign_key="sessions.id", index=True)
    role_name: str = Field(max_length=100)

    session: Optional["Session"] = Relationship(back_populates="roles")


class Session(SQLModel, table=True):
    """
    Session entity - opaque token issued to an authenticated user.

    Business Rules:
    - At most one session with active_flag=True per user (enforced on create)
    - session_token is unique and never reused
    - active_flag and status change together; active_flag is authoritative
      for "is this session usable"
    - revoked_at/revoked_by are only set when status becomes REVOKED
    - Roles are a snapshot, never re-read from a role table
    """

    __tablename__ = "sessions"

    id: Optional[int] = Field(default=None, primary_key=True)
    session_token: str = Field(unique=True, index=True, max_length=64)

    user_id: Optional[int] = Field(default=None)
    user_name: str = Field(max_length=255)

    status: SessionStatus = Field(default=SessionStatus.active)
    active_flag: bool = Field(default=True)

    # Client metadata
    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)
    meta_data: Optional[str] = Field(default=None, sa_column=Column(Text))

    created_by: Optional[str] = Field(default=None, max_length=255)
    revoked_by: Optional[str] = Field(default=None, max_length=255)

    # Timestamps
    created_date: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, nullable=False)
    )
    last_seen_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Relationships
    roles: List[SessionRole] = Relationship(
        back_populates="session",
        sa_relationship_kwargs={"lazy": "selectin", "cascade": "all, delete-orphan"},
    )

    __table_args__ = (
        Index("idx_session_user_active", "user_id", "active_flag"),
        Index("idx_session_user_name_active", "user_name", "active_flag"),
        Index("idx_session_created_date", "created_date"),
        Index("idx_session_expires_at", "expires_at"),
    )

    @property
    def role_names(self) -> List[str]:
        return [role.role_name for role in self.roles]

    def is_expired(self, now: datetime) -> bool:
        """Strictly past expiry; expires_at == now is still valid."""
        return self.expires_at < now
