"""
Session Use Case DTOs (Data Transfer Objects)

Command and Response classes for the session lifecycle.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


# ============================================================================
# Commands
# ============================================================================


class CreateSessionCommand(BaseModel):
    """
    Create session command - hand-off from the login flow

    user_name is required by the use case; everything else is optional.
    """

    user_name: Optional[str] = None
    user_id: Optional[int] = None
    roles: Optional[List[str]] = None
    ttl_minutes: Optional[int] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    meta_data: Optional[Dict[str, Any]] = None


class SessionListQuery(BaseModel):
    """Filters and paging for the session list"""

    user_id: Optional[int] = None
    user_name: Optional[str] = None
    status: Optional[str] = None
    active_flag: Optional[bool] = None
    page: Optional[int] = None
    size: Optional[int] = None


# ============================================================================
# Response DTOs
# ============================================================================


class CreateSessionResponse(BaseModel):
    """Response for create session use case"""

    session_id: int
    session_token: str
    created_date: datetime
    expires_at: datetime
    user_id: Optional[int] = None
    user_name: str
    roles: List[str]


class ValidSessionResponse(BaseModel):
    """Successful validation - session view without the token"""

    valid: bool = True
    session_id: int
    user_id: Optional[int] = None
    user_name: str
    roles: List[str]
    status: str
    created_date: datetime
    last_seen_at: Optional[datetime] = None
    expires_at: datetime
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class ValidSessionWithTokenResponse(ValidSessionResponse):
    """Successful validation by id - the caller does not hold the token yet"""

    session_token: str


class InvalidSessionResponse(BaseModel):
    """
    Failed validation.

    reason is EXPIRED or INVALID_OR_REVOKED; nothing else is disclosed.
    """

    valid: bool = False
    reason: str
    expires_at: Optional[datetime] = None


class SessionExpiryResponse(BaseModel):
    """Response for refresh and extend use cases"""

    session_id: int
    session_token: str
    expires_at: datetime


class RevokeSessionResponse(BaseModel):
    """Response for single session revocation"""

    success: bool
    session_id: int
    revoked_at: datetime


class RevokeAllSessionsResponse(BaseModel):
    """Response for revoking every active session of a user"""

    revoked: int
    revoked_at: datetime
    user_id: int
    user_name: str


class LogoutSessionResponse(BaseModel):
    """Response for logout use case"""

    success: bool
    session_id: int
    status: str


class SessionSummary(BaseModel):
    """One row of the session list"""

    session_id: int
    user_id: Optional[int] = None
    user_name: str
    roles: List[str]
    status: str
    created_date: datetime
    last_seen_at: Optional[datetime] = None
    expires_at: datetime
    ip_address: Optional[str] = None
    active_flag: bool


class SessionListResponse(BaseModel):
    """Paginated session list"""

    page: int
    size: int
    total_elements: int
    total_pages: int
    sort: str
    content: List[SessionSummary]


class CleanupSessionsResponse(BaseModel):
    """Response for retention cleanup"""

    deleted: int
    threshold_date: datetime
