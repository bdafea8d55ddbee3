"""
Authorized session views.

get-session-by-id picks one of two fixed response shapes depending on who
is asking: the session owner and administrators get FullSessionView, every
other caller gets RestrictedSessionView with the token masked.
"""

import json
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import BaseModel, Field

from src.domain.entities import Session

MASKED_TOKEN = "************"


class CallerContext(BaseModel):
    """Identity and role claims of the caller, decoded from the bearer token"""

    user_id: Optional[int] = None
    user_name: Optional[str] = None
    roles: List[str] = Field(default_factory=list)

    def is_admin(self, admin_roles: Iterable[str]) -> bool:
        wanted = {role.upper() for role in admin_roles}
        return any(role.upper() in wanted for role in self.roles)

    def owns(self, session: Session) -> bool:
        """
        user_id decides ownership when both sides carry one; otherwise fall
        back to a case-insensitive user_name match.
        """
        if self.user_id is not None and session.user_id is not None:
            return self.user_id == session.user_id
        if not self.user_name:
            return False
        return self.user_name.lower() == session.user_name.lower()


class RestrictedSessionView(BaseModel):
    session_id: int
    session_token: str = MASKED_TOKEN
    user_id: Optional[int] = None
    user_name: str
    roles: List[str]
    status: str
    created_date: datetime
    expires_at: datetime
    active_flag: bool


class FullSessionView(RestrictedSessionView):
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_by: Optional[str] = None
    last_seen_at: Optional[datetime] = None
    revoked_at: Optional[datetime] = None
    revoked_by: Optional[str] = None
    meta_data: Optional[Dict[str, Any]] = None


def decode_meta_data(raw: Optional[str]) -> Optional[Dict[str, Any]]:
    if raw is None:
        return None
    return json.loads(raw)


def build_session_view(
    session: Session, is_owner: bool, is_admin: bool
) -> Union[FullSessionView, RestrictedSessionView]:
    """Select the response shape for the caller's capabilities"""
    common = {
        "session_id": session.id,
        "user_id": session.user_id,
        "user_name": session.user_name,
        "roles": session.role_names,
        "status": session.status.value,
        "created_date": session.created_date,
        "expires_at": session.expires_at,
        "active_flag": session.active_flag,
    }
    if not (is_owner or is_admin):
        return RestrictedSessionView(**common)

    return FullSessionView(
        **common,
        session_token=session.session_token,
        ip_address=session.ip_address,
        user_agent=session.user_agent,
        created_by=session.created_by,
        last_seen_at=session.last_seen_at,
        revoked_at=session.revoked_at,
        revoked_by=session.revoked_by,
        meta_data=decode_meta_data(session.meta_data),
    )
