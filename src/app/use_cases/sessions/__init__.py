"""
Session Lifecycle Use Cases

Create, validate, refresh, extend, revoke, logout, list, cleanup and the
authorized detail view.
"""

from .create_session_use_case import CreateSessionUseCase
from .validate_session_use_case import ValidateSessionUseCase
from .refresh_session_use_case import RefreshSessionUseCase
from .extend_session_use_case import ExtendSessionUseCase
from .revoke_sessions_use_case import RevokeSessionsUseCase
from .logout_session_use_case import LogoutSessionUseCase
from .list_sessions_use_case import ListSessionsUseCase
from .cleanup_sessions_use_case import CleanupSessionsUseCase
from .get_session_use_case import GetSessionUseCase
from .dtos import (
    CreateSessionCommand,
    SessionListQuery,
    CreateSessionResponse,
    ValidSessionResponse,
    ValidSessionWithTokenResponse,
    InvalidSessionResponse,
    SessionExpiryResponse,
    RevokeSessionResponse,
    RevokeAllSessionsResponse,
    LogoutSessionResponse,
    SessionSummary,
    SessionListResponse,
    CleanupSessionsResponse,
)
from .views import CallerContext, FullSessionView, RestrictedSessionView

__all__ = [
    # Use Cases
    "CreateSessionUseCase",
    "ValidateSessionUseCase",
    "RefreshSessionUseCase",
    "ExtendSessionUseCase",
    "RevokeSessionsUseCase",
    "LogoutSessionUseCase",
    "ListSessionsUseCase",
    "CleanupSessionsUseCase",
    "GetSessionUseCase",
    # DTOs - Commands
    "CreateSessionCommand",
    "SessionListQuery",
    # DTOs - Responses
    "CreateSessionResponse",
    "ValidSessionResponse",
    "ValidSessionWithTokenResponse",
    "InvalidSessionResponse",
    "SessionExpiryResponse",
    "RevokeSessionResponse",
    "RevokeAllSessionsResponse",
    "LogoutSessionResponse",
    "SessionSummary",
    "SessionListResponse",
    "CleanupSessionsResponse",
    # Views
    "CallerContext",
    "FullSessionView",
    "RestrictedSessionView",
]
