from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from config import ApplicationConfig
from libs.result import Error
from src.api.error import raise_for_error
from src.app.services.token_generator import TokenGenerator
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.sessions import (
    CallerContext,
    CleanupSessionsResponse,
    CleanupSessionsUseCase,
    CreateSessionCommand,
    CreateSessionResponse,
    CreateSessionUseCase,
    ExtendSessionUseCase,
    GetSessionUseCase,
    InvalidSessionResponse,
    ListSessionsUseCase,
    LogoutSessionResponse,
    LogoutSessionUseCase,
    RefreshSessionUseCase,
    RevokeAllSessionsResponse,
    RevokeSessionResponse,
    RevokeSessionsUseCase,
    SessionExpiryResponse,
    SessionListQuery,
    SessionListResponse,
    ValidateSessionUseCase,
)
from src.depends import get_clock, get_current_user, get_token_generator, get_unit_of_work

router = APIRouter(prefix="/session", tags=["Sessions"])


def _invalid_session(outcome: InvalidSessionResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content=outcome.model_dump(mode="json", exclude_none=True),
    )


class CreateSessionRequest(BaseModel):
    """
    Create session HTTP request payload

    Sent by the login flow once the user is authenticated. user_name is
    checked by the use case so a missing value is a 400, not a 422.
    """

    user_name: Optional[str] = Field(None, description="Authenticated user name")
    user_id: Optional[int] = Field(None, description="Authenticated user id")
    roles: Optional[List[str]] = Field(None, description="Role names to snapshot")
    ttl_minutes: Optional[int] = Field(None, description="Lifetime in minutes (default 1440)")
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    meta_data: Optional[Dict[str, Any]] = Field(None, description="Opaque caller data")


@router.post(
    "/create-session",
    status_code=status.HTTP_201_CREATED,
    response_model=CreateSessionResponse,
)
async def create_session(
    request: CreateSessionRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_generator: TokenGenerator = Depends(get_token_generator),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Create Session

    Revokes every active session of the user, then issues a new one.

    Raises:
        - 400 Bad Request: user_name missing
        - 500 Internal Server Error: Server error
    """
    command = CreateSessionCommand(**request.model_dump())

    use_case = CreateSessionUseCase(
        uow,
        token_generator,
        clock=clock,
        default_ttl_minutes=ApplicationConfig.SESSION_DEFAULT_TTL_MINUTES,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class SessionTokenRequest(BaseModel):
    session_token: Optional[str] = Field(None, description="Opaque session token")


@router.post("/validate-session-token", status_code=status.HTTP_200_OK)
async def validate_session_token(
    request: SessionTokenRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Validate Session by Token

    Returns the session view when valid, otherwise 401 with
    {"valid": false, "reason": "EXPIRED" | "INVALID_OR_REVOKED"}.
    """
    use_case = ValidateSessionUseCase(uow, clock=clock)
    result = await use_case.validate_by_token(request.session_token)

    if result.is_err():
        raise_for_error(result.error)

    outcome = result.value
    if not outcome.valid:
        return _invalid_session(outcome)
    return outcome


class SessionIdRequest(BaseModel):
    session_id: Optional[int] = Field(None, description="Session id")


@router.post("/validate-session-id", status_code=status.HTTP_200_OK)
async def validate_session_id(
    request: SessionIdRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Validate Session by Id

    Raises:
        - 400 Bad Request: session_id missing
        - 401 Unauthorized: session expired, revoked or unknown
    """
    use_case = ValidateSessionUseCase(uow, clock=clock)
    result = await use_case.validate_by_id(request.session_id)

    if result.is_err():
        raise_for_error(result.error)

    outcome = result.value
    if not outcome.valid:
        return _invalid_session(outcome)
    return outcome


class RefreshSessionRequest(BaseModel):
    session_token: Optional[str] = None
    ttl_minutes: Optional[int] = Field(None, description="New lifetime in minutes (default 1440)")


@router.post(
    "/refresh-session",
    status_code=status.HTTP_200_OK,
    response_model=SessionExpiryResponse,
)
async def refresh_session(
    request: RefreshSessionRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Refresh Session

    Raises:
        - 400 Bad Request: token missing, or session cannot be refreshed
    """
    use_case = RefreshSessionUseCase(
        uow,
        clock=clock,
        default_ttl_minutes=ApplicationConfig.SESSION_DEFAULT_TTL_MINUTES,
    )
    result = await use_case.execute(request.session_token, request.ttl_minutes)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ExtendSessionRequest(BaseModel):
    session_token: Optional[str] = None
    additional_minutes: Optional[int] = Field(None, description="Minutes from now, must be > 0")


@router.post(
    "/extend-session",
    status_code=status.HTTP_200_OK,
    response_model=SessionExpiryResponse,
)
async def extend_session(
    request: ExtendSessionRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Extend Session

    Raises:
        - 400 Bad Request: invalid payload, or session not active
    """
    use_case = ExtendSessionUseCase(uow, clock=clock)
    result = await use_case.execute(request.session_token, request.additional_minutes)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class RevokeSessionRequest(BaseModel):
    """Either session_token or session_id must be given; the token wins"""

    session_token: Optional[str] = None
    session_id: Optional[int] = None
    revoked_by: Optional[str] = Field(None, description="Actor recorded on the session")


@router.post(
    "/revoke-session",
    status_code=status.HTTP_200_OK,
    response_model=RevokeSessionResponse,
)
async def revoke_session(
    request: RevokeSessionRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Revoke Session

    Raises:
        - 400 Bad Request: neither token nor id given
        - 404 Not Found: no active session matches
    """
    use_case = RevokeSessionsUseCase(uow, clock=clock)
    result = await use_case.revoke_session(
        session_token=request.session_token,
        session_id=request.session_id,
        revoked_by=request.revoked_by,
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class RevokeAllSessionsRequest(BaseModel):
    """Request to revoke all sessions for a user"""

    user_id: Optional[int] = Field(None, description="User whose sessions will be revoked")
    user_name: Optional[str] = None
    revoked_by: Optional[str] = None


@router.post(
    "/revoke-all-session",
    status_code=status.HTTP_200_OK,
    response_model=RevokeAllSessionsResponse,
)
async def revoke_all_sessions(
    request: RevokeAllSessionsRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Revoke All Sessions

    Revokes all active sessions for a user. Useful for:
    - Security incidents (account compromise)
    - Password changes
    - Admin-initiated logout

    Raises:
        - 400 Bad Request: user_id or user_name missing
    """
    use_case = RevokeSessionsUseCase(uow, clock=clock)
    result = await use_case.revoke_all_sessions(
        request.user_id, request.user_name, request.revoked_by
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/logout-session",
    status_code=status.HTTP_200_OK,
    response_model=LogoutSessionResponse,
)
async def logout_session(
    request: SessionTokenRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Logout Session

    Raises:
        - 400 Bad Request: token missing
        - 404 Not Found: no active session matches
    """
    use_case = LogoutSessionUseCase(uow, clock=clock)
    result = await use_case.execute(request.session_token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class SessionListRequest(BaseModel):
    user_id: Optional[int] = None
    user_name: Optional[str] = None
    status: Optional[str] = Field(None, description="ACTIVE, EXPIRED, REVOKED, ...")
    active_flag: Optional[bool] = None
    page: Optional[int] = Field(None, description="Zero-based page number")
    size: Optional[int] = Field(None, description="Page size (default 20)")


@router.post(
    "/session-list",
    status_code=status.HTTP_200_OK,
    response_model=SessionListResponse,
)
async def session_list(
    request: SessionListRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Session List

    Raises:
        - 400 Bad Request: unknown status literal (valid values in details)
    """
    use_case = ListSessionsUseCase(uow, default_page_size=ApplicationConfig.SESSION_PAGE_SIZE)
    result = await use_case.execute(SessionListQuery(**request.model_dump()))

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class CleanupSessionsRequest(BaseModel):
    older_than_days: Optional[int] = Field(None, description="Retention in days (default 30)")


@router.delete(
    "/cleanup-session",
    status_code=status.HTTP_200_OK,
    response_model=CleanupSessionsResponse,
)
async def cleanup_sessions(
    request: Optional[CleanupSessionsRequest] = None,
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Cleanup Sessions

    Deletes inactive or expired sessions whose expiry is older than the
    retention window.
    """
    older_than_days = request.older_than_days if request is not None else None

    use_case = CleanupSessionsUseCase(
        uow,
        clock=clock,
        default_retention_days=ApplicationConfig.SESSION_RETENTION_DAYS,
    )
    result = await use_case.execute(older_than_days)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/get-session-id", status_code=status.HTTP_200_OK)
async def get_session_by_id(
    request: SessionIdRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Session by Id

    The owner and administrators see the full session including the token;
    other callers get a restricted view with the token masked.

    Raises:
        - 401 Unauthorized: missing or invalid bearer token, or malformed claims
        - 404 Not Found: Session not found
    """
    try:
        caller = CallerContext(
            user_id=current_user.get("user_id"),
            user_name=current_user.get("user_name"),
            roles=current_user.get("roles") or [],
        )
    except ValidationError:
        raise_for_error(Error("UNAUTHORIZED", "Invalid token claims"))

    use_case = GetSessionUseCase(uow, admin_roles=ApplicationConfig.ADMIN_ROLES)
    result = await use_case.execute(request.session_id, caller)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
