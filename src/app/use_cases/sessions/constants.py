from typing import Optional

DEFAULT_TTL_MINUTES = 60 * 24
DEFAULT_RETENTION_DAYS = 30
DEFAULT_PAGE_SIZE = 20
DEFAULT_ADMIN_ROLES = ("ADMIN", "ROLE_ADMIN")

# revoked_by recorded when no actor is given
SYSTEM_ACTOR = "SYSTEM"

REASON_EXPIRED = "EXPIRED"
REASON_INVALID_OR_REVOKED = "INVALID_OR_REVOKED"


def resolve_ttl(ttl_minutes: Optional[int], default: int = DEFAULT_TTL_MINUTES) -> int:
    """Absent or non-positive TTLs fall back to the default."""
    if ttl_minutes is None or ttl_minutes <= 0:
        return default
    return ttl_minutes


def redact_token(token: Optional[str]) -> str:
    return "null" if token is None else "[REDACTED]"
