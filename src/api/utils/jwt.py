from datetime import UTC, datetime, timedelta
from typing import List, Optional

from jose import JWTError, jwt

from config import ApplicationConfig


def generate_jwt(
    user_id: Optional[int],
    user_name: str,
    roles: List[str],
    expires_delta: timedelta = timedelta(minutes=15),
) -> str:
    """
    Generate JWT access token carrying the caller's identity

    Args:
        user_id: User id (may be None for name-only identities)
        user_name: User name
        roles: Role claims (e.g. ADMIN)
        expires_delta: Token expiration duration

    Returns:
        JWT token string (HS256)
    """
    now = datetime.now(UTC)
    payload = {
        "user_id": user_id,
        "user_name": user_name,
        "roles": list(roles),
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"]
        )
        return payload
    except JWTError:
        return None
