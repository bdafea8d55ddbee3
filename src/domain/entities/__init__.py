"""
Session Service Domain Entities
"""

from .enums import SessionStatus
from .session import Session, SessionRole

__all__ = [
    # Enums
    "SessionStatus",
    # Entities
    "Session",
    "SessionRole",
]
