"""
Session Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum
from typing import List, Optional

from libs.result import Error, Result, Return


class SessionStatus(str, Enum):
    """Session lifecycle status"""

    pending = "PENDING"
    active = "ACTIVE"
    expired = "EXPIRED"
    revoked = "REVOKED"
    logged_out = "LOGGED_OUT"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]

    @classmethod
    def parse(cls, text: Optional[str]) -> Result["SessionStatus"]:
        """
        Parse a free-text status literal (trimmed, case-insensitive).

        Returns:
            Result with the SessionStatus, or an INVALID_FILTER Error listing
            the accepted values
        """
        literal = (text or "").strip().upper()
        for member in cls:
            if member.value == literal:
                return Return.ok(member)
        return Return.err(
            Error(
                "INVALID_FILTER",
                f"status must be one of {','.join(cls.values())}",
                details={"valid_values": cls.values()},
            )
        )
