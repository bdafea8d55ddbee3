from datetime import UTC, datetime


def utcnow() -> datetime:
    """Server clock in naive UTC, the form stored in DateTime columns."""
    return datetime.now(UTC).replace(tzinfo=None)
