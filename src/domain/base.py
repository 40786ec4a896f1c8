from datetime import UTC, datetime


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the DateTime columns the entities store."""
    return datetime.now(UTC).replace(tzinfo=None)
