from __future__ import annotations

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Current naive UTC time (MySQL DATETIME columns carry no zone).

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def inclusive_days(start: date, end: date) -> int:
    """Number of calendar days from start to end, both ends counted."""
    return (end - start).days + 1
