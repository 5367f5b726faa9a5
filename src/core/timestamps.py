"""Server-side timestamp helpers.

Submission timestamps are assigned at ingestion time and never
taken from the client payload.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Callable
from zoneinfo import ZoneInfo

from core.constants import TIMESTAMP_FORMAT

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current UTC time."""
    return datetime.now(timezone.utc)


def resolve_timezone(name: str) -> tzinfo:
    """Resolve an IANA timezone name.

    Args:
        name: Timezone name such as ``UTC`` or ``Europe/Berlin``.

    Returns:
        Timezone object.

    Raises:
        ZoneInfoNotFoundError: If the name is unknown.
        ValueError: If the name is malformed.
    """
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def format_submission_timestamp(moment: datetime, timezone_name: str) -> str:
    """Format a moment as ``yyyy-MM-dd HH:mm:ss`` local to a timezone."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(resolve_timezone(timezone_name)).strftime(TIMESTAMP_FORMAT)
