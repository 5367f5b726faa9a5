"""Most-recent-first view of stored submissions."""

from __future__ import annotations

from typing import Sequence

from core.constants import DEFAULT_RECENT_LIMIT, REDACTED_PREFIX_LENGTH, REDACTION_MARKER
from core.types import RecentSubmission, SubmissionRecord


def recent_submissions(
    records: Sequence[SubmissionRecord],
    limit: int = DEFAULT_RECENT_LIMIT,
) -> tuple[RecentSubmission, ...]:
    """Project the last ``limit`` records, most recent first.

    Args:
        records: Records in append order.
        limit: Maximum entries returned.

    Returns:
        Recent entries with redacted identities.
    """
    if limit <= 0:
        return ()
    return tuple(
        RecentSubmission(
            timestamp=record.timestamp,
            user_id=redact_identity(record.user_id),
            sessions=record.total_sessions,
            time_min=record.total_time_min,
        )
        for record in reversed(records[-limit:])
    )


def redact_identity(user_id: str) -> str:
    """Keep a short identity prefix, e.g. ``a1b2c3d4...``."""
    if len(user_id) <= REDACTED_PREFIX_LENGTH:
        return user_id
    return f"{user_id[:REDACTED_PREFIX_LENGTH]}{REDACTION_MARKER}"
