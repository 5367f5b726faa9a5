"""JSON response payloads for summaries."""

from __future__ import annotations

from core.types import SubmissionSummary


def summary_to_payload(summary: SubmissionSummary) -> dict[str, object]:
    """Serialize a summary into its camelCase response payload.

    Args:
        summary: Computed summary.

    Returns:
        JSON-safe response dictionary.
    """
    return {
        "count": summary.count,
        "uniqueUsers": summary.unique_users,
        "totalSessions": summary.total_sessions,
        "totalTimeHours": summary.total_time_hours,
        "avgShotTime": summary.avg_shot_time,
        "avgBreakSpeed": summary.avg_break_speed,
        "maxBreakSpeed": summary.max_break_speed,
        "avgPower": summary.avg_power,
        "totalBreaks": summary.total_breaks,
        "totalShots": summary.total_shots,
        "totalVectorsShots": summary.total_vectors_shots,
        "totalCalibrations": summary.total_calibrations,
        "totalCoinFlips": summary.total_coin_flips,
        "totalHeads": summary.total_heads,
        "totalTails": summary.total_tails,
        "signedInUsers": summary.signed_in_users,
        "proUsers": summary.pro_users,
        "recentSubmissions": [
            {
                "timestamp": entry.timestamp,
                "userId": entry.user_id,
                "sessions": entry.sessions,
                "timeMin": entry.time_min,
            }
            for entry in summary.recent_submissions
        ],
    }
