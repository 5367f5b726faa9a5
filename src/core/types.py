"""Shared typed models.

This module defines immutable data models used by ingest, store,
analytics, and SDK layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from core.constants import ANONYMOUS_USER_ID, UNKNOWN_VALUE


@dataclass(frozen=True)
class ModuleUsage:
    """Per-module usage counters bundled by the client.

    Attributes:
        sessions: Number of sessions spent in the module.
        time_ms: Cumulative time spent in the module, in milliseconds.
    """

    sessions: int = 0
    time_ms: int = 0


@dataclass(frozen=True)
class SubmissionRecord:
    """Canonical persisted analytics event.

    Attributes:
        timestamp: Server-assigned ingestion time.
        user_id: Anonymous or signed-in identifier; not unique per row.
        user_email: Optional email address.
        display_name: Optional display name.
        device_type: Device class reported by the client.
        browser: Browser name.
        screen_size: Screen dimensions string.
        timezone: Client timezone name.
        signed_in: Whether the user was signed in.
        is_pro: Whether the user held a pro entitlement.
        promo_code: Promo code used, if any.
        total_sessions: Total sessions across all modules.
        total_time_min: Total time in minutes.
        tempo_avg_shot_time: Tempo average seconds per shot.
        tempo_total_shots: Tempo shot count.
        tempo_sessions: Tempo session count.
        velocity_avg_speed: Velocity average break speed in MPH.
        velocity_max_speed: Velocity maximum break speed in MPH.
        velocity_breaks: Velocity break count.
        vectors_shots: Vectors shot count.
        vectors_avg_power: Vectors average shot power.
        vectors_sessions: Vectors session count.
        truelevel_calibrations: TrueLevel calibration count.
        truelevel_tables: TrueLevel table count.
        luck_flips: Coin flip count.
        luck_heads: Coin flips landing heads.
        luck_tails: Coin flips landing tails.
        luck_sessions: Luck session count.
        module_usage: Module name to usage counters.
    """

    timestamp: str
    user_id: str = ANONYMOUS_USER_ID
    user_email: str = ""
    display_name: str = ""
    device_type: str = UNKNOWN_VALUE
    browser: str = UNKNOWN_VALUE
    screen_size: str = UNKNOWN_VALUE
    timezone: str = UNKNOWN_VALUE
    signed_in: bool = False
    is_pro: bool = False
    promo_code: str = ""
    total_sessions: int = 0
    total_time_min: float = 0.0
    tempo_avg_shot_time: float = 0.0
    tempo_total_shots: int = 0
    tempo_sessions: int = 0
    velocity_avg_speed: float = 0.0
    velocity_max_speed: float = 0.0
    velocity_breaks: int = 0
    vectors_shots: int = 0
    vectors_avg_power: float = 0.0
    vectors_sessions: int = 0
    truelevel_calibrations: int = 0
    truelevel_tables: int = 0
    luck_flips: int = 0
    luck_heads: int = 0
    luck_tails: int = 0
    luck_sessions: int = 0
    module_usage: Mapping[str, ModuleUsage] = field(default_factory=dict)


@dataclass(frozen=True)
class RecentSubmission:
    """One entry of the summary recency view.

    Attributes:
        timestamp: Row timestamp.
        user_id: Redacted identity prefix.
        sessions: Total sessions on the row.
        time_min: Total minutes on the row.
    """

    timestamp: str
    user_id: str
    sessions: int
    time_min: float


@dataclass(frozen=True)
class SubmissionSummary:
    """Aggregate view recomputed from all stored rows.

    Attributes:
        count: Number of stored submissions.
        unique_users: Distinct user ids.
        total_sessions: Summed sessions.
        total_time_hours: Summed time in hours.
        avg_shot_time: Shot-weighted average seconds per shot.
        avg_break_speed: Break-weighted average break speed.
        max_break_speed: Highest recorded break speed.
        avg_power: Shot-weighted average vectors power.
        total_breaks: Summed velocity breaks.
        total_shots: Summed tempo shots.
        total_vectors_shots: Summed vectors shots.
        total_calibrations: Summed TrueLevel calibrations.
        total_coin_flips: Summed coin flips.
        total_heads: Summed heads.
        total_tails: Summed tails.
        signed_in_users: Rows submitted while signed in.
        pro_users: Rows submitted with a pro entitlement.
        recent_submissions: Most recent rows first.
    """

    count: int = 0
    unique_users: int = 0
    total_sessions: int = 0
    total_time_hours: float = 0.0
    avg_shot_time: float = 0.0
    avg_break_speed: float = 0.0
    max_break_speed: float = 0.0
    avg_power: float = 0.0
    total_breaks: int = 0
    total_shots: int = 0
    total_vectors_shots: int = 0
    total_calibrations: int = 0
    total_coin_flips: int = 0
    total_heads: int = 0
    total_tails: int = 0
    signed_in_users: int = 0
    pro_users: int = 0
    recent_submissions: tuple[RecentSubmission, ...] = ()


@dataclass(frozen=True)
class AppendResult:
    """Outcome of a successful append.

    Attributes:
        row: One-based sheet row number of the new row (header is row 1).
        columns: Width of the appended row.
        schema_version: Schema version of the sheet header.
    """

    row: int
    columns: int
    schema_version: str
