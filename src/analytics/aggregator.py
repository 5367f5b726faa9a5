"""Summary aggregation over stored submissions.

A single linear pass accumulates sums, weighted averages, maxima, and
distinct identities. Per-row averages are always weighted by the row's
sample count. Every ratio falls back to 0 when its denominator is 0.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from analytics.recency import recent_submissions
from core.coercion import round_half_up
from core.constants import (
    DEFAULT_RECENT_LIMIT,
    HOURS_PRECISION,
    MINUTES_PER_HOUR,
    SHOT_TIME_PRECISION,
    SPEED_PRECISION,
)
from core.types import SubmissionRecord, SubmissionSummary


@dataclass
class WeightedMean:
    """Running weighted mean of per-row averages."""

    numerator: float = 0.0
    denominator: float = 0.0

    def add(self, average: float, weight: float) -> None:
        """Fold in one row's average and its sample count."""
        if weight <= 0:
            return
        self.numerator += average * weight
        self.denominator += weight

    def value(self, precision: int) -> float:
        """Return the rounded mean, or 0 when nothing was weighted."""
        if self.denominator <= 0:
            return 0.0
        return round_half_up(self.numerator / self.denominator, precision)


@dataclass
class _Accumulator:
    count: int = 0
    user_ids: set[str] = field(default_factory=set)
    sessions: int = 0
    minutes: float = 0.0
    shot_time: WeightedMean = field(default_factory=WeightedMean)
    break_speed: WeightedMean = field(default_factory=WeightedMean)
    power: WeightedMean = field(default_factory=WeightedMean)
    max_break_speed: float = 0.0
    breaks: int = 0
    shots: int = 0
    vectors_shots: int = 0
    calibrations: int = 0
    coin_flips: int = 0
    heads: int = 0
    tails: int = 0
    signed_in: int = 0
    pro: int = 0

    def add(self, record: SubmissionRecord) -> None:
        self.count += 1
        self.user_ids.add(record.user_id)
        self.sessions += record.total_sessions
        self.minutes += record.total_time_min
        self.shot_time.add(record.tempo_avg_shot_time, record.tempo_total_shots)
        self.break_speed.add(record.velocity_avg_speed, record.velocity_breaks)
        self.power.add(record.vectors_avg_power, record.vectors_shots)
        self.max_break_speed = max(self.max_break_speed, record.velocity_max_speed)
        self.breaks += record.velocity_breaks
        self.shots += record.tempo_total_shots
        self.vectors_shots += record.vectors_shots
        self.calibrations += record.truelevel_calibrations
        self.coin_flips += record.luck_flips
        self.heads += record.luck_heads
        self.tails += record.luck_tails
        self.signed_in += int(record.signed_in)
        self.pro += int(record.is_pro)


def summarize_records(
    records: Sequence[SubmissionRecord],
    recent_limit: int = DEFAULT_RECENT_LIMIT,
) -> SubmissionSummary:
    """Reduce stored records into a summary.

    Args:
        records: Decoded records in append order, header excluded.
        recent_limit: Size of the recency view.

    Returns:
        Summary with zeroed fields when there are no records.
    """
    accumulator = _Accumulator()
    for record in records:
        accumulator.add(record)
    return SubmissionSummary(
        count=accumulator.count,
        unique_users=len(accumulator.user_ids),
        total_sessions=accumulator.sessions,
        total_time_hours=round_half_up(accumulator.minutes / MINUTES_PER_HOUR, HOURS_PRECISION),
        avg_shot_time=accumulator.shot_time.value(SHOT_TIME_PRECISION),
        avg_break_speed=accumulator.break_speed.value(SPEED_PRECISION),
        max_break_speed=round_half_up(accumulator.max_break_speed, SPEED_PRECISION),
        avg_power=accumulator.power.value(SPEED_PRECISION),
        total_breaks=accumulator.breaks,
        total_shots=accumulator.shots,
        total_vectors_shots=accumulator.vectors_shots,
        total_calibrations=accumulator.calibrations,
        total_coin_flips=accumulator.coin_flips,
        total_heads=accumulator.heads,
        total_tails=accumulator.tails,
        signed_in_users=accumulator.signed_in,
        pro_users=accumulator.pro,
        recent_submissions=recent_submissions(records, recent_limit),
    )
