"""Unit tests for summary aggregation."""

from __future__ import annotations

from core.types import SubmissionRecord
from analytics.aggregator import WeightedMean, summarize_records


def _record(user_id: str, **fields: object) -> SubmissionRecord:
    return SubmissionRecord(timestamp="2026-01-01 00:00:00", user_id=user_id, **fields)


def test_summarize_records_weights_averages_by_sample_count() -> None:
    """Per-row averages should be weighted, not averaged as-is."""
    records = [
        _record("a", tempo_avg_shot_time=10.0, tempo_total_shots=2),
        _record("b", tempo_avg_shot_time=20.0, tempo_total_shots=1),
        _record("c", velocity_avg_speed=10.0, velocity_breaks=2),
        _record("d", velocity_avg_speed=20.0, velocity_breaks=1),
    ]

    summary = summarize_records(records)

    assert summary.avg_shot_time == 13.33
    assert summary.avg_break_speed == 13.3
    assert (summary.total_shots, summary.total_breaks) == (3, 3)


def test_summarize_records_ignores_rows_without_samples() -> None:
    """Rows with zero weight should not move the average."""
    records = [
        _record("a", tempo_avg_shot_time=12.0, tempo_total_shots=4),
        _record("b", tempo_avg_shot_time=99.0, tempo_total_shots=0),
    ]

    assert summarize_records(records).avg_shot_time == 12.0


def test_summarize_records_empty_input_is_all_zero() -> None:
    """No records should produce a zeroed summary."""
    summary = summarize_records([])

    assert summary.count == 0 and summary.unique_users == 0
    assert summary.avg_shot_time == 0 and summary.avg_break_speed == 0
    assert summary.max_break_speed == 0 and summary.avg_power == 0
    assert summary.total_time_hours == 0 and summary.recent_submissions == ()


def test_summarize_records_counts_distinct_users_and_totals() -> None:
    """Repeated identities should count once while totals add up."""
    records = [
        _record("a", total_sessions=2, total_time_min=90.0, signed_in=True),
        _record("a", total_sessions=1, total_time_min=45.0, is_pro=True),
        _record("b", velocity_max_speed=31.25, luck_flips=3, luck_heads=2, luck_tails=1),
    ]

    summary = summarize_records(records)

    assert (summary.count, summary.unique_users) == (3, 2)
    assert (summary.total_sessions, summary.total_time_hours) == (3, 2.3)
    assert summary.max_break_speed == 31.3
    assert (summary.total_coin_flips, summary.total_heads, summary.total_tails) == (3, 2, 1)
    assert (summary.signed_in_users, summary.pro_users) == (1, 1)


def test_summarize_records_is_repeatable() -> None:
    """Summaries are recomputed from scratch on every call."""
    records = [_record("a", tempo_avg_shot_time=8.5, tempo_total_shots=3)]

    assert summarize_records(records) == summarize_records(records)


def test_weighted_mean_without_weight_is_zero() -> None:
    """An empty weighted mean should not divide by zero."""
    mean = WeightedMean()
    mean.add(50.0, 0)

    assert mean.value(2) == 0.0
