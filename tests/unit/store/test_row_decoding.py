"""Unit tests for read-time row validation."""

from __future__ import annotations

import json

from core.schema import detect_schema, get_schema
from store.row_decoding import decode_row, decode_rows


def test_decode_row_recoerces_stored_cells() -> None:
    """Hand-edited cells should decode to zeros, never errors."""
    schema = get_schema("v2")
    row = ["t", "u-1", "", "desktop", "", "", "null", "n/a", "-5", "oops", "3"]

    record = decode_row(row, schema)

    assert (record.total_sessions, record.total_time_min, record.tempo_avg_shot_time) == (
        0,
        0.0,
        0.0,
    )
    assert (record.tempo_total_shots, record.timezone, record.browser) == (3, "unknown", "unknown")
    assert record.luck_sessions == 0


def test_decode_v4_row_reads_stats_cell() -> None:
    """v4 rows should take per-module stats from the JSON column."""
    schema = get_schema("v4")
    stats = {
        "velocity_breaks": "7",
        "velocity_avg_speed": 18.44,
        "module_usage": {"velocity": {"sessions": 2, "time_ms": 120000}, "bad": 1},
        "unexpected": 5,
    }
    row = ["t", "u-1", "Ana", "TRUE", "false", "", "", "", "", "", "2", "2.0", json.dumps(stats)]

    record = decode_row(row, schema)

    assert (record.velocity_breaks, record.velocity_avg_speed) == (7, 18.4)
    assert (record.signed_in, record.is_pro, record.display_name) == (True, False, "Ana")
    assert list(record.module_usage) == ["velocity"]


def test_decode_rows_with_custom_header_defaults_missing_columns() -> None:
    """Unknown layouts should decode known columns and default the rest."""
    schema = detect_schema(["User ID", "Comment", "Velocity Breaks"])

    records = decode_rows([["u-1", "hello", "4"], ["u-2"]], schema)

    assert [(record.user_id, record.velocity_breaks) for record in records] == [
        ("u-1", 4),
        ("u-2", 0),
    ]
    assert records[0].timestamp == ""
