"""Unit tests for versioned sheet schemas."""

from __future__ import annotations

import json

from core.schema import (
    CUSTOM_SCHEMA_VERSION,
    detect_schema,
    get_schema,
    record_to_row,
    row_to_cells,
    supported_schema_versions,
)
from core.types import ModuleUsage, SubmissionRecord


def test_schema_widths_are_pinned_per_version() -> None:
    """Each version should keep its documented column count."""
    widths = {version: get_schema(version).width for version in supported_schema_versions()}

    assert widths == {"v2": 24, "v3": 28, "v4": 13}


def test_detect_schema_matches_exact_headers() -> None:
    """A header written by setup should resolve to its own version."""
    schema = get_schema("v3")

    assert detect_schema(schema.headers).version == "v3"


def test_detect_schema_maps_edited_headers_by_name() -> None:
    """Unrecognized headers should map known column names and skip the rest."""
    schema = detect_schema(["Timestamp", "Notes", "User ID", "Total Sessions"])

    assert schema.version == CUSTOM_SCHEMA_VERSION
    assert [column.field for column in schema.columns] == [
        "timestamp",
        None,
        "user_id",
        "total_sessions",
    ]


def test_v2_row_matches_flat_column_order() -> None:
    """A v2 row should place values in the original flat column order."""
    record = SubmissionRecord(
        timestamp="2026-01-01 10:00:00",
        user_id="player-1",
        total_sessions=3,
        velocity_max_speed=21.5,
        luck_sessions=2,
    )

    row = record_to_row(record, get_schema("v2"))

    assert (row[0], row[1], row[7], row[13], row[23]) == (
        "2026-01-01 10:00:00",
        "player-1",
        3,
        21.5,
        2,
    )


def test_v4_row_serializes_stats_and_module_usage() -> None:
    """The v4 stats cell should hold every stat without its own column."""
    record = SubmissionRecord(
        timestamp="t",
        signed_in=True,
        tempo_total_shots=40,
        module_usage={"tempo": ModuleUsage(sessions=2, time_ms=90000)},
    )

    row = record_to_row(record, get_schema("v4"))
    stats = json.loads(str(row[-1]))

    assert row[3] == "true"
    assert stats["tempo_total_shots"] == 40
    assert stats["module_usage"] == {"tempo": {"sessions": 2, "time_ms": 90000}}
    assert "total_sessions" not in stats


def test_row_to_cells_tolerates_short_rows_and_bad_stats() -> None:
    """Missing trailing cells and malformed JSON should simply be absent."""
    schema = get_schema("v4")

    short_cells = row_to_cells(["t", "user"], schema)
    broken_cells = row_to_cells(["t"] + [""] * 11 + ["{not json"], schema)

    assert short_cells == {"timestamp": "t", "user_id": "user"}
    assert "tempo_total_shots" not in broken_cells
