"""Integration tests for the submit and summary round trip."""

from __future__ import annotations

import json
from pathlib import Path

from cuestats import CueStatsClient, CueStatsConfig


def _client(tmp_path: Path, **overrides: object) -> CueStatsClient:
    return CueStatsClient(CueStatsConfig(data_root=tmp_path / "cuestats", **overrides))


def test_flat_submission_is_reflected_in_summary(tmp_path: Path) -> None:
    """Totals from a flat payload should round-trip through the sheet."""
    client = _client(tmp_path)
    client.setup()

    response = client.submit({"userId": "u-1", "totalSessions": "3", "totalTimeMs": "120000"})
    summary = client.summary()

    assert response["result"] == "success"
    assert (summary["count"], summary["totalSessions"], summary["totalTimeHours"]) == (1, 3, 0.0)
    assert summary["recentSubmissions"][0]["timeMin"] == 2.0


def test_nested_json_body_lands_in_stats_column(tmp_path: Path) -> None:
    """Nested module stats should be summarized from the v4 stats cell."""
    client = _client(tmp_path)
    client.setup()
    body = {
        "user": {"id": "nested-user", "signedIn": True},
        "stats": {
            "tempo": {"avgShotTime": 12.5, "totalShots": 4},
            "velocity": {"avgSpeed": 18.2, "maxSpeed": 24.9, "breaks": 3},
        },
        "moduleUsage": {"tempo": {"sessions": 2, "timeMs": 90000}},
    }

    client.submit(json.dumps(body))
    summary = client.summary()

    assert (summary["avgShotTime"], summary["totalShots"]) == (12.5, 4)
    assert (summary["avgBreakSpeed"], summary["maxBreakSpeed"]) == (18.2, 24.9)
    assert (summary["totalSessions"], summary["signedInUsers"]) == (2, 1)


def test_auto_setup_creates_sheet_on_first_submit(tmp_path: Path) -> None:
    """Lenient mode should set the sheet up once and then append."""
    client = _client(tmp_path, auto_setup=True)

    first = client.submit({"userId": "u-1"})
    second = client.submit({"userId": "u-2"})

    assert (first["row"], second["row"]) == (2, 3)
    assert client.summary()["uniqueUsers"] == 2


def test_recent_submissions_are_newest_first(tmp_path: Path) -> None:
    """The recency view should hold the last ten submissions, newest first."""
    client = _client(tmp_path)
    client.setup()
    for index in range(1, 13):
        client.submit({"userId": f"R{index}"})

    recent = client.summary()["recentSubmissions"]

    assert [entry["userId"] for entry in recent] == [f"R{index}" for index in range(12, 2, -1)]
