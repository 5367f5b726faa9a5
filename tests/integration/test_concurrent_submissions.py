"""Integration tests for concurrent appends to one sheet."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from core.config import CueStatsConfig
from store.analytics_sdk import CueStatsClient


def test_concurrent_submissions_get_distinct_rows(tmp_path: Path) -> None:
    """Every concurrent submit should land on its own complete row."""
    config = CueStatsConfig(data_root=tmp_path, lock_timeout_seconds=30.0)
    CueStatsClient(config).setup()
    submission_count = 24

    def _submit(index: int) -> dict[str, object]:
        return CueStatsClient(config).submit({"userId": f"user-{index}", "totalSessions": "1"})

    with ThreadPoolExecutor(max_workers=8) as executor:
        responses = list(executor.map(_submit, range(submission_count)))
    client = CueStatsClient(config)
    rows = client.open_table().read_rows()

    assert all(response["result"] == "success" for response in responses)
    assert sorted(response["row"] for response in responses) == list(
        range(2, submission_count + 2)
    )
    assert len(rows) == submission_count
    assert all(len(row) == 13 for row in rows)
    assert client.summary()["totalSessions"] == submission_count
