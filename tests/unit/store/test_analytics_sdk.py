"""Unit tests for the SDK request boundary."""

from __future__ import annotations

from core.config import CueStatsConfig
from store.analytics_sdk import CueStatsClient


def _client(tmp_path, **overrides: object) -> CueStatsClient:
    config = CueStatsConfig(data_root=tmp_path, **overrides)
    return CueStatsClient(config)


def test_ping_reports_service_version(tmp_path) -> None:
    """Ping should answer without touching the sheet."""
    response = _client(tmp_path).ping()

    assert response["status"] == "ok" and "CueStats" in response["message"]


def test_submit_reports_success_payload(tmp_path) -> None:
    """Successful submits should report the new sheet row."""
    client = _client(tmp_path)
    client.setup()

    response = client.submit({"userId": "u-1"})

    assert (response["result"], response["row"], response["schemaVersion"]) == (
        "success",
        2,
        "v4",
    )


def test_submit_reports_missing_sheet_as_error_payload(tmp_path) -> None:
    """Failures should come back as payloads rather than exceptions."""
    response = _client(tmp_path).submit({"userId": "u-1"})

    assert response["result"] == "error" and "setup" in response["message"]


def test_submit_reports_malformed_body_as_error_payload(tmp_path) -> None:
    """Malformed JSON bodies should be reported, not raised."""
    client = _client(tmp_path)
    client.setup()

    response = client.submit("{nope")

    assert response["result"] == "error"


def test_submit_reports_lock_timeout_as_retryable(tmp_path) -> None:
    """A held lock should surface as a retryable error payload."""
    client = _client(tmp_path, lock_timeout_seconds=0.1)
    client.setup()

    with client.open_table().lock():
        response = client.submit({"userId": "u-1"})

    assert response["result"] == "error" and response["retryable"] is True


def test_summary_reports_missing_sheet_as_error(tmp_path) -> None:
    """Summary should return an error payload when setup has not run."""
    response = _client(tmp_path).summary()

    assert set(response) == {"error"}


def test_summary_over_empty_sheet_is_all_zero(tmp_path) -> None:
    """An empty sheet should summarize to zeros without division errors."""
    client = _client(tmp_path)
    client.setup()

    response = client.summary()

    assert response["count"] == 0
    assert response["avgShotTime"] == 0 and response["avgBreakSpeed"] == 0
    assert response["maxBreakSpeed"] == 0 and response["recentSubmissions"] == []


def test_setup_uses_requested_schema_version(tmp_path) -> None:
    """Setup should honor an explicit schema version."""
    schema = _client(tmp_path).setup(schema_version="v2")

    assert (schema.version, schema.width) == ("v2", 24)


def test_submit_reports_unwritable_data_root_as_error_payload(tmp_path) -> None:
    """Filesystem failures opening the lock should not escape submit."""
    data_root = tmp_path / "not-a-directory"
    data_root.write_text("", encoding="utf-8")

    response = _client(data_root, auto_setup=True).submit({"userId": "u-1"})

    assert response["result"] == "error" and "append lock" in response["message"]
