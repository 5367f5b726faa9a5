"""Unit tests for CLI command handling."""

from __future__ import annotations

import io
import json

import pytest

from cli.main import main


def _run(capsys, args: list[str]) -> tuple[int, dict[str, object]]:
    exit_code = main(args)
    output = capsys.readouterr().out.strip()
    return exit_code, json.loads(output)


def test_cli_ping_prints_status(tmp_path, capsys) -> None:
    """Ping should succeed without a sheet."""
    exit_code, payload = _run(capsys, ["--data-root", str(tmp_path), "ping"])

    assert exit_code == 0 and payload["status"] == "ok"


def test_cli_setup_reports_schema(tmp_path, capsys) -> None:
    """Setup should report the written header layout."""
    exit_code, payload = _run(
        capsys,
        ["--data-root", str(tmp_path), "setup", "--schema-version", "v3"],
    )

    assert exit_code == 0
    assert (payload["schemaVersion"], payload["columns"]) == ("v3", 28)


def test_cli_submit_key_values_then_summary(tmp_path, capsys) -> None:
    """Submitted key=value fields should show up in the summary."""
    root = ["--data-root", str(tmp_path)]
    _run(capsys, [*root, "setup"])

    submit_code, submit_payload = _run(
        capsys,
        [*root, "submit", "userId=cli-user", "totalSessions=2", "tempoTotalShots=4"],
    )
    summary_code, summary_payload = _run(capsys, [*root, "summary"])

    assert (submit_code, submit_payload["row"]) == (0, 2)
    assert summary_code == 0
    assert (summary_payload["count"], summary_payload["totalShots"]) == (1, 4)


def test_cli_submit_reads_body_from_stdin(tmp_path, capsys, monkeypatch) -> None:
    """A '-' body should be read from stdin as JSON."""
    root = ["--data-root", str(tmp_path)]
    _run(capsys, [*root, "setup"])
    monkeypatch.setattr("sys.stdin", io.StringIO('{"userId": "stdin-user"}'))

    exit_code, payload = _run(capsys, [*root, "submit", "--body", "-"])

    assert exit_code == 0 and payload["result"] == "success"


def test_cli_submit_without_setup_fails(tmp_path, capsys) -> None:
    """Submitting before setup should exit non-zero with an error payload."""
    exit_code, payload = _run(capsys, ["--data-root", str(tmp_path), "submit", "userId=x"])

    assert exit_code == 1 and payload["result"] == "error"


def test_cli_summary_without_setup_fails(tmp_path, capsys) -> None:
    exit_code, payload = _run(capsys, ["--data-root", str(tmp_path), "summary"])

    assert exit_code == 1 and "error" in payload


def test_cli_submit_rejects_malformed_parameter(tmp_path) -> None:
    """Arguments without '=' are usage errors."""
    with pytest.raises(SystemExit):
        main(["--data-root", str(tmp_path), "submit", "userId"])
