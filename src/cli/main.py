"""CueStats CLI entry points.
This module exposes the analytics operations as subcommands.
It maps argparse commands onto SDK calls and prints JSON payloads.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from core.config import CueStatsConfig
from core.errors import CueStatsError
from core.schema import supported_schema_versions
from store.analytics_sdk import CueStatsClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="cuestats", description="CueStats analytics CLI")
    parser.add_argument("--data-root", help="Override CUESTATS_DATA_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_ping_command(subparsers)
    _add_setup_command(subparsers)
    _add_submit_command(subparsers)
    _add_summary_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CueStats CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.data_root)
    except CueStatsError as error:
        _print_json({"result": "error", "message": str(error)})
        return 1
    if args.command == "ping":
        _print_json(client.ping())
        return 0
    if args.command == "setup":
        return _run_setup_command(client, args)
    if args.command == "submit":
        return _run_submit_command(client, args, parser)
    if args.command == "summary":
        return _run_summary_command(client)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(data_root: str | None) -> CueStatsClient:
    """Build SDK client with optional data-root override.

    Args:
        data_root: Optional override path.

    Returns:
        Configured SDK client.
    """
    config = CueStatsConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    return CueStatsClient(config)


def _run_setup_command(client: CueStatsClient, args: argparse.Namespace) -> int:
    """Handle setup command."""
    try:
        schema = client.setup(reset=args.reset, schema_version=args.schema_version)
    except CueStatsError as error:
        _print_json({"result": "error", "message": str(error)})
        return 1
    _print_json(
        {
            "result": "success",
            "sheet": client.config.sheet_name,
            "schemaVersion": schema.version,
            "columns": schema.width,
        }
    )
    return 0


def _run_submit_command(
    client: CueStatsClient,
    args: argparse.Namespace,
    parser: argparse.ArgumentParser,
) -> int:
    """Handle submit command.

    Args:
        client: SDK client.
        args: Parsed CLI args.
        parser: Parser used to report usage errors.

    Returns:
        Exit code.
    """
    payload: Any
    if args.body is not None:
        payload = sys.stdin.read() if args.body == "-" else args.body
    else:
        payload = _parse_key_values(args.params, parser)
        if args.data is not None:
            payload["data"] = args.data
    response = client.submit(payload)
    _print_json(response)
    return 0 if response.get("result") == "success" else 1


def _run_summary_command(client: CueStatsClient) -> int:
    """Handle summary command."""
    response = client.summary()
    _print_json(response)
    return 1 if "error" in response else 0


def _parse_key_values(
    params: Sequence[str],
    parser: argparse.ArgumentParser,
) -> dict[str, str]:
    """Parse ``key=value`` arguments into query-style parameters."""
    parsed: dict[str, str] = {}
    for param in params:
        key, separator, value = param.partition("=")
        if not separator or not key:
            parser.error(f"Invalid parameter '{param}': expected key=value")
        parsed[key] = value
    return parsed


def _print_json(payload: dict[str, Any]) -> None:
    """Print a JSON payload on stdout."""
    print(json.dumps(payload, sort_keys=True))


def _add_ping_command(subparsers: Any) -> None:
    """Register ping subcommand."""
    subparsers.add_parser("ping", help="Check that the service responds")


def _add_setup_command(subparsers: Any) -> None:
    """Register setup subcommand."""
    parser = subparsers.add_parser("setup", help="Create the analytics sheet header")
    parser.add_argument(
        "--schema-version",
        choices=supported_schema_versions(),
        help="Header layout (defaults to CUESTATS_SCHEMA_VERSION)",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing rows and rewrite the header",
    )


def _add_submit_command(subparsers: Any) -> None:
    """Register submit subcommand."""
    parser = subparsers.add_parser("submit", help="Record one analytics submission")
    parser.add_argument("params", nargs="*", help="Submission fields as key=value")
    parser.add_argument("--data", help="Submission as a JSON object string")
    parser.add_argument("--body", help="Raw JSON request body, or '-' to read stdin")


def _add_summary_command(subparsers: Any) -> None:
    """Register summary subcommand."""
    subparsers.add_parser("summary", help="Print aggregate statistics")
