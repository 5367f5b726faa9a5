"""The submit operation.

Parses and normalizes one payload, then appends exactly one row while
holding the sheet's append lock. Lock timeouts are not retried here;
the caller owns retries.
"""

from __future__ import annotations

from typing import Any, Mapping

from analytics.recency import redact_identity
from core.config import CueStatsConfig
from core.errors import CueStatsStoreNotInitializedError
from core.logging_config import get_logger
from core.schema import SheetSchema, get_schema, record_to_row
from core.timestamps import Clock, format_submission_timestamp, utc_now
from core.types import AppendResult
from ingest.normalizer import build_submission_record
from ingest.payload_parser import parse_submission_payload
from store.row_table import SheetTable

_LOGGER = get_logger(__name__)


def submit_record(
    raw_payload: Mapping[str, Any] | str | bytes | None,
    table: SheetTable,
    config: CueStatsConfig,
    clock: Clock = utc_now,
) -> AppendResult:
    """Normalize a submission and append it to the sheet.

    Args:
        raw_payload: Query parameters or JSON body.
        table: Sheet handle for this request.
        config: Runtime configuration.
        clock: Source of the server-assigned timestamp.

    Returns:
        Position and shape of the appended row.

    Raises:
        CueStatsIngestError: If the envelope cannot be parsed.
        CueStatsStoreNotInitializedError: If the sheet is missing and
            ``auto_setup`` is off.
        CueStatsLockTimeoutError: If the append lock wait times out.
        CueStatsStoreError: If the append fails.
    """
    payload = parse_submission_payload(raw_payload)
    with table.lock():
        schema = _resolve_sheet_schema(table, config)
        timestamp = format_submission_timestamp(clock(), config.timezone)
        record = build_submission_record(payload, timestamp)
        row = record_to_row(record, schema)
        row_number = table.append_row(row)
    _LOGGER.info(
        "submission_appended",
        sheet_name=table.sheet_name,
        row=row_number,
        columns=len(row),
        schema_version=schema.version,
        user_id=redact_identity(record.user_id),
    )
    return AppendResult(row=row_number, columns=len(row), schema_version=schema.version)


def _resolve_sheet_schema(table: SheetTable, config: CueStatsConfig) -> SheetSchema:
    """Return the header schema, setting the sheet up once if allowed.

    Must run under the append lock so setup cannot race another writer.
    """
    if table.exists():
        return table.read_schema()
    if not config.auto_setup:
        raise CueStatsStoreNotInitializedError(
            f"Sheet '{table.sheet_name}' not found. Run 'cuestats setup' first."
        )
    _LOGGER.warning(
        "sheet_auto_setup",
        sheet_name=table.sheet_name,
        schema_version=config.schema_version,
    )
    return table.initialize(get_schema(config.schema_version))
