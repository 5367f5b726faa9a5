"""Read-time validation of persisted sheet rows.

Stored rows are untyped and may have been edited out of band, so every
cell is coerced again here. Short rows, unknown columns, and broken
stats payloads decode to field defaults instead of failing.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from core.coercion import coerce_count, coerce_string
from core.record_fields import RECORD_FIELDS
from core.schema import (
    MODULE_USAGE_KEY,
    TIMESTAMP_FIELD,
    SheetSchema,
    detect_schema,
    row_to_cells,
)
from core.types import ModuleUsage, SubmissionRecord
from store.row_table import SheetTable


def decode_rows(rows: Sequence[Sequence[object]], schema: SheetSchema) -> list[SubmissionRecord]:
    """Decode data rows into typed records, preserving order.

    Args:
        rows: Data rows, header excluded.
        schema: Schema of the sheet header.

    Returns:
        One record per row.
    """
    return [decode_row(row, schema) for row in rows]


def decode_row(row: Sequence[object], schema: SheetSchema) -> SubmissionRecord:
    """Decode one data row into a typed record."""
    cells = row_to_cells(row, schema)
    values: dict[str, object] = {
        record_field.name: record_field.coerce(cells.get(record_field.name))
        for record_field in RECORD_FIELDS
    }
    return SubmissionRecord(
        timestamp=coerce_string(cells.get(TIMESTAMP_FIELD), ""),
        module_usage=module_usage_from_cell(cells.get(MODULE_USAGE_KEY)),
        **values,  # type: ignore[arg-type]
    )


def module_usage_from_cell(value: object) -> dict[str, ModuleUsage]:
    """Decode a stored module usage mapping, skipping malformed entries."""
    if not isinstance(value, Mapping):
        return {}
    usage: dict[str, ModuleUsage] = {}
    for module, counters in value.items():
        if not isinstance(counters, Mapping):
            continue
        usage[str(module)] = ModuleUsage(
            sessions=coerce_count(counters.get("sessions")),
            time_ms=coerce_count(counters.get("time_ms")),
        )
    return usage


def read_submission_records(table: SheetTable) -> list[SubmissionRecord]:
    """Scan a sheet without locking and decode every data row.

    Args:
        table: Sheet handle.

    Returns:
        Records in append order.

    Raises:
        CueStatsStoreNotInitializedError: If the sheet is missing.
    """
    header, *rows = table.read_table()
    return decode_rows(rows, detect_schema(header))
