"""Versioned sheet layouts.

The persisted sheet has one header row pinned to a schema version.
Column order and meaning never change for a version once rows exist;
evolving the layout means adding a new version, not editing an old one.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
from typing import Any, Mapping, Sequence

from core.errors import CueStatsConfigError
from core.record_fields import FIELDS_BY_NAME
from core.types import SubmissionRecord

TIMESTAMP_FIELD = "timestamp"
STATS_FIELD = "stats_json"
MODULE_USAGE_KEY = "module_usage"
CUSTOM_SCHEMA_VERSION = "custom"


@dataclass(frozen=True)
class ColumnSpec:
    """One sheet column bound to a record attribute.

    Attributes:
        header: Header cell text.
        field: Record attribute, ``stats_json`` for the serialized stats
            column, or ``None`` for columns this service does not read.
    """

    header: str
    field: str | None


@dataclass(frozen=True)
class SheetSchema:
    """An ordered, versioned set of sheet columns."""

    version: str
    columns: tuple[ColumnSpec, ...]

    @property
    def headers(self) -> list[str]:
        """Header row cells in column order."""
        return [column.header for column in self.columns]

    @property
    def width(self) -> int:
        """Number of columns in one row."""
        return len(self.columns)


_PROFILE_HEAD = (
    ColumnSpec("Timestamp", TIMESTAMP_FIELD),
    ColumnSpec("User ID", "user_id"),
)
_DEVICE_COLUMNS = (
    ColumnSpec("Device Type", "device_type"),
    ColumnSpec("Browser", "browser"),
    ColumnSpec("Screen Size", "screen_size"),
    ColumnSpec("Timezone", "timezone"),
)
_ACCOUNT_COLUMNS = (
    ColumnSpec("Display Name", "display_name"),
    ColumnSpec("Signed In", "signed_in"),
    ColumnSpec("Pro User", "is_pro"),
    ColumnSpec("Promo Code", "promo_code"),
)
_TOTAL_COLUMNS = (
    ColumnSpec("Total Sessions", "total_sessions"),
    ColumnSpec("Total Time (min)", "total_time_min"),
)
_MODULE_COLUMNS = (
    ColumnSpec("Tempo Avg Shot (s)", "tempo_avg_shot_time"),
    ColumnSpec("Tempo Total Shots", "tempo_total_shots"),
    ColumnSpec("Tempo Sessions", "tempo_sessions"),
    ColumnSpec("Velocity Avg MPH", "velocity_avg_speed"),
    ColumnSpec("Velocity Max MPH", "velocity_max_speed"),
    ColumnSpec("Velocity Breaks", "velocity_breaks"),
    ColumnSpec("Vectors Shots", "vectors_shots"),
    ColumnSpec("Vectors Avg Power", "vectors_avg_power"),
    ColumnSpec("Vectors Sessions", "vectors_sessions"),
    ColumnSpec("TrueLevel Calibrations", "truelevel_calibrations"),
    ColumnSpec("TrueLevel Tables", "truelevel_tables"),
    ColumnSpec("Luck Total Flips", "luck_flips"),
    ColumnSpec("Luck Heads", "luck_heads"),
    ColumnSpec("Luck Tails", "luck_tails"),
    ColumnSpec("Luck Sessions", "luck_sessions"),
)
_EMAIL_COLUMN = ColumnSpec("User Email", "user_email")

SCHEMAS: Mapping[str, SheetSchema] = {
    "v2": SheetSchema(
        version="v2",
        columns=(
            *_PROFILE_HEAD,
            _EMAIL_COLUMN,
            *_DEVICE_COLUMNS,
            *_TOTAL_COLUMNS,
            *_MODULE_COLUMNS,
        ),
    ),
    "v3": SheetSchema(
        version="v3",
        columns=(
            *_PROFILE_HEAD,
            _EMAIL_COLUMN,
            *_ACCOUNT_COLUMNS,
            *_DEVICE_COLUMNS,
            *_TOTAL_COLUMNS,
            *_MODULE_COLUMNS,
        ),
    ),
    "v4": SheetSchema(
        version="v4",
        columns=(
            *_PROFILE_HEAD,
            *_ACCOUNT_COLUMNS,
            *_DEVICE_COLUMNS,
            *_TOTAL_COLUMNS,
            ColumnSpec("Stats (JSON)", STATS_FIELD),
        ),
    ),
}

_FIELD_BY_HEADER: Mapping[str, str] = {
    column.header.lower(): column.field
    for schema in SCHEMAS.values()
    for column in schema.columns
    if column.field is not None
}


def supported_schema_versions() -> tuple[str, ...]:
    """Return known schema versions, oldest first."""
    return tuple(SCHEMAS)


def get_schema(version: str) -> SheetSchema:
    """Return the schema for a version.

    Raises:
        CueStatsConfigError: If the version is unknown.
    """
    try:
        return SCHEMAS[version]
    except KeyError as error:
        raise CueStatsConfigError(
            f"Unknown schema version '{version}'. "
            f"Supported versions: {', '.join(SCHEMAS)}."
        ) from error


def detect_schema(header: Sequence[str]) -> SheetSchema:
    """Resolve the schema a header row was written with.

    An exact match returns the known version. Any other header, such as
    one edited by hand, maps columns by name and ignores unknown ones.

    Args:
        header: Header row cells.

    Returns:
        Matching or header-driven schema.
    """
    normalized = [str(cell).strip() for cell in header]
    for schema in SCHEMAS.values():
        if normalized == schema.headers:
            return schema
    columns = tuple(
        ColumnSpec(header=cell, field=_FIELD_BY_HEADER.get(cell.lower())) for cell in normalized
    )
    return SheetSchema(version=CUSTOM_SCHEMA_VERSION, columns=columns)


def record_to_row(record: SubmissionRecord, schema: SheetSchema) -> list[object]:
    """Lay out a record as one row of a schema.

    Args:
        record: Normalized submission record.
        schema: Target sheet schema.

    Returns:
        Row cells in column order.
    """
    row: list[object] = []
    for column in schema.columns:
        if column.field is None:
            row.append("")
        elif column.field == STATS_FIELD:
            row.append(_serialize_stats(record, schema))
        else:
            value = getattr(record, column.field)
            row.append(("true" if value else "false") if isinstance(value, bool) else value)
    return row


def row_to_cells(row: Sequence[object], schema: SheetSchema) -> dict[str, object]:
    """Map raw row cells onto record attribute names.

    Missing trailing cells and unparseable stats payloads are left out,
    so the caller falls back to field defaults.

    Args:
        row: Raw row cells.
        schema: Schema the row was written with.

    Returns:
        Attribute name to raw cell value.
    """
    cells: dict[str, object] = {}
    for index, column in enumerate(schema.columns):
        if column.field is None or index >= len(row):
            continue
        if column.field == STATS_FIELD:
            cells.update(_parse_stats(row[index]))
        else:
            cells[column.field] = row[index]
    return cells


def _serialize_stats(record: SubmissionRecord, schema: SheetSchema) -> str:
    """Serialize fields without a dedicated column into the stats cell."""
    covered = {column.field for column in schema.columns}
    payload: dict[str, Any] = {
        name: getattr(record, name)
        for name, record_field in FIELDS_BY_NAME.items()
        if name not in covered and record_field.kind in ("count", "measure")
    }
    payload[MODULE_USAGE_KEY] = {
        module: {"sessions": usage.sessions, "time_ms": usage.time_ms}
        for module, usage in sorted(record.module_usage.items())
    }
    return json.dumps(payload, sort_keys=True)


def _parse_stats(cell: object) -> dict[str, object]:
    """Parse a stats cell, returning an empty mapping when malformed."""
    if isinstance(cell, Mapping):
        payload: object = cell
    else:
        try:
            payload = json.loads(str(cell))
        except (TypeError, ValueError):
            return {}
    if not isinstance(payload, Mapping):
        return {}
    return {
        str(key): value
        for key, value in payload.items()
        if key in FIELDS_BY_NAME or key == MODULE_USAGE_KEY
    }

