"""Submission record construction.

Builds one fixed-shape ``SubmissionRecord`` from an arbitrary, possibly
partial, untyped payload. Nothing here raises on bad values: absent or
unparseable numbers become 0 and absent strings take their defaults.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.coercion import coerce_count, coerce_number, round_half_up
from core.constants import MS_PER_MINUTE, TIME_PRECISION
from core.record_fields import RECORD_FIELDS, RecordField, lookup_client_value
from core.types import ModuleUsage, SubmissionRecord
from ingest.payload_parser import MODULE_USAGE_PARAMETER


def build_submission_record(params: Mapping[str, Any], timestamp: str) -> SubmissionRecord:
    """Normalize a decoded payload into a submission record.

    When a non-empty module usage map is present, total sessions and
    total time are derived from it and flat totals are ignored.

    Args:
        params: Decoded payload mapping.
        timestamp: Server-assigned ingestion timestamp.

    Returns:
        Normalized record.
    """
    values = {
        record_field.name: _normalize_field(params, record_field) for record_field in RECORD_FIELDS
    }
    module_usage = normalize_module_usage(params.get(MODULE_USAGE_PARAMETER))
    if module_usage:
        values["total_sessions"] = sum(usage.sessions for usage in module_usage.values())
        values["total_time_min"] = round_half_up(
            sum(usage.time_ms for usage in module_usage.values()) / MS_PER_MINUTE,
            TIME_PRECISION,
        )
    return SubmissionRecord(timestamp=timestamp, module_usage=module_usage, **values)  # type: ignore[arg-type]


def normalize_module_usage(value: object) -> dict[str, ModuleUsage]:
    """Normalize a client module usage map.

    Args:
        value: Mapping of module name to ``{"sessions", "timeMs"}``.

    Returns:
        Module name to coerced counters; non-mapping entries count as zero.
    """
    if not isinstance(value, Mapping):
        return {}
    usage: dict[str, ModuleUsage] = {}
    for module, counters in value.items():
        counters = counters if isinstance(counters, Mapping) else {}
        usage[str(module)] = ModuleUsage(
            sessions=coerce_count(counters.get("sessions")),
            time_ms=coerce_count(counters.get("timeMs")),
        )
    return usage


def _normalize_field(params: Mapping[str, Any], record_field: RecordField) -> object:
    raw_value = lookup_client_value(params, record_field)
    if record_field.source_divisor != 1.0:
        raw_value = coerce_number(raw_value) / record_field.source_divisor
    return record_field.coerce(raw_value)
