"""Submission envelope decoding.

Clients deliver a record in one of three shapes: flat query parameters,
a ``data`` query parameter holding a JSON object, or a raw JSON request
body. This module turns each shape into one plain mapping. Only an
unparseable envelope is an error; bad field values are left for the
normalizer to coerce.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from core.errors import CueStatsIngestError

DATA_PARAMETER = "data"
MODULE_USAGE_PARAMETER = "moduleUsage"


def parse_submission_payload(raw: Mapping[str, Any] | str | bytes | None) -> dict[str, Any]:
    """Decode a submission envelope into a field mapping.

    Args:
        raw: Query parameter mapping, JSON body text, or JSON body bytes.

    Returns:
        Decoded field mapping; unknown fields are kept and later ignored.

    Raises:
        CueStatsIngestError: If a JSON envelope is malformed or not an object.
    """
    if raw is None:
        return {}
    if isinstance(raw, (str, bytes)):
        payload = _parse_json_object(raw, source="request body")
    else:
        payload = _parse_query_parameters(raw)
    return _decode_module_usage(payload)


def _parse_query_parameters(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Decode query parameters, preferring a non-blank JSON 'data' parameter.

    A blank 'data' parameter is ignored and the flat parameters are used.
    """
    params = {key: _single_query_value(value) for key, value in raw.items()}
    data = params.pop(DATA_PARAMETER, None)
    if isinstance(data, (str, bytes)) and data.strip():
        return _parse_json_object(data, source="'data' parameter")
    if isinstance(data, Mapping) and data:
        return dict(data)
    return params


def _parse_json_object(raw: str | bytes, source: str) -> dict[str, Any]:
    """Parse JSON text that must hold an object.

    Args:
        raw: JSON text or UTF-8 bytes.
        source: Envelope part named in error messages.

    Returns:
        Parsed object; empty text yields an empty mapping.

    Raises:
        CueStatsIngestError: If text is not a JSON object.
    """
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
    except UnicodeDecodeError as error:
        raise CueStatsIngestError(
            f"Failed to decode submission {source}: {error.reason}. Send UTF-8 JSON."
        ) from error
    if not text.strip():
        return {}
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as error:
        raise CueStatsIngestError(
            f"Failed to parse submission {source}: {error.msg} at position {error.pos}. "
            "Send a JSON object."
        ) from error
    if not isinstance(payload, dict):
        raise CueStatsIngestError(
            f"Invalid submission {source}: expected a JSON object, "
            f"got {type(payload).__name__}."
        )
    return payload


def _single_query_value(value: Any) -> Any:
    """Collapse ``parse_qs``-style single-item lists to their value."""
    if isinstance(value, (list, tuple)) and len(value) == 1:
        return value[0]
    return value


def _decode_module_usage(payload: dict[str, Any]) -> dict[str, Any]:
    """Decode a module usage map sent as a JSON string.

    A string that does not decode to an object is dropped, so the record
    falls back to flat totals.
    """
    module_usage = payload.get(MODULE_USAGE_PARAMETER)
    if not isinstance(module_usage, (str, bytes)):
        return payload
    decoded = dict(payload)
    try:
        parsed = json.loads(module_usage)
    except (json.JSONDecodeError, UnicodeDecodeError):
        parsed = None
    if isinstance(parsed, dict):
        decoded[MODULE_USAGE_PARAMETER] = parsed
    else:
        decoded.pop(MODULE_USAGE_PARAMETER)
    return decoded
