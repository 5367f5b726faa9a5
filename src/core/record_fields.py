"""Named field contract for submission records.

Each scalar attribute of ``SubmissionRecord`` is described once here:
its kind, its default, its rounding precision, and the client keys that
may supply it. Ingestion and row decoding both coerce through this table
so the two paths cannot drift apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping

from core.coercion import coerce_count, coerce_flag, coerce_measure, coerce_string
from core.constants import (
    ANONYMOUS_USER_ID,
    MS_PER_MINUTE,
    SHOT_TIME_PRECISION,
    SPEED_PRECISION,
    TIME_PRECISION,
    UNKNOWN_VALUE,
)

FieldKind = Literal["text", "flag", "count", "measure"]
KeyPath = tuple[str, ...]


@dataclass(frozen=True)
class RecordField:
    """Contract for one scalar record attribute.

    Attributes:
        name: ``SubmissionRecord`` attribute name.
        kind: Coercion family.
        client_keys: Payload paths checked in order, flat key first.
        default: Default for text fields.
        precision: Decimal places kept for measure fields.
        source_divisor: Unit conversion applied to client values.
    """

    name: str
    kind: FieldKind
    client_keys: tuple[KeyPath, ...]
    default: str = ""
    precision: int = 0
    source_divisor: float = 1.0

    def coerce(self, value: object) -> object:
        """Coerce a stored or already-converted value for this field."""
        if self.kind == "text":
            return coerce_string(value, self.default, null_literals_absent=True)
        if self.kind == "flag":
            return coerce_flag(value)
        if self.kind == "count":
            return coerce_count(value)
        return coerce_measure(value, self.precision)


def _text(name: str, default: str, *keys: KeyPath) -> RecordField:
    return RecordField(name=name, kind="text", client_keys=keys, default=default)


def _flag(name: str, *keys: KeyPath) -> RecordField:
    return RecordField(name=name, kind="flag", client_keys=keys)


def _count(name: str, *keys: KeyPath) -> RecordField:
    return RecordField(name=name, kind="count", client_keys=keys)


def _measure(name: str, precision: int, *keys: KeyPath) -> RecordField:
    return RecordField(name=name, kind="measure", client_keys=keys, precision=precision)


RECORD_FIELDS: tuple[RecordField, ...] = (
    _text("user_id", ANONYMOUS_USER_ID, ("userId",), ("user", "id")),
    _text("user_email", "", ("userEmail",), ("user", "email")),
    _text("display_name", "", ("displayName",), ("user", "displayName")),
    _text("device_type", UNKNOWN_VALUE, ("deviceType",), ("device", "type")),
    _text("browser", UNKNOWN_VALUE, ("browser",), ("device", "browser")),
    _text("screen_size", UNKNOWN_VALUE, ("screenSize",), ("device", "screenSize")),
    _text("timezone", UNKNOWN_VALUE, ("timezone",), ("device", "timezone")),
    _flag("signed_in", ("isSignedIn",), ("signedIn",), ("user", "signedIn")),
    _flag("is_pro", ("isPro",), ("user", "isPro")),
    _text("promo_code", "", ("promoCode",), ("user", "promoCode")),
    _count("total_sessions", ("totalSessions",)),
    RecordField(
        name="total_time_min",
        kind="measure",
        client_keys=(("totalTimeMs",),),
        precision=TIME_PRECISION,
        source_divisor=MS_PER_MINUTE,
    ),
    _measure(
        "tempo_avg_shot_time",
        SHOT_TIME_PRECISION,
        ("tempoAvgShotTime",),
        ("stats", "tempo", "avgShotTime"),
    ),
    _count("tempo_total_shots", ("tempoTotalShots",), ("stats", "tempo", "totalShots")),
    _count("tempo_sessions", ("tempoSessions",), ("stats", "tempo", "sessions")),
    _measure(
        "velocity_avg_speed",
        SPEED_PRECISION,
        ("velocityAvgSpeed",),
        ("stats", "velocity", "avgSpeed"),
    ),
    _measure(
        "velocity_max_speed",
        SPEED_PRECISION,
        ("velocityMaxSpeed",),
        ("stats", "velocity", "maxSpeed"),
    ),
    _count("velocity_breaks", ("velocityBreaks",), ("stats", "velocity", "breaks")),
    _count("vectors_shots", ("vectorsShots",), ("stats", "vectors", "shots")),
    _measure(
        "vectors_avg_power",
        SPEED_PRECISION,
        ("vectorsAvgPower",),
        ("stats", "vectors", "avgPower"),
    ),
    _count("vectors_sessions", ("vectorsSessions",), ("stats", "vectors", "sessions")),
    _count(
        "truelevel_calibrations",
        ("truelevelCalibrations",),
        ("stats", "truelevel", "calibrations"),
    ),
    _count("truelevel_tables", ("truelevelTables",), ("stats", "truelevel", "tables")),
    _count("luck_flips", ("luckFlips",), ("stats", "luck", "flips")),
    _count("luck_heads", ("luckHeads",), ("stats", "luck", "heads")),
    _count("luck_tails", ("luckTails",), ("stats", "luck", "tails")),
    _count("luck_sessions", ("luckSessions",), ("stats", "luck", "sessions")),
)

FIELDS_BY_NAME: Mapping[str, RecordField] = {field.name: field for field in RECORD_FIELDS}


def lookup_client_value(params: Mapping[str, object], record_field: RecordField) -> object:
    """Return the first present client value for a field.

    Args:
        params: Decoded submission payload.
        record_field: Field contract.

    Returns:
        Raw value, or ``None`` when no key path is present.
    """
    for key_path in record_field.client_keys:
        value = _walk(params, key_path)
        if value is not None and value != "":
            return value
    return None


def _walk(params: Mapping[str, object], key_path: KeyPath) -> object:
    """Follow a nested key path, returning ``None`` on any miss."""
    current: object = params
    for key in key_path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current
