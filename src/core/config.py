"""Runtime configuration model for CueStats.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from zoneinfo import ZoneInfoNotFoundError

from core.constants import (
    DEFAULT_DATA_ROOT,
    DEFAULT_LOCK_TIMEOUT_SECONDS,
    DEFAULT_RECENT_LIMIT,
    DEFAULT_SCHEMA_VERSION,
    DEFAULT_SHEET_NAME,
    DEFAULT_TIMEZONE,
)
from core.errors import CueStatsConfigError
from core.schema import supported_schema_versions
from core.timestamps import resolve_timezone

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class CueStatsConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local root directory holding sheet files.
        sheet_name: Name of the analytics sheet.
        schema_version: Column layout used when the sheet is set up.
        lock_timeout_seconds: Bounded wait for the append lock.
        auto_setup: Whether submit may set up a missing sheet once.
        timezone: IANA timezone used for server-assigned timestamps.
        recent_limit: Number of rows in the summary recency view.
    """

    data_root: Path
    sheet_name: str = DEFAULT_SHEET_NAME
    schema_version: str = DEFAULT_SCHEMA_VERSION
    lock_timeout_seconds: float = DEFAULT_LOCK_TIMEOUT_SECONDS
    auto_setup: bool = False
    timezone: str = DEFAULT_TIMEZONE
    recent_limit: int = DEFAULT_RECENT_LIMIT

    @classmethod
    def from_env(cls) -> "CueStatsConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            CueStatsConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("CUESTATS_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            sheet_name=_parse_sheet_name(os.getenv("CUESTATS_SHEET_NAME", DEFAULT_SHEET_NAME)),
            schema_version=_parse_schema_version(
                os.getenv("CUESTATS_SCHEMA_VERSION", DEFAULT_SCHEMA_VERSION)
            ),
            lock_timeout_seconds=_parse_lock_timeout(
                os.getenv("CUESTATS_LOCK_TIMEOUT_SECONDS", str(DEFAULT_LOCK_TIMEOUT_SECONDS))
            ),
            auto_setup=_parse_bool("CUESTATS_AUTO_SETUP", os.getenv("CUESTATS_AUTO_SETUP", "")),
            timezone=_parse_timezone(os.getenv("CUESTATS_TIMEZONE", DEFAULT_TIMEZONE)),
            recent_limit=_parse_recent_limit(
                os.getenv("CUESTATS_RECENT_LIMIT", str(DEFAULT_RECENT_LIMIT))
            ),
        )


def _parse_sheet_name(raw_value: str) -> str:
    """Validate the sheet name used as a file stem."""
    sheet_name = raw_value.strip()
    if not sheet_name or "/" in sheet_name or "\\" in sheet_name:
        raise CueStatsConfigError(
            f"Invalid CUESTATS_SHEET_NAME value '{raw_value}': "
            "expected a non-empty name without path separators."
        )
    return sheet_name


def _parse_schema_version(raw_value: str) -> str:
    """Validate the schema version selected for sheet setup."""
    version = raw_value.strip().lower()
    if version not in supported_schema_versions():
        raise CueStatsConfigError(
            f"Invalid CUESTATS_SCHEMA_VERSION value '{raw_value}': "
            f"expected one of {', '.join(supported_schema_versions())}."
        )
    return version


def _parse_lock_timeout(raw_value: str) -> float:
    """Parse the append lock timeout in seconds.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Positive timeout value.

    Raises:
        CueStatsConfigError: If value is not a positive number.
    """
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise CueStatsConfigError(
            "Invalid CUESTATS_LOCK_TIMEOUT_SECONDS value: "
            f"expected number, got '{raw_value}'. "
            "Set CUESTATS_LOCK_TIMEOUT_SECONDS to a positive number of seconds."
        ) from error
    if timeout <= 0:
        raise CueStatsConfigError(
            "Invalid CUESTATS_LOCK_TIMEOUT_SECONDS value: "
            f"expected a positive number, got '{raw_value}'."
        )
    return timeout


def _parse_recent_limit(raw_value: str) -> int:
    """Parse the recency view size."""
    try:
        limit = int(raw_value)
    except ValueError as error:
        raise CueStatsConfigError(
            "Invalid CUESTATS_RECENT_LIMIT value: "
            f"expected integer, got '{raw_value}'. "
            "Set CUESTATS_RECENT_LIMIT to a non-negative integer."
        ) from error
    if limit < 0:
        raise CueStatsConfigError(
            f"Invalid CUESTATS_RECENT_LIMIT value: expected >= 0, got '{raw_value}'."
        )
    return limit


def _parse_timezone(raw_value: str) -> str:
    """Validate an IANA timezone name."""
    try:
        resolve_timezone(raw_value)
    except (ZoneInfoNotFoundError, ValueError) as error:
        raise CueStatsConfigError(
            f"Invalid CUESTATS_TIMEZONE value '{raw_value}': unknown timezone. "
            "Use an IANA name such as 'UTC' or 'America/New_York'."
        ) from error
    return raw_value


def _parse_bool(variable_name: str, raw_value: str) -> bool:
    """Parse a boolean environment flag."""
    normalized = raw_value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise CueStatsConfigError(
        f"Invalid {variable_name} value '{raw_value}': expected true or false."
    )
