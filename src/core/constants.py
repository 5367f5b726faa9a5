"""Core constants used across CueStats modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

SERVICE_NAME = "CueStats Analytics"
SERVICE_VERSION = "4.0"
DEFAULT_DATA_ROOT = Path(".cuestats")
SHEETS_DIR_NAME = "sheets"
SHEET_FILE_SUFFIX = ".csv"
LOCK_FILE_SUFFIX = ".lock"
DEFAULT_SHEET_NAME = "Analytics"
DEFAULT_SCHEMA_VERSION = "v4"
DEFAULT_LOCK_TIMEOUT_SECONDS = 10.0
DEFAULT_LOCK_POLL_INTERVAL_SECONDS = 0.05
DEFAULT_TIMEZONE = "UTC"
DEFAULT_RECENT_LIMIT = 10
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
MS_PER_MINUTE = 60000
MINUTES_PER_HOUR = 60
REDACTED_PREFIX_LENGTH = 8
REDACTION_MARKER = "..."
ANONYMOUS_USER_ID = "anonymous"
UNKNOWN_VALUE = "unknown"
NULL_LITERALS = ("undefined", "null")
AFFIRMATIVE_FLAG_VALUES = ("true", "1")
TIME_PRECISION = 1
SHOT_TIME_PRECISION = 2
SPEED_PRECISION = 1
HOURS_PRECISION = 1
