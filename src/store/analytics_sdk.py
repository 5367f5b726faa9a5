"""Python SDK for the analytics request boundary.

``CueStatsClient`` exposes the submit and summary operations plus sheet
setup. Each call opens a fresh sheet handle, so no state is
carried between requests. ``submit`` and ``summary`` never raise for
domain failures: errors are reported in the returned payload.
"""

from __future__ import annotations

from typing import Any, Mapping

from analytics.aggregator import summarize_records
from analytics.summary_payload import summary_to_payload
from core.config import CueStatsConfig
from core.constants import SERVICE_NAME, SERVICE_VERSION
from core.errors import CueStatsError, CueStatsLockTimeoutError
from core.logging_config import get_logger
from core.schema import SheetSchema, get_schema
from core.timestamps import Clock, utc_now
from core.types import SubmissionSummary
from ingest.submission import submit_record
from store.row_decoding import read_submission_records
from store.row_table import SheetTable

_LOGGER = get_logger(__name__)

SubmissionPayload = Mapping[str, Any] | str | bytes | None


class CueStatsClient:
    """Primary SDK entry point for analytics workflows."""

    def __init__(self, config: CueStatsConfig | None = None, clock: Clock = utc_now) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            clock: Source of server-assigned submission timestamps.
        """
        self._config = config or CueStatsConfig.from_env()
        self._clock = clock

    @property
    def config(self) -> CueStatsConfig:
        """Runtime configuration."""
        return self._config

    def open_table(self) -> SheetTable:
        """Open a sheet handle for one request."""
        return SheetTable(
            self._config.data_root,
            self._config.sheet_name,
            self._config.lock_timeout_seconds,
        )

    def ping(self) -> dict[str, str]:
        """Return a liveness payload."""
        return {"status": "ok", "message": f"{SERVICE_NAME} v{SERVICE_VERSION}"}

    def setup(self, reset: bool = False, schema_version: str | None = None) -> SheetSchema:
        """Create the analytics sheet with its header row.

        Args:
            reset: Clear an existing sheet and rewrite its header.
            schema_version: Header layout; defaults to the configured one.

        Returns:
            Schema of the sheet header.

        Raises:
            CueStatsConfigError: If the schema version is unknown.
            CueStatsLockTimeoutError: If a writer holds the lock too long.
            CueStatsStoreError: If the sheet cannot be written.
        """
        schema = get_schema(schema_version or self._config.schema_version)
        table = self.open_table()
        with table.lock():
            resulting_schema = table.initialize(schema, reset=reset)
        _LOGGER.info(
            "sheet_setup_completed",
            sheet_name=table.sheet_name,
            schema_version=resulting_schema.version,
            columns=resulting_schema.width,
            reset=reset,
        )
        return resulting_schema

    def submit(self, payload: SubmissionPayload) -> dict[str, Any]:
        """Record one analytics submission.

        Args:
            payload: Query parameters, a ``data`` JSON parameter, or a JSON body.

        Returns:
            ``{"result": "success", "row": ...}`` or
            ``{"result": "error", "message": ...}``.
        """
        try:
            result = submit_record(payload, self.open_table(), self._config, self._clock)
        except CueStatsError as error:
            _LOGGER.error(
                "submission_failed",
                error_type=type(error).__name__,
                retryable=isinstance(error, CueStatsLockTimeoutError),
                message=str(error),
            )
            response: dict[str, Any] = {"result": "error", "message": str(error)}
            if isinstance(error, CueStatsLockTimeoutError):
                response["retryable"] = True
            return response
        return {
            "result": "success",
            "message": f"Analytics recorded v{SERVICE_VERSION}",
            "row": result.row,
            "columns": result.columns,
            "schemaVersion": result.schema_version,
        }

    def compute_summary(self) -> SubmissionSummary:
        """Scan the sheet and compute a fresh summary.

        Raises:
            CueStatsStoreNotInitializedError: If the sheet is missing.
            CueStatsStoreError: If the sheet cannot be read.
        """
        records = read_submission_records(self.open_table())
        summary = summarize_records(records, self._config.recent_limit)
        _LOGGER.info(
            "summary_computed",
            count=summary.count,
            unique_users=summary.unique_users,
        )
        return summary

    def summary(self) -> dict[str, Any]:
        """Return the summary payload, or ``{"error": ...}`` on failure."""
        try:
            summary = self.compute_summary()
        except CueStatsError as error:
            _LOGGER.error(
                "summary_failed",
                error_type=type(error).__name__,
                message=str(error),
            )
            return {"error": str(error)}
        return summary_to_payload(summary)
