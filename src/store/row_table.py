"""Append-only analytics sheet.

A sheet is a CSV file with one header row followed by one row per
submission. Rows are never updated or deleted. Reads take no lock and
may miss an in-flight append; mutations must run while the caller
holds ``lock()``.
"""

from __future__ import annotations

import csv
import os
from pathlib import Path

from core.constants import LOCK_FILE_SUFFIX, SHEET_FILE_SUFFIX, SHEETS_DIR_NAME
from core.errors import CueStatsStoreError, CueStatsStoreNotInitializedError
from core.schema import SheetSchema, detect_schema
from store.append_lock import AppendLock


class SheetTable:
    """Filesystem-backed append-only sheet."""

    def __init__(self, data_root: Path, sheet_name: str, lock_timeout_seconds: float) -> None:
        """Open a sheet handle.

        Opening does not touch the filesystem; the handle lives for one
        request.

        Args:
            data_root: Root directory holding sheet files.
            sheet_name: Sheet name, used as the file stem.
            lock_timeout_seconds: Bounded wait for the append lock.
        """
        self._sheet_name = sheet_name
        sheets_dir = data_root / SHEETS_DIR_NAME
        self._sheet_path = sheets_dir / f"{sheet_name}{SHEET_FILE_SUFFIX}"
        self._lock_path = sheets_dir / f"{sheet_name}{LOCK_FILE_SUFFIX}"
        self._lock_timeout_seconds = lock_timeout_seconds

    @property
    def sheet_name(self) -> str:
        """Sheet name."""
        return self._sheet_name

    @property
    def sheet_path(self) -> Path:
        """CSV file backing the sheet."""
        return self._sheet_path

    def lock(self) -> AppendLock:
        """Return the exclusive lock that serializes mutations."""
        return AppendLock(self._lock_path, timeout_seconds=self._lock_timeout_seconds)

    def exists(self) -> bool:
        """Return whether the sheet has been set up with a header."""
        return self._sheet_path.exists() and self._sheet_path.stat().st_size > 0

    def initialize(self, schema: SheetSchema, reset: bool = False) -> SheetSchema:
        """Create the sheet with a header row.

        Without ``reset`` an existing sheet is left untouched and its own
        header schema is returned, which makes this step idempotent.
        With ``reset`` all rows are cleared and the header rewritten.

        Args:
            schema: Schema for a newly written header.
            reset: Clear an existing sheet.

        Returns:
            Schema of the sheet header after initialization.

        Raises:
            CueStatsStoreError: If the sheet cannot be written.
        """
        if self.exists() and not reset:
            return self.read_schema()
        self._sheet_path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self._sheet_path.with_suffix(".tmp")
        try:
            with temp_path.open("w", encoding="utf-8", newline="") as handle:
                csv.writer(handle).writerow(schema.headers)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_path, self._sheet_path)
        except OSError as error:
            raise CueStatsStoreError(
                f"Failed to set up sheet at {self._sheet_path}: {error}. "
                "Check write permissions and available disk space."
            ) from error
        return schema

    def read_table(self) -> list[list[str]]:
        """Read the header row followed by all data rows in one pass.

        Raises:
            CueStatsStoreNotInitializedError: If the sheet is missing or
                has no header row.
        """
        rows = self._read_all_rows()
        if not rows:
            raise CueStatsStoreNotInitializedError(
                f"Sheet '{self._sheet_name}' at {self._sheet_path} has no header row. "
                "Run 'cuestats setup' to create it."
            )
        return rows

    def read_header(self) -> list[str]:
        """Read the header row."""
        return self.read_table()[0]

    def read_schema(self) -> SheetSchema:
        """Resolve the schema of the header row."""
        return detect_schema(self.read_header())

    def read_rows(self) -> list[list[str]]:
        """Read all data rows in append order, excluding the header.

        Raises:
            CueStatsStoreNotInitializedError: If the sheet is missing.
        """
        return self.read_table()[1:]

    def row_count(self) -> int:
        """Return the total row count, header included."""
        return len(self._read_all_rows())

    def append_row(self, row: list[object]) -> int:
        """Append one row in a single write.

        Args:
            row: Row cells in header order.

        Returns:
            One-based row number of the appended row, header included.

        Raises:
            CueStatsStoreNotInitializedError: If the sheet is missing.
            CueStatsStoreError: If the write fails.
        """
        rows_before = self.row_count()
        try:
            with self._sheet_path.open("a", encoding="utf-8", newline="") as handle:
                csv.writer(handle).writerow(row)
                handle.flush()
                os.fsync(handle.fileno())
        except OSError as error:
            raise CueStatsStoreError(
                f"Failed to append to sheet at {self._sheet_path}: {error}. "
                "Check write permissions and available disk space."
            ) from error
        return rows_before + 1

    def _read_all_rows(self) -> list[list[str]]:
        if not self.exists():
            raise CueStatsStoreNotInitializedError(
                f"Sheet '{self._sheet_name}' not found at {self._sheet_path}. "
                "Run 'cuestats setup' to create it."
            )
        try:
            with self._sheet_path.open("r", encoding="utf-8", newline="") as handle:
                return [row for row in csv.reader(handle) if row]
        except (OSError, csv.Error) as error:
            raise CueStatsStoreError(
                f"Failed to read sheet at {self._sheet_path}: {error}. "
                "Repair or restore the sheet file."
            ) from error
