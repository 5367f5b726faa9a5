"""Bounded-wait exclusive lock guarding sheet appends.

Appends from concurrent requests are serialized through an advisory
``flock`` on a sidecar lock file. Each acquisition opens its own file
descriptor, so the lock also excludes other threads in this process.
Waiting is bounded: when the timeout elapses the request fails instead
of blocking.
"""

from __future__ import annotations

import fcntl
import time
from pathlib import Path
from types import TracebackType
from typing import IO

from core.constants import DEFAULT_LOCK_POLL_INTERVAL_SECONDS, DEFAULT_LOCK_TIMEOUT_SECONDS
from core.errors import CueStatsLockTimeoutError, CueStatsStoreError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


class AppendLock:
    """Context manager acquiring an exclusive lock with a bounded wait."""

    def __init__(
        self,
        lock_path: Path,
        timeout_seconds: float = DEFAULT_LOCK_TIMEOUT_SECONDS,
        poll_interval_seconds: float = DEFAULT_LOCK_POLL_INTERVAL_SECONDS,
    ) -> None:
        self._lock_path = lock_path
        self._timeout_seconds = timeout_seconds
        self._poll_interval_seconds = poll_interval_seconds
        self._lock_file: IO[str] | None = None

    def acquire(self) -> None:
        """Acquire the lock or fail once the timeout elapses.

        Raises:
            CueStatsLockTimeoutError: If another writer holds the lock
                for longer than the timeout.
            CueStatsStoreError: If the lock file cannot be opened.
        """
        try:
            self._lock_path.parent.mkdir(parents=True, exist_ok=True)
            lock_file = self._lock_path.open("a", encoding="utf-8")
        except OSError as error:
            raise CueStatsStoreError(
                f"Failed to open append lock at {self._lock_path}: {error}. "
                "Check that the data root is a writable directory."
            ) from error
        deadline = time.monotonic() + self._timeout_seconds
        while True:
            try:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
            except BlockingIOError:
                if time.monotonic() >= deadline:
                    lock_file.close()
                    _LOGGER.warning(
                        "append_lock_timeout",
                        lock_path=str(self._lock_path),
                        timeout_seconds=self._timeout_seconds,
                    )
                    raise CueStatsLockTimeoutError(
                        f"Could not acquire append lock within {self._timeout_seconds:g}s. "
                        "Another submission is in progress; retry the request."
                    ) from None
                time.sleep(self._poll_interval_seconds)
                continue
            self._lock_file = lock_file
            return

    def release(self) -> None:
        """Release the lock if held."""
        if self._lock_file is None:
            return
        try:
            fcntl.flock(self._lock_file.fileno(), fcntl.LOCK_UN)
        finally:
            self._lock_file.close()
            self._lock_file = None

    def __enter__(self) -> "AppendLock":
        self.acquire()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.release()
