"""CueStats exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type, and the SDK boundary
turns them into per-request error payloads.
"""

from __future__ import annotations


class CueStatsError(Exception):
    """Base exception for all CueStats failures."""


class CueStatsConfigError(CueStatsError):
    """Raised for invalid runtime configuration."""


class CueStatsIngestError(CueStatsError):
    """Raised when a submission envelope cannot be parsed."""


class CueStatsStoreError(CueStatsError):
    """Raised for sheet persistence failures."""


class CueStatsStoreNotInitializedError(CueStatsStoreError):
    """Raised when the analytics sheet has not been set up."""


class CueStatsLockTimeoutError(CueStatsStoreError):
    """Raised when the append lock cannot be acquired in time.

    The failed request appended nothing; callers may retry it.
    """

    retryable = True
