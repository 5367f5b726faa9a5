"""Public SDK surface for CueStats.

This module provides a stable import path for SDK users.
It re-exports the primary client and typed models.
"""

from __future__ import annotations

from analytics.aggregator import summarize_records
from core.config import CueStatsConfig
from core.types import (
    AppendResult,
    ModuleUsage,
    RecentSubmission,
    SubmissionRecord,
    SubmissionSummary,
)
from store.analytics_sdk import CueStatsClient

__all__ = [
    "AppendResult",
    "CueStatsClient",
    "CueStatsConfig",
    "ModuleUsage",
    "RecentSubmission",
    "SubmissionRecord",
    "SubmissionSummary",
    "summarize_records",
]
