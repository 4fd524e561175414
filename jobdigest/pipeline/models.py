"""Data models for pipeline execution tracking and reporting."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from jobdigest.domain.models import MatchResult


@dataclass
class SourceRunStats:
    """
    Statistics for a single source within a pipeline run.

    Attributes:
        source: Provider tag of the adapter (e.g. "remoteok")
        fetched_count: Valid jobs the adapter returned (0 when it failed)
    """

    source: str
    fetched_count: int = 0


@dataclass
class PipelineRunResult:
    """
    Results from one complete pipeline execution.

    Attributes:
        run_id: Identifier stamped on every log line of the run
        run_started_at: UTC timestamp when the run began
        run_finished_at: UTC timestamp when the run completed
        total_duration_seconds: Total time for the entire run
        total_fetched: Jobs returned by all adapters, duplicates included
        duplicates_removed: Jobs dropped by deduplication
        unique_jobs: Jobs left after deduplication
        excluded_count: Jobs removed by the Hard-No filter
        scored_count: Jobs that were scored
        source_stats: Per-source statistics, in adapter order
        matches: Ranked top matches
    """

    run_id: str
    run_started_at: datetime
    run_finished_at: datetime
    total_duration_seconds: float = 0.0
    total_fetched: int = 0
    duplicates_removed: int = 0
    unique_jobs: int = 0
    excluded_count: int = 0
    scored_count: int = 0
    source_stats: List[SourceRunStats] = field(default_factory=list)
    matches: List[MatchResult] = field(default_factory=list)

    def __post_init__(self):
        """Compute duration if not set."""
        if self.total_duration_seconds == 0.0:
            delta = self.run_finished_at - self.run_started_at
            self.total_duration_seconds = delta.total_seconds()

    @property
    def duration_ms(self) -> int:
        return int(self.total_duration_seconds * 1000)
