"""Pipeline orchestration for one digest run."""

from typing import List, Optional, Sequence
from uuid import uuid4

from jobdigest.adapters.base import BaseAdapter, RawRecordSink
from jobdigest.adapters.factory import build_adapters
from jobdigest.config.environment import EnvironmentConfig
from jobdigest.config.models import AppConfig
from jobdigest.domain.models import MatchResult
from jobdigest.logging import get_logger
from jobdigest.logging.context import log_context
from jobdigest.matching.filters import HardNoFilter
from jobdigest.matching.ranker import TOP_MATCHES, rank
from jobdigest.matching.scorer import JobScorer
from jobdigest.utils.timestamps import utc_now

from .aggregator import JobAggregator
from .models import PipelineRunResult, SourceRunStats

logger = get_logger(__name__, component="pipeline")


class DigestPipeline:
    """
    Orchestrates a single digest run across all enabled sources.

    Stages: concurrent fetch, aggregation with deduplication, Hard-No
    filtering, scoring and ranking. Adapter failures are absorbed by the
    adapters themselves, so a run always yields a (possibly empty) ranked list.
    """

    def __init__(
        self,
        app_config: AppConfig,
        env_config: EnvironmentConfig,
        adapters: Optional[Sequence[BaseAdapter]] = None,
        raw_sink: Optional[RawRecordSink] = None,
    ):
        """
        Initialize the digest pipeline.

        Args:
            app_config: Application configuration
            env_config: Environment configuration
            adapters: Adapters to fetch from; built from config when omitted
            raw_sink: Sink for validated raw records when adapters are built here
        """
        self.app_config = app_config
        self.env_config = env_config
        if adapters is None:
            adapters = build_adapters(app_config, env_config, raw_sink=raw_sink)
        self.adapters: List[BaseAdapter] = list(adapters)
        self.hard_no_filter = HardNoFilter(app_config.hard_nos)
        self.scorer = JobScorer(app_config.preferences)

    def run_once(self) -> PipelineRunResult:
        """
        Execute one complete run.

        Returns:
            PipelineRunResult with counts, per-source stats and ranked matches
        """
        run_started_at = utc_now()
        run_id = uuid4().hex

        with log_context(run_id=run_id):
            logger.info(
                "Pipeline run started",
                extra={
                    "event": "pipeline.run.started",
                    "sources": [adapter.name for adapter in self.adapters],
                },
            )

            aggregator = JobAggregator(self.adapters)
            dedup = aggregator.run()
            source_stats = [
                SourceRunStats(source=adapter.name, fetched_count=len(jobs))
                for adapter, jobs in zip(self.adapters, aggregator.last_results)
            ]

            filtered = self.hard_no_filter.apply(dedup.jobs)
            scored = [self.scorer.evaluate(job) for job in filtered]
            matches = rank(scored, limit=TOP_MATCHES)

            logger.info(
                f"Scoring: {len(scored)} jobs scored, top {len(matches)} selected",
                extra={
                    "event": "pipeline.scoring.completed",
                    "scored": len(scored),
                    "selected": len(matches),
                },
            )
            self._log_matches(matches)

            result = PipelineRunResult(
                run_id=run_id,
                run_started_at=run_started_at,
                run_finished_at=utc_now(),
                total_fetched=sum(stats.fetched_count for stats in source_stats),
                duplicates_removed=dedup.duplicate_count,
                unique_jobs=len(dedup.jobs),
                excluded_count=len(self.hard_no_filter.exclusions),
                scored_count=len(scored),
                source_stats=source_stats,
                matches=matches,
            )

            logger.info(
                "Pipeline run completed",
                extra={
                    "event": "pipeline.run.completed",
                    "duration_ms": result.duration_ms,
                    "total_fetched": result.total_fetched,
                    "unique_jobs": result.unique_jobs,
                    "excluded": result.excluded_count,
                    "matches": len(matches),
                },
            )

            return result

    @staticmethod
    def _log_matches(matches: List[MatchResult]) -> None:
        for match in matches:
            logger.info(
                f'  Score {match.score}: "{match.job.title}" at {match.job.company}',
                extra={
                    "event": "pipeline.match",
                    "job_id": match.job.id,
                    "score": match.score,
                },
            )
            for line in match.explanation:
                logger.info(f"    {line}", extra={"event": "pipeline.match.explanation"})
