"""Pipeline orchestration: concurrent fetch, deduplication, filtering, scoring and ranking."""

from .aggregator import DedupResult, JobAggregator, aggregate, deduplicate, fetch_all
from .models import PipelineRunResult, SourceRunStats
from .runner import DigestPipeline

__all__ = [
    "DigestPipeline",
    "PipelineRunResult",
    "SourceRunStats",
    "JobAggregator",
    "DedupResult",
    "aggregate",
    "deduplicate",
    "fetch_all",
]
