"""Concurrent fetch and cross-board deduplication.

Adapters run in parallel, one worker thread each, and are joined before
anything is merged. Jobs are then concatenated in adapter order and
deduplicated by id, so the board listed first wins a duplicate.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

from jobdigest.adapters.base import BaseAdapter
from jobdigest.domain.models import Job
from jobdigest.logging import get_logger
from jobdigest.logging.context import bind_context

logger = get_logger(__name__, component="aggregator")


@dataclass
class DedupResult:
    """Outcome of deduplicating one run's jobs.

    Attributes:
        jobs: Unique jobs in concatenation order
        seen_ids: Every id encountered; pass it back in to continue the same run
        duplicate_count: Number of jobs dropped as duplicates
    """

    jobs: List[Job] = field(default_factory=list)
    seen_ids: Set[str] = field(default_factory=set)
    duplicate_count: int = 0


def fetch_all(adapters: Sequence[BaseAdapter]) -> List[List[Job]]:
    """Run every adapter's ``fetch()`` concurrently.

    Each worker runs in a snapshot of the caller's logging context. The call
    returns only after all adapters have finished.

    Returns:
        One job list per adapter, in adapter order
    """
    if not adapters:
        return []

    with ThreadPoolExecutor(
        max_workers=len(adapters), thread_name_prefix="adapter"
    ) as executor:
        futures = [executor.submit(bind_context(adapter.fetch)) for adapter in adapters]
        return [future.result() for future in futures]


def deduplicate(jobs: Sequence[Job], seen_ids: Optional[Set[str]] = None) -> DedupResult:
    """Keep the first job for each id.

    Args:
        jobs: Jobs in precedence order
        seen_ids: Ids already emitted earlier in the same run; not mutated

    Returns:
        DedupResult with the surviving jobs and the updated id set
    """
    seen = set(seen_ids) if seen_ids else set()
    unique: List[Job] = []
    duplicates = 0

    for job in jobs:
        if job.id in seen:
            duplicates += 1
            logger.debug(
                f'Duplicate removed: "{job.title}" at {job.company} ({job.source.value})',
                extra={"event": "aggregator.duplicate", "job_id": job.id},
            )
            continue
        seen.add(job.id)
        unique.append(job)

    return DedupResult(jobs=unique, seen_ids=seen, duplicate_count=duplicates)


def aggregate(per_adapter_results: Sequence[Sequence[Job]]) -> DedupResult:
    """Concatenate per-adapter results in order and deduplicate them."""
    combined: List[Job] = []
    for jobs in per_adapter_results:
        if jobs:
            logger.info(
                f"{jobs[0].source.label}: {len(jobs)} jobs",
                extra={
                    "event": "aggregator.source.counted",
                    "source": jobs[0].source.value,
                    "count": len(jobs),
                },
            )
        combined.extend(jobs)

    result = deduplicate(combined)

    logger.info(
        f"Aggregated {len(combined)} jobs, {result.duplicate_count} duplicates removed, "
        f"{len(result.jobs)} unique",
        extra={
            "event": "aggregator.completed",
            "total": len(combined),
            "duplicates": result.duplicate_count,
            "unique": len(result.jobs),
        },
    )
    return result


class JobAggregator:
    """Fetches from a fixed set of adapters and merges the results."""

    def __init__(self, adapters: Sequence[BaseAdapter]):
        self.adapters = list(adapters)
        self.last_results: List[List[Job]] = []

    def run(self) -> DedupResult:
        self.last_results = fetch_all(self.adapters)
        return aggregate(self.last_results)
