"""Ordering and truncation of scored jobs."""

from typing import List, Sequence

from jobdigest.domain.models import MatchResult

TOP_MATCHES = 10


def rank(results: Sequence[MatchResult], limit: int = TOP_MATCHES) -> List[MatchResult]:
    """Sort by score, then most recent posting, and keep the first ``limit``.

    The sort is stable, so results equal on both keys keep their input order.
    """
    ordered = sorted(
        results,
        key=lambda result: (result.score, result.job.posted_at),
        reverse=True,
    )
    return ordered[:limit]
