"""Hard-No exclusion filter applied before scoring."""

from typing import List, Sequence, Tuple

from jobdigest.domain.models import Job
from jobdigest.logging import get_logger

from .models import HardNoExclusion

logger = get_logger(__name__, component="matching")


class HardNoFilter:
    """Removes jobs containing any disqualifying substring.

    A job is excluded when any pattern (case-insensitive) occurs in its
    title, its company or one of its skills. Surviving jobs keep their
    relative order. Exclusions from the last ``apply`` call are kept on
    ``exclusions`` for auditing.
    """

    def __init__(self, hard_nos: Sequence[str]):
        self.patterns = [pattern.lower() for pattern in hard_nos]
        self.exclusions: List[HardNoExclusion] = []

    def apply(self, jobs: List[Job]) -> List[Job]:
        """Filter ``jobs``.

        With no patterns configured the input list is returned as is.

        Returns:
            Jobs that matched no pattern, in input order
        """
        self.exclusions = []

        if not self.patterns:
            logger.info(
                "No Hard No filters configured, all jobs pass through",
                extra={"event": "matching.hard_no.skipped", "count": len(jobs)},
            )
            return jobs

        passed: List[Job] = []
        for job in jobs:
            matched = self.matched_patterns(job)
            if matched:
                self.exclusions.append(HardNoExclusion(job=job, matched_patterns=matched))
                logger.info(
                    f'Hard No: excluded "{job.title}" at {job.company}, matched: {", ".join(matched)}',
                    extra={
                        "event": "matching.hard_no.excluded",
                        "job_id": job.id,
                        "patterns": list(matched),
                    },
                )
            else:
                passed.append(job)

        logger.info(
            f"Hard No filtering: {len(self.exclusions)} jobs excluded, {len(passed)} jobs remaining",
            extra={
                "event": "matching.hard_no.completed",
                "excluded": len(self.exclusions),
                "remaining": len(passed),
            },
        )
        return passed

    def matched_patterns(self, job: Job) -> Tuple[str, ...]:
        """Return the patterns found in any of the job's searchable fields."""
        searchable = [job.title.lower(), job.company.lower()]
        searchable.extend(skill.lower() for skill in job.skills)
        return tuple(
            pattern
            for pattern in self.patterns
            if any(pattern in text for text in searchable)
        )


def filter_hard_nos(jobs: List[Job], hard_nos: Sequence[str]) -> List[Job]:
    """Shortcut for ``HardNoFilter(hard_nos).apply(jobs)``."""
    return HardNoFilter(hard_nos).apply(jobs)
