"""Data models for the matching stage.

This module defines the intermediate values produced while filtering and
scoring jobs, before they become ``MatchResult`` objects.
"""

from dataclasses import dataclass, field
from typing import Tuple

from jobdigest.domain.models import Job


@dataclass(frozen=True)
class HardNoExclusion:
    """A job removed by the Hard-No filter.

    Attributes:
        job: The excluded job
        matched_patterns: Lower-cased patterns found in the job's searchable fields
    """

    job: Job
    matched_patterns: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ScoreBreakdown:
    """Score of one job and the parts it was computed from.

    Attributes:
        score: Final integer score, 0 to 100
        matched_skills: Preference skills (lower-cased, in preference order) found on the job
        skill_score: Share of preference skills matched, 0 to 100
        salary_bonus: 10 when the job's minimum salary meets the user's minimum
        location_bonus: 10 when the location preference is satisfied
    """

    score: int
    matched_skills: Tuple[str, ...] = field(default_factory=tuple)
    skill_score: float = 0.0
    salary_bonus: int = 0
    location_bonus: int = 0
