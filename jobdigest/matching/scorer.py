"""Preference scoring for filtered jobs.

Score components:
1. Skills: share of preference skills that exactly equal a job skill, 0 to 100
2. Salary: +10 when the job's minimum salary meets the user's minimum
3. Location: +10 when the job location contains the preferred location,
   or when the preferred location mentions "remote"

The sum is capped at 100 and rounded half up to an integer.
"""

import math
from typing import Sequence, Tuple

from jobdigest.config.models import Preferences
from jobdigest.domain.models import Job, MatchResult, format_amount

from .models import ScoreBreakdown

SALARY_BONUS = 10
LOCATION_BONUS = 10
MAX_SCORE = 100


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (12.5 -> 13).

    The built-in ``round`` rounds halves to even, which would turn 12.5 into 12.
    """
    return int(math.floor(value + 0.5))


class JobScorer:
    """Scores jobs against the user's preferences.

    Scoring is pure: the same job and preferences always give the same
    breakdown and explanation.
    """

    def __init__(self, preferences: Preferences):
        self.preferences = preferences
        self.skills = [skill.lower() for skill in preferences.skills]
        self.location = preferences.location.lower()

    def matched_skills(self, job: Job) -> Tuple[str, ...]:
        job_skills = {skill.lower() for skill in job.skills}
        return tuple(skill for skill in self.skills if skill in job_skills)

    def score(self, job: Job) -> ScoreBreakdown:
        matched = self.matched_skills(job)
        skill_score = len(matched) / len(self.skills) * 100

        salary_bonus = SALARY_BONUS if job.salary.min >= self.preferences.salary_minimum else 0

        job_location = job.location.lower()
        location_bonus = (
            LOCATION_BONUS
            if self.location in job_location or "remote" in self.location
            else 0
        )

        total = min(MAX_SCORE, skill_score + salary_bonus + location_bonus)
        return ScoreBreakdown(
            score=round_half_up(total),
            matched_skills=matched,
            skill_score=skill_score,
            salary_bonus=salary_bonus,
            location_bonus=location_bonus,
        )

    def explain(self, job: Job, matched_skills: Sequence[str]) -> Tuple[str, str, str]:
        """Build the three explanation lines: skills, salary, remote."""
        total = len(self.skills)
        if len(matched_skills) == total:
            skills_line = f"Skills: 100% match (all {total} skills)"
        else:
            skills_line = (
                f"Skills: {len(matched_skills)}/{total} match ({', '.join(matched_skills)})"
            )

        if job.salary.min > 0:
            minimum = self.preferences.salary_minimum
            if job.salary.min >= minimum:
                salary_line = f"Salary: {job.salary.raw} (meets your minimum)"
            else:
                salary_line = (
                    f"Salary: {job.salary.raw} (below your ${format_amount(minimum)} minimum)"
                )
        else:
            salary_line = "Salary: Not disclosed"

        if job.remote:
            remote_line = f"Remote: Yes ({job.location})"
        else:
            remote_line = f"Remote: Not specified ({job.location})"

        return skills_line, salary_line, remote_line

    def evaluate(self, job: Job) -> MatchResult:
        breakdown = self.score(job)
        return MatchResult(
            job=job,
            score=breakdown.score,
            matched_skills=breakdown.matched_skills,
            explanation=self.explain(job, breakdown.matched_skills),
        )
