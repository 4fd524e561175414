"""Filtering, scoring and ranking of aggregated jobs.

This module provides:
- HardNoFilter / filter_hard_nos: drop jobs containing disqualifying terms
- JobScorer: 0 to 100 preference score with a three-line explanation
- rank: ordering by score and recency, capped at TOP_MATCHES
"""

from .filters import HardNoFilter, filter_hard_nos
from .models import HardNoExclusion, ScoreBreakdown
from .ranker import TOP_MATCHES, rank
from .scorer import JobScorer, round_half_up

__all__ = [
    "HardNoFilter",
    "filter_hard_nos",
    "HardNoExclusion",
    "ScoreBreakdown",
    "JobScorer",
    "round_half_up",
    "rank",
    "TOP_MATCHES",
]
