"""Template context for the digest email."""

from typing import Any, Dict, List, Sequence

from jobdigest.domain.models import MatchResult
from jobdigest.utils.timestamps import format_timestamp


def build_match_card(match: MatchResult) -> Dict[str, Any]:
    """Flatten one match into the fields a job card displays."""
    job = match.job
    return {
        "job_id": job.id,
        "title": job.title,
        "company": job.company,
        "url": job.url,
        "location": job.location,
        "score": match.score,
        "salary_text": job.salary.raw or "Not disclosed",
        "explanation": list(match.explanation),
        "source_label": job.source.label,
        "posted_at": format_timestamp(job.posted_at),
    }


def build_digest_context(matches: Sequence[MatchResult]) -> Dict[str, Any]:
    """Build the context shared by the subject and body templates.

    Returns:
        Dictionary with keys:
        - matches: One card dict per match, in ranked order
        - match_count: Number of matches
    """
    cards: List[Dict[str, Any]] = [build_match_card(match) for match in matches]
    return {
        "matches": cards,
        "match_count": len(cards),
    }
