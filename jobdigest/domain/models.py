"""Core domain models for jobs, match results and run status.

This module defines the values that flow through one digest run:
- Job: normalized posting produced by a source adapter, never mutated
- Salary: disclosed salary range, empty strings when not disclosed
- MatchResult: a job with its score and human-readable explanation
- RunStatus: summary record written after each run
"""

from datetime import datetime
from enum import Enum
from typing import List, Tuple
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jobdigest.utils.timestamps import ensure_utc


class JobSource(str, Enum):
    """Job boards a source adapter exists for."""

    REMOTEOK = "remoteok"
    WEB3CAREER = "web3career"

    @property
    def label(self) -> str:
        """Display name used in the digest email."""
        return _SOURCE_LABELS[self]


_SOURCE_LABELS = {
    JobSource.REMOTEOK: "Remote OK",
    JobSource.WEB3CAREER: "Web3.Career",
}


def is_absolute_url(value: str) -> bool:
    """Return True for absolute http(s) URLs with a host."""
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class Salary(BaseModel):
    """Salary range for a posting.

    ``currency`` and ``raw`` are empty strings when no salary was published;
    ``min`` and ``max`` are 0 in that case.
    """

    model_config = ConfigDict(frozen=True)

    min: float = Field(0, ge=0, description="Lower bound of the range")
    max: float = Field(0, ge=0, description="Upper bound of the range")
    currency: str = Field("", description="Currency code, empty when not disclosed")
    raw: str = Field("", description="Display string, empty when not disclosed")

    @property
    def disclosed(self) -> bool:
        return self.min > 0 or self.max > 0


class Job(BaseModel):
    """Normalized job posting.

    The ``id`` is derived from title and company only (see
    ``jobdigest.utils.hashing.compute_job_id``), so the same posting listed
    on two boards carries the same id and is removed by deduplication.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="SHA256 of lower(title + company)")
    title: str = Field(..., description="Job title")
    company: str = Field(..., description="Company name")
    url: str = Field(..., description="Absolute link to the posting")
    salary: Salary = Field(default_factory=Salary, description="Salary range")
    location: str = Field("Remote", description="Free-text location")
    remote: bool = Field(False, description="Whether the posting is remote")
    skills: Tuple[str, ...] = Field(default_factory=tuple, description="Lower-cased tags")
    posted_at: datetime = Field(..., description="When the job was posted (UTC)")
    source: JobSource = Field(..., description="Board the job was fetched from")

    @field_validator("title", "company", "url")
    @classmethod
    def strip_required(cls, v: str) -> str:
        """Strip whitespace and reject empty values."""
        if not v or not v.strip():
            raise ValueError("Field cannot be empty or whitespace-only")
        return v.strip()

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not is_absolute_url(v):
            raise ValueError(f"url must be an absolute http(s) URL, got: {v}")
        return v

    @field_validator("location")
    @classmethod
    def default_location(cls, v: str) -> str:
        """Empty locations read as remote."""
        stripped = (v or "").strip()
        return stripped or "Remote"

    @field_validator("skills")
    @classmethod
    def lowercase_skills(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        return tuple(skill.lower() for skill in v)

    @field_validator("posted_at")
    @classmethod
    def ensure_posted_at_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)


class MatchResult(BaseModel):
    """A scored job ready for ranking and the digest email."""

    model_config = ConfigDict(frozen=True)

    job: Job
    score: int = Field(..., ge=0, le=100, description="Match score")
    matched_skills: Tuple[str, ...] = Field(
        default_factory=tuple, description="Preference skills found on the job"
    )
    explanation: Tuple[str, str, str] = Field(
        ..., description="Skills, salary and remote lines, in that order"
    )


class RunStatus(BaseModel):
    """Summary of one run, persisted as JSON for monitoring."""

    timestamp: datetime
    success: bool
    jobs_fetched: int = 0
    jobs_matched: int = 0
    email_sent: bool = False
    duration_ms: int = 0
    errors: List[str] = Field(default_factory=list)
    top_matches: List[MatchResult] = Field(default_factory=list)


def format_amount(value: float) -> str:
    """Render a salary amount without a trailing ``.0`` for whole numbers."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return str(number)
