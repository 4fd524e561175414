"""Remote OK job board adapter."""

from typing import Any, List, Tuple

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from jobdigest.domain.models import Job, JobSource, Salary, format_amount, is_absolute_url
from jobdigest.utils.hashing import compute_job_id
from jobdigest.utils.timestamps import parse_provider_date

from .base import BaseAdapter
from .exceptions import AdapterResponseError


class RemoteOKRecord(BaseModel):
    """One job as published by the Remote OK API.

    Optional fields that are absent or null take their defaults: salaries 0,
    location "", tags [].
    """

    id: str
    position: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    url: str
    salary_min: float = 0
    salary_max: float = 0
    location: str = ""
    tags: List[str] = Field(default_factory=list)
    date: str

    @field_validator("id", mode="before")
    @classmethod
    def id_as_string(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("salary_min", "salary_max", "location", "tags", mode="before")
    @classmethod
    def null_as_default(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return v

    @field_validator("position", "company")
    @classmethod
    def require_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Field cannot be empty or whitespace-only")
        return v.strip()

    @field_validator("url")
    @classmethod
    def require_absolute_url(cls, v: str) -> str:
        if not is_absolute_url(v):
            raise ValueError("Input should be an absolute URL")
        return v


def normalize_remoteok_record(record: RemoteOKRecord) -> Job:
    """Convert a validated Remote OK record into a ``Job``.

    Rules:
    - every Remote OK job is remote
    - salary is USD, ``raw`` reads ``$min-$max``; both empty when min and max are 0
    - empty location becomes "Remote"
    - tags are lower-cased into skills

    Raises:
        ValueError: If the posting date cannot be parsed
    """
    posted_at = parse_provider_date(record.date)
    if posted_at is None:
        raise ValueError(f"date: unparseable value {record.date!r}")

    salary = Salary(min=record.salary_min, max=record.salary_max)
    if salary.disclosed:
        salary = salary.model_copy(
            update={
                "currency": "USD",
                "raw": f"${format_amount(salary.min)}-${format_amount(salary.max)}",
            }
        )

    return Job(
        id=compute_job_id(record.position, record.company),
        title=record.position,
        company=record.company,
        url=record.url,
        salary=salary,
        location=record.location or "Remote",
        remote=True,
        skills=tuple(tag.lower() for tag in record.tags),
        posted_at=posted_at,
        source=JobSource.REMOTEOK,
    )


class RemoteOKAdapter(BaseAdapter):
    """Adapter for the Remote OK public API.

    API Details:
        Endpoint: https://remoteok.com/api
        Method: GET
        Authentication: None (public)
        Response: JSON array; element 0 is a legal/metadata notice, jobs follow
    """

    SOURCE = JobSource.REMOTEOK
    DISPLAY_NAME = "RemoteOK"
    API_URL = "https://remoteok.com/api"
    record_model = RemoteOKRecord

    def _build_request(self) -> Tuple[str, dict]:
        return self.API_URL, {}

    def _extract_records(self, payload: Any) -> List[Any]:
        if not isinstance(payload, list):
            raise AdapterResponseError(
                f"RemoteOK returned non-array response ({type(payload).__name__})"
            )
        # First element is metadata
        return payload[1:]

    def normalize(self, record: RemoteOKRecord) -> Job:
        return normalize_remoteok_record(record)
