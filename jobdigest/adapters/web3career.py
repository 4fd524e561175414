"""Web3.Career job board adapter."""

import math
from typing import Any, List, Optional, Tuple, Union

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from jobdigest.domain.models import Job, JobSource, Salary, format_amount, is_absolute_url
from jobdigest.utils.hashing import compute_job_id
from jobdigest.utils.timestamps import parse_provider_date

from .base import BaseAdapter
from .exceptions import AdapterConfigurationError, AdapterResponseError

# Position of the job array in the response envelope:
# [0] metadata string, [1] docs string, [2] jobs
JOBS_INDEX = 2


class Web3CareerRecord(BaseModel):
    """One job as published by the Web3.Career API.

    Salary values arrive as numbers, numeric strings or null.
    """

    id: int
    title: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    apply_url: str
    date: str
    is_remote: bool = False
    location: str = ""
    country: str = ""
    tags: List[str] = Field(default_factory=list)
    salary_min_value: Optional[Union[float, str]] = None
    salary_max_value: Optional[Union[float, str]] = None
    salary_currency: Optional[str] = None
    salary_unit: Optional[str] = None

    @field_validator("is_remote", "location", "country", "tags", mode="before")
    @classmethod
    def null_as_default(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return v

    @field_validator("title", "company")
    @classmethod
    def require_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Field cannot be empty or whitespace-only")
        return v.strip()

    @field_validator("apply_url")
    @classmethod
    def require_absolute_url(cls, v: str) -> str:
        if not is_absolute_url(v):
            raise ValueError("Input should be an absolute URL")
        return v


def _coerce_amount(value: Union[float, str, None]) -> float:
    """Read a salary amount; anything that is not a finite number counts as 0."""
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def normalize_web3career_salary(record: Web3CareerRecord) -> Salary:
    """Build the salary from the record's amount and currency fields.

    When a salary exists, the currency defaults to USD and the ``raw`` string
    prefixes each bound with the published currency (or ``$``).
    """
    salary = Salary(
        min=_coerce_amount(record.salary_min_value),
        max=_coerce_amount(record.salary_max_value),
    )
    if not salary.disclosed:
        return salary

    prefix = record.salary_currency or "$"
    return salary.model_copy(
        update={
            "currency": record.salary_currency or "USD",
            "raw": f"{prefix}{format_amount(salary.min)}-{prefix}{format_amount(salary.max)}",
        }
    )


def normalize_web3career_record(record: Web3CareerRecord) -> Job:
    """Convert a validated Web3.Career record into a ``Job``.

    Location falls back from ``location`` to ``country`` to "Remote"; the
    remote flag is the record's ``is_remote``.

    Raises:
        ValueError: If the posting date cannot be parsed or a salary bound is negative
    """
    posted_at = parse_provider_date(record.date)
    if posted_at is None:
        raise ValueError(f"date: unparseable value {record.date!r}")

    return Job(
        id=compute_job_id(record.title, record.company),
        title=record.title,
        company=record.company,
        url=record.apply_url,
        salary=normalize_web3career_salary(record),
        location=record.location or record.country or "Remote",
        remote=record.is_remote,
        skills=tuple(tag.lower() for tag in record.tags),
        posted_at=posted_at,
        source=JobSource.WEB3CAREER,
    )


class Web3CareerAdapter(BaseAdapter):
    """Adapter for the Web3.Career API.

    API Details:
        Endpoint: https://web3.career/api/v1
        Method: GET
        Authentication: ``token`` query parameter (WEB3_CAREER_API_KEY)
        Response: JSON array envelope; the job array is element 2
    """

    SOURCE = JobSource.WEB3CAREER
    DISPLAY_NAME = "Web3.Career"
    API_URL = "https://web3.career/api/v1"
    PAGE_LIMIT = 100
    record_model = Web3CareerRecord

    def __init__(self, api_key: Optional[str] = None, **kwargs) -> None:
        """Initialize the adapter.

        Args:
            api_key: Web3.Career API token; without it the adapter yields no jobs
            **kwargs: Passed to BaseAdapter
        """
        super().__init__(**kwargs)
        self.api_key = api_key

    def _build_request(self) -> Tuple[str, dict]:
        if not self.api_key:
            raise AdapterConfigurationError("WEB3_CAREER_API_KEY not set")
        return self.API_URL, {
            "token": self.api_key,
            "remote": "true",
            "limit": str(self.PAGE_LIMIT),
        }

    def _extract_records(self, payload: Any) -> List[Any]:
        if not isinstance(payload, list):
            raise AdapterResponseError(
                f"Web3.Career returned non-array response ({type(payload).__name__})"
            )
        if len(payload) <= JOBS_INDEX or not isinstance(payload[JOBS_INDEX], list):
            raise AdapterResponseError(
                f"Web3.Career response has no job array at index {JOBS_INDEX}"
            )
        return payload[JOBS_INDEX]

    def normalize(self, record: Web3CareerRecord) -> Job:
        return normalize_web3career_record(record)
