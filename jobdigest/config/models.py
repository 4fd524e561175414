"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from jobdigest.domain.models import JobSource


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


def _strip_terms(values: List[str]) -> List[str]:
    return [value.strip() for value in values if value and value.strip()]


class UserConfig(BaseModel):
    """Recipient of the digest."""

    name: str = Field(..., min_length=1, description="Display name")
    email: EmailStr = Field(..., description="Address the digest is sent to")
    timezone: str = Field("UTC", description="IANA timezone for local timestamps")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v


class Preferences(BaseModel):
    """What the user is looking for; drives scoring."""

    model_config = ConfigDict(populate_by_name=True)

    skills: List[str] = Field(..., min_length=1, description="Skills to match against job tags")
    salary_minimum: float = Field(
        ..., gt=0, alias="salaryMinimum", description="Minimum acceptable salary"
    )
    location: str = Field(..., description="Preferred location, 'remote' matches anywhere")

    @field_validator("skills")
    @classmethod
    def normalize_skills(cls, v: List[str]) -> List[str]:
        """Strip whitespace and drop blank entries; at least one must remain."""
        stripped = _strip_terms(v)
        if not stripped:
            raise ValueError("At least one skill required")
        return stripped


class SourceConfig(BaseModel):
    """One job board to fetch from. List order is deduplication precedence."""

    type: JobSource = Field(..., description="Job board (remoteok, web3career)")
    enabled: bool = Field(True, description="Whether to fetch from this board")


def _default_sources() -> List[SourceConfig]:
    return [SourceConfig(type=source) for source in JobSource]


class EmailConfig(BaseModel):
    """Digest delivery settings."""

    use_tls: bool = Field(True, description="Use TLS/STARTTLS for the SMTP connection")
    sender_name: str = Field("Job Digest", min_length=1, description="From display name")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(LogFormat.KEY_VALUE, description="Log output format")

    model_config = ConfigDict(use_enum_values=True)


class AdvancedConfig(BaseModel):
    """HTTP and storage settings for the fetch stage."""

    http_request_timeout: float = Field(
        30, gt=0, le=300, description="Per-attempt timeout for job board calls (seconds)"
    )
    max_retries: int = Field(
        2, ge=0, le=10, description="Retries after the first attempt (2 means 3 attempts)"
    )
    retry_delay_seconds: float = Field(
        3, ge=0, le=60, description="Fixed delay between attempts (seconds)"
    )
    user_agent: str = Field(
        "job-digest/1.0", min_length=1, description="User-Agent string for HTTP requests"
    )
    data_dir: str = Field("data", min_length=1, description="Directory for raw data and run status")

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty")
        return stripped


class AppConfig(BaseModel):
    """Root configuration object for the job digest."""

    model_config = ConfigDict(populate_by_name=True)

    user: UserConfig = Field(..., description="Digest recipient")
    preferences: Preferences = Field(..., description="Matching preferences")
    hard_nos: List[str] = Field(
        default_factory=list,
        alias="hardNos",
        description="Substrings that exclude a job outright",
    )
    sources: List[SourceConfig] = Field(
        default_factory=_default_sources, description="Job boards, in precedence order"
    )
    email: EmailConfig = Field(default_factory=EmailConfig, description="Email settings")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")
    advanced: AdvancedConfig = Field(default_factory=AdvancedConfig, description="Advanced settings")

    @field_validator("hard_nos")
    @classmethod
    def normalize_hard_nos(cls, v: List[str]) -> List[str]:
        return _strip_terms(v)

    @model_validator(mode="after")
    def validate_sources(self):
        """Reject boards listed more than once."""
        seen = set()
        for source in self.sources:
            if source.type in seen:
                raise ValueError(f"Duplicate source: {source.type.value} appears multiple times")
            seen.add(source.type)
        return self

    def get_enabled_sources(self) -> List[SourceConfig]:
        """Get enabled sources in configured order."""
        return [source for source in self.sources if source.enabled]
