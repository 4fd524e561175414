"""Domain models for the job digest."""

from .models import Job, JobSource, MatchResult, RunStatus, Salary, format_amount

__all__ = ["Job", "JobSource", "Salary", "MatchResult", "RunStatus", "format_amount"]
