"""Utility functions for hashing and time handling."""

from .hashing import compute_job_id, hash_string
from .timestamps import (
    ensure_utc,
    file_timestamp,
    format_timestamp,
    parse_iso_datetime,
    parse_provider_date,
    utc_now,
)

__all__ = [
    # Hashing
    "compute_job_id",
    "hash_string",
    # Timestamps
    "utc_now",
    "ensure_utc",
    "parse_iso_datetime",
    "parse_provider_date",
    "format_timestamp",
    "file_timestamp",
]
