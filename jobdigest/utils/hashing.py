"""Hashing utilities for generating content-derived job identifiers.

The job id is what makes cross-provider deduplication possible: the same
title and company always hash to the same id, whichever board listed it.
"""

import hashlib


def compute_job_id(title: str, company: str) -> str:
    """Compute the stable identifier for a job posting.

    The id is a SHA256 hash of the lower-cased concatenation of title and
    company. No separator is inserted between the two values.

    Args:
        title: Job title
        company: Company name

    Returns:
        Hexadecimal string representation of SHA256 hash (64 characters)

    Example:
        >>> compute_job_id("Rust Engineer", "Acme") == compute_job_id("RUST ENGINEER", "acme")
        True
    """
    return hash_string(f"{title}{company}".lower())


def hash_string(value: str) -> str:
    """Compute SHA256 hash of a string value.

    Args:
        value: String to hash

    Returns:
        Hexadecimal string representation of SHA256 hash (64 characters)
    """
    hash_obj = hashlib.sha256(value.encode("utf-8"))
    return hash_obj.hexdigest()
