"""Job Digest: aggregate, filter, score and email a daily list of job matches."""

__version__ = "1.0.0"
