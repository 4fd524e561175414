"""Custom exceptions for job board adapters.

None of these escape ``BaseAdapter.fetch()``: they drive the retry loop and
the degrade-to-empty paths inside it.
"""


class AdapterError(Exception):
    """Base exception for all adapter errors."""

    pass


class AdapterHTTPError(AdapterError):
    """Request failed at the transport level or returned a non-2xx status.

    ``status_code`` is 0 for transport failures (DNS, connection refused ...).
    """

    def __init__(self, message: str, status_code: int = 0, url: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class AdapterTimeoutError(AdapterError):
    """A single attempt exceeded the per-attempt timeout."""

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message)
        self.url = url


class AdapterResponseError(AdapterError):
    """Response body was not JSON or did not contain the expected job array."""

    pass


class AdapterConfigurationError(AdapterError):
    """Adapter cannot run as configured, e.g. a required API token is missing."""

    pass
