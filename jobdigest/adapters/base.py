"""Base adapter class with the fetch, retry and validation flow shared by all boards.

A concrete adapter only describes its provider: how to build the request,
where the job array sits in the response, the pydantic schema of one record
and how a validated record becomes a ``Job``. Everything else (retries,
timeouts, per-record validation, raw-data hand-off and the never-raise
contract of ``fetch()``) lives here.
"""

import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Dict, List, Optional, Protocol, Tuple, Type

import requests
from pydantic import BaseModel, ValidationError

from jobdigest.domain.models import Job, JobSource
from jobdigest.logging import get_logger
from jobdigest.logging.context import bind_context, log_context

from .exceptions import (
    AdapterConfigurationError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
)

logger = get_logger(__name__, component="adapter")

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_RETRIES = 2
DEFAULT_RETRY_DELAY_SECONDS = 3.0
DEFAULT_USER_AGENT = "job-digest/1.0"
BODY_CHUNK_SIZE = 64 * 1024


class RawRecordSink(Protocol):
    """Receives validated raw records for auditing."""

    def save(self, provider: str, records: List[Dict[str, Any]]) -> Any: ...


class BaseAdapter(ABC):
    """Base class for all job board adapters.

    Attributes:
        timeout: Per-attempt HTTP timeout in seconds
        max_retries: Retries after the first attempt (total attempts = max_retries + 1)
        retry_delay: Fixed delay between attempts in seconds
        user_agent: User-Agent header for HTTP requests
        raw_sink: Optional sink for validated raw records
    """

    SOURCE: ClassVar[JobSource]
    DISPLAY_NAME: ClassVar[str]
    record_model: ClassVar[Type[BaseModel]]

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay: float = DEFAULT_RETRY_DELAY_SECONDS,
        user_agent: str = DEFAULT_USER_AGENT,
        raw_sink: Optional[RawRecordSink] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize adapter with HTTP and retry settings.

        Args:
            timeout: Per-attempt timeout in seconds (must be positive)
            max_retries: Retries after the first attempt (0 or more)
            retry_delay: Delay between attempts in seconds (0 or more)
            user_agent: User-Agent header for requests
            raw_sink: Optional sink receiving ``(provider, records)`` after each fetch
            sleep: Function used to wait between attempts

        Raises:
            AdapterConfigurationError: If a setting is out of range
        """
        if timeout <= 0:
            raise AdapterConfigurationError(f"Timeout must be positive, got: {timeout}")
        if max_retries < 0:
            raise AdapterConfigurationError(f"max_retries cannot be negative, got: {max_retries}")
        if retry_delay < 0:
            raise AdapterConfigurationError(f"retry_delay cannot be negative, got: {retry_delay}")
        if not user_agent or not user_agent.strip():
            raise AdapterConfigurationError("user_agent cannot be empty")

        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.user_agent = user_agent.strip()
        self.raw_sink = raw_sink
        self._sleep = sleep

        self._session = requests.Session()
        self._session.headers.update({"User-Agent": self.user_agent})

    @property
    def name(self) -> str:
        """Provider tag, also used as the raw data file prefix."""
        return self.SOURCE.value

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    # ------------------------------------------------------------------
    # Provider hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _build_request(self) -> Tuple[str, Dict[str, str]]:
        """Return the URL and query parameters to fetch.

        Raises:
            AdapterConfigurationError: If a required credential is missing
        """

    @abstractmethod
    def _extract_records(self, payload: Any) -> List[Any]:
        """Locate the job array inside the decoded response.

        Raises:
            AdapterResponseError: If the payload does not have the expected shape
        """

    @abstractmethod
    def normalize(self, record: BaseModel) -> Job:
        """Convert one validated record into a ``Job``.

        Raises:
            ValueError: If the record cannot be normalized (e.g. unparseable date)
        """

    # ------------------------------------------------------------------
    # Shared flow
    # ------------------------------------------------------------------

    def fetch(self) -> List[Job]:
        """Fetch, validate and normalize jobs from the provider.

        Never raises. Missing credentials, exhausted retries, malformed
        responses and unexpected errors all degrade to an empty list.

        Returns:
            Normalized jobs in provider order
        """
        with log_context(source=self.name):
            try:
                url, params = self._build_request()
            except AdapterConfigurationError as e:
                logger.warning(
                    f"{self.DISPLAY_NAME} disabled: {e}",
                    extra={"event": "adapter.disabled", "reason": str(e)},
                )
                return []

            logger.info(
                f"Fetching jobs from {self.DISPLAY_NAME}",
                extra={"event": "adapter.fetch.started", "url": url},
            )

            try:
                response = self._fetch_with_retry(url, params)
                if response is None:
                    return []

                records = self._extract_records(self._decode_json(response, url))
                jobs, valid_records = self._parse_records(records)

            except AdapterResponseError as e:
                logger.warning(
                    f"{self.DISPLAY_NAME} response unusable: {e}",
                    extra={"event": "adapter.response.invalid", "url": url},
                )
                return []
            except Exception as e:
                logger.error(
                    f"Unexpected error fetching from {self.DISPLAY_NAME}: {e}",
                    extra={"event": "adapter.fetch.error", "error_type": type(e).__name__},
                    exc_info=True,
                )
                return []

            logger.info(
                f"{self.DISPLAY_NAME}: {len(jobs)} valid jobs ({len(records) - len(jobs)} skipped)",
                extra={
                    "event": "adapter.fetch.completed",
                    "count": len(jobs),
                    "skipped": len(records) - len(jobs),
                },
            )
            for job in jobs:
                logger.debug(
                    f'[{self.DISPLAY_NAME}] "{job.title}" at {job.company}',
                    extra={"event": "adapter.job.accepted", "job_id": job.id},
                )

            self._save_raw(valid_records)
            return jobs

    def _fetch_with_retry(self, url: str, params: Dict[str, str]) -> Optional[requests.Response]:
        """Request ``url`` up to ``max_attempts`` times.

        Attempts are strictly sequential with ``retry_delay`` between them and
        no delay after the last one.

        Returns:
            The first successful response, or None once attempts are exhausted
        """
        for attempt in range(1, self.max_attempts + 1):
            try:
                return self._make_request(url, params=params)
            except (AdapterHTTPError, AdapterTimeoutError) as e:
                logger.warning(
                    f"{e} (attempt {attempt}/{self.max_attempts})",
                    extra={
                        "event": "adapter.fetch.attempt_failed",
                        "attempt": attempt,
                        "max_attempts": self.max_attempts,
                        "status_code": getattr(e, "status_code", None),
                        "error_type": type(e).__name__,
                    },
                )

            if attempt < self.max_attempts:
                self._sleep(self.retry_delay)

        logger.warning(
            f"{url} all {self.max_attempts} attempts failed, returning empty",
            extra={"event": "adapter.fetch.exhausted", "max_attempts": self.max_attempts},
        )
        return None

    def _make_request(self, url: str, params: Optional[Dict[str, str]] = None) -> requests.Response:
        """Perform one GET attempt, bounded end to end by ``timeout``.

        requests only applies its timeout to the connect and to each socket
        read, so a server trickling its body could hold the attempt open
        indefinitely. The attempt runs on a daemon thread that is abandoned
        once the deadline passes.

        Returns:
            Response whose body has been fully read

        Raises:
            AdapterHTTPError: On non-2xx status or transport failure
            AdapterTimeoutError: When the attempt exceeds ``timeout``
        """
        deadline = time.monotonic() + self.timeout
        outcome: Dict[str, Any] = {}

        def attempt() -> None:
            try:
                outcome["response"] = self._get(url, params, deadline)
            except Exception as e:
                outcome["error"] = e

        worker = threading.Thread(
            target=bind_context(attempt), name=f"{self.name}-request", daemon=True
        )
        worker.start()
        worker.join(max(0.0, deadline - time.monotonic()))

        if worker.is_alive():
            raise AdapterTimeoutError(f"{url} timed out after {self.timeout} seconds", url=url)
        if "error" in outcome:
            raise outcome["error"]
        return outcome["response"]

    def _get(
        self, url: str, params: Optional[Dict[str, str]], deadline: float
    ) -> requests.Response:
        logger.debug(
            f"HTTP GET {url}",
            extra={"event": "adapter.fetch.request", "url": url, "timeout": self.timeout},
        )

        try:
            response = self._session.get(url, params=params, timeout=self.timeout, stream=True)
        except requests.exceptions.Timeout as e:
            raise AdapterTimeoutError(
                f"{url} timed out after {self.timeout} seconds", url=url
            ) from e
        except requests.exceptions.RequestException as e:
            raise AdapterHTTPError(f"{url} fetch failed: {e}", status_code=0, url=url) from e

        if not response.ok:
            response.close()
            raise AdapterHTTPError(
                f"{url} returned {response.status_code}",
                status_code=response.status_code,
                url=url,
            )

        chunks: List[bytes] = []
        try:
            for chunk in response.iter_content(chunk_size=BODY_CHUNK_SIZE):
                if time.monotonic() > deadline:
                    raise AdapterTimeoutError(
                        f"{url} timed out after {self.timeout} seconds reading the body",
                        url=url,
                    )
                chunks.append(chunk)
        except requests.exceptions.RequestException as e:
            raise AdapterHTTPError(
                f"{url} body read failed: {e}", status_code=response.status_code, url=url
            ) from e
        finally:
            response.close()

        # The stream is consumed; keep the body for response.json()
        response._content = b"".join(chunks)
        return response

    @staticmethod
    def _decode_json(response: requests.Response, url: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise AdapterResponseError(f"Failed to parse JSON response from {url}: {e}") from e

    def _parse_records(self, records: List[Any]) -> Tuple[List[Job], List[Dict[str, Any]]]:
        """Validate and normalize records one at a time.

        A record that fails validation or normalization is logged and
        skipped; the rest of the batch is unaffected.

        Returns:
            Tuple of (jobs, validated raw records as JSON-ready dicts)
        """
        jobs: List[Job] = []
        valid_records: List[Dict[str, Any]] = []

        for index, item in enumerate(records):
            try:
                record = self.record_model.model_validate(item)
                job = self.normalize(record)
            except ValueError as e:
                logger.warning(
                    f"Skipping invalid {self.DISPLAY_NAME} job: {_describe_error(e)}",
                    extra={"event": "adapter.record.skipped", "index": index},
                )
                continue

            jobs.append(job)
            valid_records.append(record.model_dump(mode="json"))

        return jobs, valid_records

    def _save_raw(self, records: List[Dict[str, Any]]) -> None:
        if self.raw_sink is None:
            return
        try:
            self.raw_sink.save(self.name, records)
        except Exception as e:
            logger.warning(
                f"Raw data sink failed for {self.DISPLAY_NAME}: {e}",
                extra={"event": "adapter.raw_sink.failed", "error_type": type(e).__name__},
            )


def _describe_error(error: ValueError) -> str:
    """Summarize the first validation issue, e.g. ``url: Input should be ...``."""
    if isinstance(error, ValidationError):
        issues = error.errors()
        if issues:
            first = issues[0]
            location = ".".join(str(part) for part in first["loc"]) or "record"
            return f"{location}: {first['msg']}"
    return str(error)
