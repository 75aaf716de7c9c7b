"""Base adapter class with shared functionality for all job board adapters.

This module provides the abstract base class that board adapters implement,
along with the shared HTTP request handling and response caching.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import requests

from app.config.models import SourceConfig
from app.domain.models import DetailDocument, RawListing
from app.logging import get_logger

from .cache import ResponseCache
from .exceptions import (
    AdapterConfigurationError,
    AdapterError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
)

logger = get_logger(__name__, component="adapter")


def is_retryable(error: Exception) -> bool:
    """Whether a failure is worth retrying later: a timeout or a 5xx response."""
    status_code = getattr(error, "status_code", None)
    return isinstance(error, AdapterTimeoutError) or (
        isinstance(status_code, int) and status_code >= 500
    )


class BaseAdapter(ABC):
    """Base class for all job board adapters.

    Subclasses implement fetch_postings() and fetch_document(), which raise
    AdapterError on failure. The pipeline calls those directly so it can
    record failures in its run stats. list_postings() and fetch_detail()
    wrap them for callers that only want data: a failure is logged and
    turned into an empty list or None.

    Attributes:
        timeout: HTTP request timeout in seconds
        user_agent: User-Agent header for HTTP requests
        max_jobs: Maximum postings to return per board (0 = unlimited)
        cache: Response cache shared by every request this adapter makes
    """

    def __init__(
        self,
        timeout: int = 30,
        user_agent: str = "VisaReadyJobs/1.0",
        max_jobs: int = 1000,
        cache: Optional[ResponseCache] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize adapter with configuration.

        Args:
            timeout: HTTP request timeout in seconds (range 5-300)
            user_agent: User-Agent header for requests
            max_jobs: Maximum postings to return per board (0 = unlimited)
            cache: Response cache; a fresh 30 minute cache when omitted
            session: requests.Session to reuse (mainly for tests)

        Raises:
            AdapterConfigurationError: If timeout is outside valid range or user_agent is empty
        """
        if not 5 <= timeout <= 300:
            raise AdapterConfigurationError(
                f"Timeout must be between 5 and 300 seconds, got: {timeout}"
            )
        if not user_agent or not user_agent.strip():
            raise AdapterConfigurationError("user_agent cannot be empty")

        self.timeout = timeout
        self.user_agent = user_agent.strip()
        self.max_jobs = max_jobs
        self.cache = cache if cache is not None else ResponseCache()

        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": self.user_agent, "Accept": "application/json"})

    @abstractmethod
    def fetch_postings(self, source_config: SourceConfig) -> List[RawListing]:
        """Fetch the board's posting list.

        Returns:
            RawListings in board order

        Raises:
            AdapterError: If the board cannot be listed
        """
        pass

    @abstractmethod
    def fetch_document(self, source_config: SourceConfig, job_id: str) -> DetailDocument:
        """Fetch one posting's full document.

        Raises:
            AdapterError: If the request fails or the body is unusable
        """
        pass

    def list_postings(self, source_config: SourceConfig) -> List[RawListing]:
        """Like fetch_postings(), but a failure is logged and yields []."""
        try:
            return self.fetch_postings(source_config)
        except AdapterError as e:
            self._log_failure(
                f"Failed to load board {source_config.identifier}",
                e,
                source=source_config.identifier,
            )
            return []

    def fetch_detail(self, source_config: SourceConfig, job_id: str) -> Optional[DetailDocument]:
        """Like fetch_document(), but a failure is logged and yields None."""
        try:
            return self.fetch_document(source_config, job_id)
        except AdapterError as e:
            self._log_failure(
                f"Failed to load job detail {source_config.identifier}/{job_id}",
                e,
                source=source_config.identifier,
                job_id=job_id,
            )
            return None

    def _make_request(
        self,
        url: str,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        """GET a JSON document, serving it from the cache when fresh.

        Args:
            url: URL to request
            params: Query parameters

        Returns:
            Parsed JSON response

        Raises:
            AdapterHTTPError: On 4xx/5xx status or connection failure
            AdapterTimeoutError: On request timeout
            AdapterResponseError: On invalid JSON
        """
        cache_key = requests.Request("GET", url, params=params).prepare().url
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug(
                f"Cache hit for {cache_key}",
                extra={"event": "adapter.fetch.cache_hit", "url": cache_key},
            )
            return cached

        try:
            logger.debug(
                f"HTTP GET request to {url}",
                extra={
                    "event": "adapter.fetch.request",
                    "url": url,
                    "timeout": self.timeout,
                },
            )

            response = self._session.get(url, params=params, timeout=self.timeout)

        except requests.exceptions.Timeout as e:
            raise AdapterTimeoutError(
                f"Request to {url} timed out after {self.timeout} seconds",
                url=url,
            ) from e
        except requests.exceptions.RequestException as e:
            raise AdapterHTTPError(
                f"Request to {url} failed: {e}",
                status_code=0,
                url=url,
            ) from e

        if response.status_code >= 400:
            raise AdapterHTTPError(
                f"HTTP {response.status_code}: {response.reason}",
                status_code=response.status_code,
                url=url,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise AdapterResponseError(f"Failed to parse JSON response from {url}: {e}") from e

        logger.debug(
            "HTTP request succeeded",
            extra={
                "event": "adapter.fetch.succeeded",
                "status_code": response.status_code,
                "url": url,
            },
        )
        self.cache.set(cache_key, data)
        return data

    def _log_failure(self, message: str, error: Exception, **fields: Any) -> None:
        """Log an adapter failure; timeouts and 5xx are tagged as retryable."""
        logger.error(
            f"{message}: {error}",
            extra={
                "event": "adapter.fetch.retryable_error"
                if is_retryable(error)
                else "adapter.fetch.error",
                "adapter": getattr(self, "ADAPTER_NAME", type(self).__name__),
                "error_type": type(error).__name__,
                "status_code": getattr(error, "status_code", None),
                **fields,
            },
        )

    def _truncate_jobs(self, jobs: List[Any], adapter_name: str, source_identifier: str) -> List[Any]:
        """Truncate job list to max_jobs limit if configured."""
        if self.max_jobs > 0 and len(jobs) > self.max_jobs:
            logger.warning(
                "Truncating jobs to max_jobs limit",
                extra={
                    "adapter": adapter_name,
                    "source": source_identifier,
                    "total": len(jobs),
                    "max": self.max_jobs,
                },
            )
            return jobs[: self.max_jobs]

        return jobs
