"""Greenhouse job board adapter implementation."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import ValidationError

from app.config.defaults import GREENHOUSE_API_BASE_URL
from app.config.models import SourceConfig
from app.domain.models import DetailDocument, RawListing
from app.logging import get_logger

from .base import BaseAdapter
from .exceptions import AdapterResponseError

logger = get_logger(__name__, component="adapter")


class GreenhouseAdapter(BaseAdapter):
    """Adapter for Greenhouse public job boards.

    API Details:
        List:   GET {base}/boards/{token}/jobs -> {"jobs": [...]}
        Detail: GET {base}/boards/{token}/jobs/{id} -> job object with HTML "content"
        Authentication: None (public)
    """

    ADAPTER_NAME = "greenhouse"

    def __init__(self, *args: Any, api_base_url: str = GREENHOUSE_API_BASE_URL, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.api_base_url = api_base_url.rstrip("/")

    def jobs_url(self, source_config: SourceConfig) -> str:
        return f"{self.api_base_url}/boards/{source_config.identifier}/jobs"

    def fetch_postings(self, source_config: SourceConfig) -> List[RawListing]:
        """Fetch the board's posting list.

        Malformed entries are skipped with a warning.

        Args:
            source_config: Source configuration with identifier (board token)

        Returns:
            List of RawListing objects in board order

        Raises:
            AdapterError: If the request fails or the body is not a job list
        """
        url = self.jobs_url(source_config)

        logger.info(
            "Fetching postings from Greenhouse",
            extra={
                "event": "adapter.list.started",
                "adapter": self.ADAPTER_NAME,
                "source": source_config.identifier,
                "url": url,
            },
        )

        response = self._make_request(url)

        if not isinstance(response, dict):
            raise AdapterResponseError(
                f"Expected JSON object response, got {type(response).__name__}"
            )

        jobs_data = response.get("jobs") or []
        if not isinstance(jobs_data, list):
            raise AdapterResponseError(
                f"Expected 'jobs' field to be array, got {type(jobs_data).__name__}"
            )

        jobs_data = self._truncate_jobs(jobs_data, self.ADAPTER_NAME, source_config.identifier)

        listings = []
        for job in jobs_data:
            listing = self._transform_listing(job, source_config)
            if listing is not None:
                listings.append(listing)

        logger.info(
            "Successfully fetched postings from Greenhouse",
            extra={
                "event": "adapter.list.completed",
                "adapter": self.ADAPTER_NAME,
                "source": source_config.identifier,
                "count": len(listings),
            },
        )
        return listings

    def fetch_document(self, source_config: SourceConfig, job_id: str) -> DetailDocument:
        """Fetch one posting's full document.

        Args:
            source_config: Source configuration with identifier (board token)
            job_id: Posting ID from the list endpoint

        Raises:
            AdapterError: If the request fails or the body is unusable
        """
        url = f"{self.jobs_url(source_config)}/{job_id}"

        response = self._make_request(url)
        if not isinstance(response, dict):
            raise AdapterResponseError(
                f"Expected JSON object response, got {type(response).__name__}"
            )
        return self._transform_detail(response, job_id)

    def _transform_listing(self, job: Any, source_config: SourceConfig) -> Optional[RawListing]:
        """Transform a list entry to a RawListing, or None if it is malformed."""
        if not isinstance(job, dict):
            logger.warning(
                "Skipping non-object Greenhouse job entry",
                extra={"adapter": self.ADAPTER_NAME, "source": source_config.identifier},
            )
            return None

        try:
            return RawListing(
                id=job.get("id"),
                title=job.get("title"),
                location=self._location_name(job),
                absolute_url=job.get("absolute_url"),
                first_published=job.get("first_published"),
                updated_at=job.get("updated_at"),
            )
        except ValidationError as e:
            logger.warning(
                "Failed to transform Greenhouse job",
                extra={
                    "adapter": self.ADAPTER_NAME,
                    "source": source_config.identifier,
                    "job_id": job.get("id"),
                    "error": str(e),
                },
            )
            return None

    def _transform_detail(self, job: dict, job_id: str) -> DetailDocument:
        """Transform a detail response to a DetailDocument."""
        departments = [
            d["name"]
            for d in job.get("departments") or []
            if isinstance(d, dict) and d.get("name")
        ]
        metadata = [
            item for item in job.get("metadata") or [] if isinstance(item, dict) and item.get("name")
        ]

        try:
            return DetailDocument(
                id=job.get("id") or job_id,
                content=job.get("content"),
                location=self._location_name(job),
                absolute_url=job.get("absolute_url"),
                first_published=job.get("first_published"),
                updated_at=job.get("updated_at"),
                metadata=metadata,
                departments=departments,
            )
        except ValidationError as e:
            raise AdapterResponseError(f"Unexpected detail payload for job {job_id}: {e}") from e

    @staticmethod
    def _location_name(job: dict) -> str:
        location = job.get("location")
        if isinstance(location, dict):
            return location.get("name") or ""
        return ""
