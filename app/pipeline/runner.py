"""Pipeline orchestration: fetch, filter, classify and rank postings."""

import threading
import time
from typing import Dict, List, Optional
from uuid import uuid4

from app.adapters.base import BaseAdapter, is_retryable
from app.adapters.cache import ResponseCache
from app.adapters.exceptions import AdapterError
from app.adapters.factory import get_adapter
from app.config.models import AppConfig, SourceConfig
from app.domain.models import DetailDocument, FinishedListing, RawListing
from app.geography import GeographyResolver
from app.logging import get_logger
from app.logging.context import log_context
from app.matching import MatchReasonClassifier, RoleFilter, VisaClassifier, has_relocation_support
from app.normalization import TextNormalizer
from app.utils.timestamps import utc_now

from .models import PipelineRunResult, SourceOutcome, SourceRunStats

logger = get_logger(__name__, component="pipeline")

_shared_caches: Dict[int, ResponseCache] = {}
_shared_caches_lock = threading.Lock()


def shared_cache(ttl_seconds: int) -> ResponseCache:
    """Return the process-wide response cache for a TTL, creating it on first use.

    Pipelines built without an explicit cache share this one, so repeated
    runs within the TTL reuse board responses instead of refetching them.
    """
    with _shared_caches_lock:
        cache = _shared_caches.get(ttl_seconds)
        if cache is None:
            cache = _shared_caches[ttl_seconds] = ResponseCache(ttl_seconds=ttl_seconds)
        return cache


def clear_shared_caches() -> None:
    """Drop every process-wide cached response."""
    with _shared_caches_lock:
        for cache in _shared_caches.values():
            cache.clear()


def sort_listings(listings: List[FinishedListing]) -> List[FinishedListing]:
    """Order listings by updated_at descending; missing timestamps sort last.

    Timestamps are compared as strings, with None treated as "". The sort is
    stable, so ties keep board order.
    """
    return sorted(listings, key=lambda listing: listing.updated_at or "", reverse=True)


def _failure_fields(event: str, source_config: SourceConfig, error: Exception) -> dict:
    return {
        "event": event,
        "source": source_config.identifier,
        "error_type": type(error).__name__,
        "status_code": getattr(error, "status_code", None),
        "retryable": is_retryable(error),
    }


class AggregationPipeline:
    """
    Builds the curated listing set across all configured boards.

    Each board is processed independently: a board that cannot be listed is
    skipped, and a posting whose detail cannot be fetched is dropped, without
    affecting anything else in the run.
    """

    def __init__(
        self,
        app_config: AppConfig,
        resolver: Optional[GeographyResolver] = None,
        role_filter: Optional[RoleFilter] = None,
        normalizer: Optional[TextNormalizer] = None,
        visa_classifier: Optional[VisaClassifier] = None,
        reason_classifier: Optional[MatchReasonClassifier] = None,
        cache: Optional[ResponseCache] = None,
    ):
        """
        Initialize the pipeline.

        Collaborators default to instances built from app_config.matching.

        Args:
            app_config: Application configuration
            resolver: Location to country resolver
            role_filter: Title keyword filter
            normalizer: HTML to text normalizer
            visa_classifier: Visa status classifier
            reason_classifier: Match rationale classifier
            cache: Response cache shared by all board adapters; defaults to the
                process-wide cache for app_config.advanced.cache_ttl_seconds
        """
        matching = app_config.matching
        self.app_config = app_config
        self.resolver = resolver or GeographyResolver(matching.country_keywords)
        self.role_filter = role_filter or RoleFilter(matching.role_keywords)
        self.normalizer = normalizer or TextNormalizer()
        self.visa_classifier = visa_classifier or VisaClassifier(matching.visa_keywords)
        self.reason_classifier = reason_classifier or MatchReasonClassifier(
            [(rule.pattern, rule.reason) for rule in matching.match_reason_rules],
            fallback=matching.fallback_reason,
        )
        if cache is None:
            cache = shared_cache(app_config.advanced.cache_ttl_seconds)
        self.cache = cache

    def run_once(self) -> PipelineRunResult:
        """
        Process every enabled board and return the ranked listings.

        Never raises for board- or posting-level failures; those are logged
        and reflected in the per-board stats.

        Returns:
            PipelineRunResult with sorted listings and per-board stats
        """
        run_started_at = utc_now()
        run_id = uuid4().hex
        listings: List[FinishedListing] = []
        source_stats: List[SourceRunStats] = []

        with log_context(run_id=run_id):
            enabled_sources = self.app_config.get_enabled_sources()

            logger.info(
                f"Processing {len(enabled_sources)} enabled sources",
                extra={
                    "event": "pipeline.run.started",
                    "enabled_source_count": len(enabled_sources),
                    "disabled_source_count": len(self.app_config.sources) - len(enabled_sources),
                },
            )

            for source_config in enabled_sources:
                outcome = self._process_source(source_config)
                source_stats.append(outcome.stats)
                listings.extend(outcome.listings)

            result = PipelineRunResult(
                run_started_at=run_started_at,
                run_finished_at=utc_now(),
                listings=sort_listings(listings),
                source_stats=source_stats,
            )

            logger.info(
                "Pipeline run completed",
                extra={
                    "event": "pipeline.run.completed",
                    "duration_ms": int(result.total_duration_seconds * 1000),
                    "total_fetched": result.total_fetched,
                    "total_relevant": result.total_relevant,
                    "total_listed": result.total_listed,
                    "total_errors": result.total_errors,
                    "had_errors": result.had_errors,
                },
            )

        return result

    def is_relevant(self, listing: RawListing) -> bool:
        """Cheap filter: marketing title and a target-country location."""
        return self.role_filter.matches(listing.title) and self.resolver.is_target(listing.location)

    def _process_source(self, source_config: SourceConfig) -> SourceOutcome:
        """
        List, filter, fetch details and build listings for one board.

        Args:
            source_config: Configuration for the board to process

        Returns:
            SourceOutcome with the board's listings (possibly empty) and stats
        """
        source_start = time.time()
        outcome = SourceOutcome(stats=SourceRunStats(source_id=source_config.identifier))
        stats = outcome.stats

        with log_context(source_id=source_config.identifier, source_name=source_config.name):
            logger.info(
                f"Processing source: {source_config.name}",
                extra={"event": "source.run.started"},
            )

            try:
                adapter = get_adapter(source_config, self.app_config.advanced, cache=self.cache)
                raw_listings = adapter.fetch_postings(source_config)
            except Exception as e:
                stats.had_errors = True
                stats.error_count += 1
                stats.error_message = str(e)
                stats.duration_seconds = time.time() - source_start
                logger.error(
                    f"Board fetch failed for {source_config.identifier}: {e}",
                    extra=_failure_fields("source.run.failed", source_config, e),
                    exc_info=not isinstance(e, AdapterError),
                )
                return outcome

            stats.fetched_count = len(raw_listings)
            relevant = [listing for listing in raw_listings if self.is_relevant(listing)]
            stats.relevant_count = len(relevant)

            logger.debug(
                f"{stats.relevant_count} of {stats.fetched_count} postings passed the filter",
                extra={
                    "source": source_config.identifier,
                    "fetched": stats.fetched_count,
                    "relevant": stats.relevant_count,
                },
            )

            for raw_listing in relevant:
                listing = self._process_posting(adapter, source_config, raw_listing, stats)
                if listing is not None:
                    outcome.listings.append(listing)

            stats.listed_count = len(outcome.listings)
            stats.duration_seconds = time.time() - source_start

            logger.info(
                f"Source processing completed: {source_config.name}",
                extra={
                    "event": "source.run.completed",
                    "fetched": stats.fetched_count,
                    "relevant": stats.relevant_count,
                    "listed": stats.listed_count,
                    "dropped": stats.dropped_count,
                    "duration_seconds": stats.duration_seconds,
                },
            )

        return outcome

    def _process_posting(
        self,
        adapter: BaseAdapter,
        source_config: SourceConfig,
        raw_listing: RawListing,
        stats: SourceRunStats,
    ) -> Optional[FinishedListing]:
        """Fetch one posting's detail and build its listing, or None to drop it."""
        with log_context(job_id=raw_listing.id):
            try:
                detail = adapter.fetch_document(source_config, raw_listing.id)
                return self.build_listing(source_config, raw_listing, detail)
            except Exception as e:
                stats.dropped_count += 1
                stats.error_count += 1
                logger.error(
                    f"Detail processing failed for {source_config.identifier}/{raw_listing.id}: {e}",
                    extra=_failure_fields("posting.failed", source_config, e),
                    exc_info=not isinstance(e, AdapterError),
                )
                return None

    def build_listing(
        self,
        source_config: SourceConfig,
        raw_listing: RawListing,
        detail: DetailDocument,
    ) -> Optional[FinishedListing]:
        """
        Classify a posting and assemble its FinishedListing.

        Location, URL and timestamps come from the list entry's view of the
        posting where the detail lacks them.

        Args:
            source_config: Board the posting belongs to
            raw_listing: Entry from the list endpoint (already filtered)
            detail: Document from the detail endpoint

        Returns:
            FinishedListing, or None if the location no longer resolves
        """
        country = self.resolver.resolve(raw_listing.location)
        if country is None:
            return None

        normalized = self.normalizer.normalize(detail.content)
        visa = self.visa_classifier.classify(normalized.text, normalized.blocks)

        return FinishedListing(
            id=f"{source_config.identifier}-{raw_listing.id}",
            source=source_config.name,
            title=normalized.heading or raw_listing.title,
            company=source_config.name,
            country=country,
            city=raw_listing.location,
            location_label=raw_listing.location,
            onsite=True,
            visa_status=visa.status,
            visa_evidence=visa.evidence,
            relocation_support=has_relocation_support(normalized.text),
            url=detail.absolute_url or raw_listing.absolute_url,
            published_at=detail.first_published or raw_listing.first_published,
            updated_at=detail.updated_at or raw_listing.updated_at,
            match_reason=self.reason_classifier.classify(normalized.text),
            summary=normalized.summary(self.app_config.matching.summary_length),
        )


def fetch_curated_jobs(
    app_config: Optional[AppConfig] = None,
    cache: Optional[ResponseCache] = None,
) -> List[FinishedListing]:
    """Run the pipeline once with the given (or default) config and return the listings.

    Without an explicit cache, calls share the process-wide response cache,
    so a second call within the TTL makes no board requests.
    """
    pipeline = AggregationPipeline(app_config or AppConfig(), cache=cache)
    return pipeline.run_once().listings
