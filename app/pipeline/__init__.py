"""Pipeline orchestration for fetching, filtering, classifying and ranking postings."""

from .models import PipelineRunResult, SourceOutcome, SourceRunStats
from .runner import AggregationPipeline, fetch_curated_jobs, sort_listings

__all__ = [
    "AggregationPipeline",
    "fetch_curated_jobs",
    "sort_listings",
    "PipelineRunResult",
    "SourceOutcome",
    "SourceRunStats",
]
