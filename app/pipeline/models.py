"""Data models for pipeline execution tracking and reporting."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from app.domain.models import FinishedListing


@dataclass
class SourceRunStats:
    """
    Statistics for a single board's processing within a pipeline run.

    Attributes:
        source_id: Board token
        fetched_count: Postings returned by the list endpoint
        relevant_count: Postings that passed the title and location filter
        listed_count: Finished listings produced
        dropped_count: Relevant postings dropped because the detail was unavailable
        error_count: Number of errors encountered
        duration_seconds: Time spent processing this board
        had_errors: Whether the board failed as a whole
        error_message: Optional error message if the board failed
    """

    source_id: str
    fetched_count: int = 0
    relevant_count: int = 0
    listed_count: int = 0
    dropped_count: int = 0
    error_count: int = 0
    duration_seconds: float = 0.0
    had_errors: bool = False
    error_message: Optional[str] = None


@dataclass
class SourceOutcome:
    """Listings produced for one board, plus how that went."""

    stats: SourceRunStats
    listings: List[FinishedListing] = field(default_factory=list)

    @property
    def skipped(self) -> bool:
        return self.stats.had_errors and not self.listings


@dataclass
class PipelineRunResult:
    """
    Aggregate results from a complete pipeline execution.

    Attributes:
        run_started_at: UTC timestamp when the run began
        run_finished_at: UTC timestamp when the run completed
        listings: Finished listings across all boards, newest update first
        source_stats: Per-board execution statistics
        total_duration_seconds: Total time for the entire run
        total_fetched: Postings fetched across all boards
        total_relevant: Postings that passed the cheap filter
        total_listed: Finished listings produced
        total_errors: Errors encountered
        had_errors: Whether any board failed as a whole
    """

    run_started_at: datetime
    run_finished_at: datetime
    listings: List[FinishedListing] = field(default_factory=list)
    source_stats: List[SourceRunStats] = field(default_factory=list)
    total_duration_seconds: float = 0.0
    total_fetched: int = 0
    total_relevant: int = 0
    total_listed: int = 0
    total_errors: int = 0
    had_errors: bool = False

    def __post_init__(self):
        """Compute aggregate statistics from source stats."""
        if self.source_stats:
            self.total_fetched = sum(s.fetched_count for s in self.source_stats)
            self.total_relevant = sum(s.relevant_count for s in self.source_stats)
            self.total_errors = sum(s.error_count for s in self.source_stats)
            self.had_errors = any(s.had_errors for s in self.source_stats)
        self.total_listed = len(self.listings)

        if self.total_duration_seconds == 0.0:
            delta = self.run_finished_at - self.run_started_at
            self.total_duration_seconds = delta.total_seconds()
