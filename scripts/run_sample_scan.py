#!/usr/bin/env python3
"""Sample aggregation harness.

Runs the pipeline once and prints what it found, without going through
pytest. Two modes:

1. Fixture mode (default): boards are served from a YAML fixture file
2. Real endpoint mode: talks to the live Greenhouse API (requires network)

Usage:
    # Run with fixtures (no network required)
    python scripts/run_sample_scan.py

    # Run with real endpoints
    SAMPLE_REAL_RUN=1 python scripts/run_sample_scan.py --config config.yaml

    # Custom fixtures file
    python scripts/run_sample_scan.py --fixtures tests/fixtures/boards.yaml
"""

import argparse
import os
import sys
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from app.config.exceptions import ConfigurationError
from app.config.loader import load_config
from app.config.models import AppConfig, SourceConfig
from app.logging.config import configure_logging
from app.pipeline import AggregationPipeline
from tests.helpers.fixture_adapter import FixtureAdapter, load_fixture_boards


def print_header(title: str):
    """Print a formatted section header."""
    width = 80
    print("\n" + "=" * width)
    print(f" {title}")
    print("=" * width + "\n")


def print_summary_table(result):
    """Print run totals and the per-board breakdown."""
    print_header("Pipeline Execution Summary")

    metrics = [
        ("Postings Fetched", result.total_fetched),
        ("Postings Relevant", result.total_relevant),
        ("Listings Produced", result.total_listed),
        ("Errors", result.total_errors),
        ("Had Errors", "Yes" if result.had_errors else "No"),
        ("Duration (seconds)", f"{result.total_duration_seconds:.2f}"),
    ]

    max_label_width = max(len(label) for label, _ in metrics)

    print("┌" + "─" * (max_label_width + 2) + "┬" + "─" * 22 + "┐")
    print(f"│ {'Metric':<{max_label_width}} │ {'Value':<20} │")
    print("├" + "─" * (max_label_width + 2) + "┼" + "─" * 22 + "┤")
    for label, value in metrics:
        print(f"│ {label:<{max_label_width}} │ {str(value):<20} │")
    print("└" + "─" * (max_label_width + 2) + "┴" + "─" * 22 + "┘")

    if result.source_stats:
        print("\n" + "-" * 80)
        print(" Per-Board Breakdown")
        print("-" * 80 + "\n")

        for stats in result.source_stats:
            print(f"Board: {stats.source_id}")
            print(f"  Fetched: {stats.fetched_count}")
            print(f"  Relevant: {stats.relevant_count}")
            print(f"  Listed: {stats.listed_count}")
            print(f"  Dropped: {stats.dropped_count}")
            if stats.error_message:
                print(f"  Error Message: {stats.error_message}")
            print()


def print_listings(listings):
    print_header(f"Listings ({len(listings)})")
    for listing in listings:
        print(f"{listing.title} @ {listing.company} [{listing.country}]")
        print(f"  {listing.visa_status.value}: {listing.visa_evidence or '-'}")
        print(f"  {listing.match_reason}")
        print(f"  updated {listing.updated_at or 'unknown'}  {listing.url}\n")


def fixture_config(fixtures: Path) -> AppConfig:
    """One source per board in the fixture file."""
    boards = load_fixture_boards(fixtures)
    return AppConfig(
        sources=[SourceConfig(name=token.title(), identifier=token) for token in boards]
    )


def main():
    """Main entry point for the sample harness."""
    parser = argparse.ArgumentParser(
        description="Run a sample aggregation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file for real endpoint mode (default: built-in boards)",
    )
    parser.add_argument(
        "--fixtures",
        type=Path,
        default=Path("tests/fixtures/boards.yaml"),
        help="Path to fixtures YAML file (default: tests/fixtures/boards.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: WARNING)",
    )
    args = parser.parse_args()

    load_dotenv()
    use_real_endpoints = os.environ.get("SAMPLE_REAL_RUN", "0") == "1"

    print_header("Visa-ready Marketing Jobs - Sample Harness")

    configure_logging(level=args.log_level, format_type="key-value", environment="sample")

    try:
        if use_real_endpoints:
            print("REAL ENDPOINT MODE: requests go to the live board API")
            app_config, _ = load_config(args.config)
        else:
            if not args.fixtures.exists():
                print(f"Error: Fixture file not found: {args.fixtures}")
                print("   Run with SAMPLE_REAL_RUN=1 to use real endpoints instead.")
                return 1
            print(f"Fixture mode: {args.fixtures}")
            app_config = fixture_config(args.fixtures)
    except ConfigurationError as e:
        print(f"Configuration Error: {e}")
        return 1

    print(f"{len(app_config.get_enabled_sources())} boards enabled")
    print(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    pipeline = AggregationPipeline(app_config)
    if use_real_endpoints:
        result = pipeline.run_once()
    else:
        with patch("app.pipeline.runner.get_adapter") as mock_get_adapter:
            mock_get_adapter.return_value = FixtureAdapter(args.fixtures)
            result = pipeline.run_once()

    print_summary_table(result)
    print_listings(result.listings)

    return 1 if result.had_errors else 0


if __name__ == "__main__":
    sys.exit(main())
