"""Main entry point for the visa-ready marketing jobs aggregator."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

from app.config.environment import EnvironmentConfig
from app.config.exceptions import ConfigurationError
from app.config.loader import load_config
from app.config.models import AppConfig
from app.logging import get_logger
from app.logging.config import configure_logging
from app.pipeline import AggregationPipeline
from app.presentation import ListingsRenderer, PresentationError, render_json

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and settle the effective log level and format.

    Priority for both: CLI > environment > config file.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level

    if not env_config.log_format:
        env_config.log_format = app_config.logging.format

    return app_config, env_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Aggregate on-site marketing roles in target countries and flag visa support"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml if present, else built-in boards)",
    )
    parser.add_argument(
        "--format",
        choices=["json", "html"],
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write output to this file instead of stdout",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run one aggregation and emit the listings.

    Returns:
        Exit code: 0 on success (even with zero listings), 1 on configuration
        or output errors.
    """
    start_time = time.time()
    args = build_parser().parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)
        configure_logging(
            level=env_config.log_level,
            format_type=env_config.log_format,
            environment=env_config.environment,
        )

        logger.info(
            "Aggregation starting",
            extra={
                "event": "service.starting",
                "config_path": str(args.config) if args.config else None,
                "source_count": len(app_config.sources),
                "enabled_source_count": len(app_config.get_enabled_sources()),
                "output_format": args.format,
            },
        )

        result = AggregationPipeline(app_config).run_once()

        if args.format == "html":
            rendered = ListingsRenderer().render(result.listings)
        else:
            rendered = render_json(result.listings)

        if args.output:
            args.output.write_text(rendered, encoding="utf-8")
        else:
            sys.stdout.write(rendered)
            if not rendered.endswith("\n"):
                sys.stdout.write("\n")

        logger.info(
            f"Aggregation completed: {result.total_listed} listings from "
            f"{result.total_fetched} postings",
            extra={
                "event": "service.completed",
                "duration_seconds": round(time.time() - start_time, 2),
                "total_fetched": result.total_fetched,
                "total_relevant": result.total_relevant,
                "total_listed": result.total_listed,
                "had_errors": result.had_errors,
            },
        )
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1
    except PresentationError as e:
        print(f"Rendering Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Failed to write output: {e}", file=sys.stderr)
        logger.error(
            f"Failed to write output: {e}",
            extra={"event": "service.output.failed", "error_type": type(e).__name__},
        )
        return 1
    except KeyboardInterrupt:
        print("\nShutdown requested by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
