"""CLI entry point for the NBM 1D archive client."""

import argparse
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from src.archive.config import ArchiveConfig
from src.archive.nbm_store import NBMStore
from src.utils.exceptions import AmbiguousSite, NBMArchiveError
from src.utils.logger import setup_logger


def parse_time(value: str) -> datetime:
    """Parse an ISO 8601 request time for argparse."""
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid time '{value}': {e}") from e


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        description="Find and download NBM 1D forecast text files.",
    )
    parser.add_argument(
        "site",
        help="Site id, part of a site name, or a state abbreviation.",
    )
    parser.add_argument(
        "--time",
        type=parse_time,
        default=None,
        help="Request time in ISO 8601, UTC (default: now).",
    )
    parser.add_argument(
        "--most-recent",
        action="store_true",
        help="Look back through earlier runs until data is found.",
    )
    parser.add_argument(
        "--cache-path",
        type=Path,
        default=None,
        help="Local store database (default: platform data directory).",
    )
    parser.add_argument(
        "--show-data",
        action="store_true",
        help="Download the forecast and summarize its columns.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Console logging level (default: WARNING).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Validate a site request and report on it.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).
    """
    args = parse_args(argv)

    log_level = getattr(logging, args.log_level)
    logger = setup_logger("src", console_level=log_level)

    request_time = args.time or datetime.now(timezone.utc).replace(tzinfo=None)

    try:
        config = ArchiveConfig()
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    try:
        with NBMStore.connect(args.cache_path, config=config) as store:
            if args.most_recent:
                validation = store.validate_most_recent_available(args.site, request_time)
            else:
                validation = store.validate_request(args.site, request_time)

            print(f"Site: {validation.site}")
            print(f"Initialization time: {validation.initialization_time:%Y-%m-%d %H:%MZ}")

            if args.show_data:
                data = store.retrieve_data(validation)
                print(f"Rows: {len(data)}")
                print(f"Columns: {', '.join(data.columns)}")
    except AmbiguousSite as e:
        print(e.message, file=sys.stderr)
        sys.exit(1)
    except NBMArchiveError as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
