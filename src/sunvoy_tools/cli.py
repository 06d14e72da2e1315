"""Command line interface for Sunvoy tools."""

import logging
from argparse import ArgumentParser, Namespace
from sys import exit

from .config import resolve_config
from .pipeline import UserExporter
from .session import SunvoyError, SunvoySession

logger = logging.getLogger(__name__)


def fetch_users_cli():
    """Entry point for exporting Sunvoy users to users.json."""
    args = parse_fetch_users_arguments()
    config_logging(args)
    config = resolve_config(args)

    try:
        with SunvoySession(config) as session:
            UserExporter(session).export()
    except (SunvoyError, OSError) as e:
        logger.error(f"Export failed: {e}")
        exit(1)


def parse_fetch_users_arguments(argv=None) -> Namespace:
    """Parse command line arguments for fetch-users."""
    parser = make_parser("Log in to Sunvoy and export users to users.json")
    parser.add_argument("--base-url", metavar="URL", help="Sunvoy site URL")
    parser.add_argument("--api-url", metavar="URL", help="Sunvoy API URL")
    parser.add_argument(
        "--data-dir",
        metavar="DIR",
        help="Directory for session.json and users.json. "
        "Resolution order: 1. --data-dir "
        "2. $SUNVOY_DATA_DIR "
        "3. config file "
        "4. current directory",
    )
    parser.add_argument(
        "--expected-count",
        metavar="N",
        type=int,
        help="Warn unless exactly N users are exported (0 disables)",
    )
    return parser.parse_args(argv)


def make_parser(description: str) -> ArgumentParser:
    parser = ArgumentParser(description=description)
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Suppress INFO and below messages"
    )
    return parser


def config_logging(args) -> None:
    """Configure logging based on command line arguments."""
    if args.quiet:
        log_level = logging.WARNING
    elif args.verbose:
        log_level = logging.DEBUG
    else:
        log_level = logging.INFO

    logging.basicConfig(
        level=log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


if __name__ == "__main__":
    fetch_users_cli()
