"""
Command-line interface for the stale package versions finder.
"""

import argparse
import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, Mapping, Optional

from .actions import GitHubActions
from .client import GitHubPackagesClient
from .config import ConfigurationError, load_settings
from .finder import StaleVersionFinder
from .interfaces import EnvironmentSink, PackageQueryClient
from .models import ConfigError, GitHubQueryError, QueryError, RunResult, Success
from .reporting import export_decisions_csv, format_stale_versions, log_summary


logger = logging.getLogger(__name__)

OUTPUT_VARIABLE = "STALE_VERSIONS"
LOG_PREFIX = "get-stale-packages: "


def run(
    environ: Optional[Mapping[str, str]] = None,
    client_factory: Optional[Callable[[str], PackageQueryClient]] = None,
    now: Optional[datetime] = None,
) -> RunResult:
    """Find stale versions of the configured repository.

    Args:
        environ: Environment mapping, defaults to ``os.environ``
        client_factory: Builds a query client from the token, defaults to GitHubPackagesClient
        now: Reference time for the age check

    Returns:
        Success with the stale version IDs, or the configuration/query error
    """
    try:
        settings = load_settings(os.environ if environ is None else environ)
    except ConfigurationError as e:
        return ConfigError(str(e))

    logger.info("Looking for stale package versions in %s.", settings.repository)
    client_factory = client_factory or GitHubPackagesClient
    finder = StaleVersionFinder(
        client_factory(settings.token), settings.owner, settings.name, now=now
    )
    try:
        report = finder.find()
    except GitHubQueryError as e:
        return QueryError(f"failed to query packages: {e}")

    log_summary(report)
    return Success(stale_versions=report.stale_versions, decisions=report.decisions)


def main(argv=None, sink: Optional[EnvironmentSink] = None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description=(
            "Find package versions of a GitHub repository that are older than a week "
            "and have no semver, 'latest' or 'docker-base-layer' tag"
        )
    )

    parser.add_argument(
        "--report",
        default=None,
        help="Write every version decision to this CSV file"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level. Default: INFO"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format=f"{LOG_PREFIX}%(message)s",
        stream=sys.stderr,
    )

    sink = sink or GitHubActions()
    result = run()

    if isinstance(result, (ConfigError, QueryError)):
        logger.error(result.message)
        sink.error(result.message)
        sys.exit(1)

    if args.report:
        report_file = export_decisions_csv(result.decisions, Path(args.report))
        logger.info("Decisions saved to: %s", report_file)

    stale_versions = format_stale_versions(result.stale_versions)
    logger.info("Setting %s to %r.", OUTPUT_VARIABLE, stale_versions)
    sink.set_env(OUTPUT_VARIABLE, stale_versions)


if __name__ == "__main__":
    main()
