#!/usr/bin/env python3
"""
ReleaseUtil command line

Streamlines getting error and stats information about release deployments.

Usage:
    release-util errors -p https://dev.azure.com/fabrikam -n Fabrikam -r "Web App Release"
    release-util stats -p https://dev.azure.com/fabrikam -n Fabrikam -r "Web App Release" \\
        -d 2023-01-01 2023-01-31 -e Production
    python -m release_util stats --from-file deployments.json -n Fabrikam -r "Web App Release"

Credentials come from ADO_PAT (environment or .env file).

Every outcome, including argument errors, is printed to stdout and the
process exits 0.
"""

import argparse
import sys
from collections.abc import Callable
from pathlib import Path

from . import __version__
from .collectors.payload_collector import PayloadCollector
from .collectors.release_collector import ReleaseCollector
from .core.logging_config import get_logger, setup_logging
from .domain.constants import release_query
from .reports.commands import DeploymentSource, ReportRequest, run_errors, run_stats
from .secure_config import get_config

logger = get_logger(__name__)

HINT = "Specify --help for a list of available options and commands."

REQUIRED_OPTIONS = (
    ("project_collection_url", "--project-collection-url"),
    ("project_name", "--project-name"),
    ("release_definition_name", "--release-definition-name"),
)


class CommandParsingError(Exception):
    """Raised instead of exiting when the command line cannot be parsed."""

    pass


class ReleaseUtilArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises CommandParsingError rather than exiting with status 2."""

    def error(self, message: str):
        raise CommandParsingError(message)


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not a valid whole number") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive number, got {number}")
    return number


def _add_report_options(command: argparse.ArgumentParser, top_help: str) -> None:
    command.add_argument("-p", "--project-collection-url", help="Required - project collection url")
    command.add_argument("-n", "--project-name", help="Required - project name")
    command.add_argument("-r", "--release-definition-name", help="Required - release definition name")
    command.add_argument(
        "-t",
        "--top",
        type=positive_int,
        default=release_query.DEFAULT_TOP_COUNT,
        help=f"{top_help} (default: {release_query.DEFAULT_TOP_COUNT})",
    )
    command.add_argument(
        "-d",
        "--date-range",
        nargs="+",
        action="extend",
        metavar="DATE",
        help="Ability to filter by providing a date range. Must provide both a start and end date",
    )
    command.add_argument("-rn", "--release-name", help="Ability to filter by release name")
    command.add_argument("-e", "--environment-name", help="Ability to filter by environment name")
    command.add_argument(
        "--from-file",
        type=Path,
        metavar="PATH",
        help="Read deployments from a saved payload instead of the release service",
    )


def build_parser() -> ReleaseUtilArgumentParser:
    parser = ReleaseUtilArgumentParser(
        prog="release-util",
        description="Command line util to help streamline the process of getting information and errors about releases.",
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", help="Log level (overrides RELEASE_UTIL_LOG_LEVEL)")
    parser.add_argument("--json-logs", action="store_true", help="Write logs to stderr as JSON")

    commands = parser.add_subparsers(dest="command", metavar="{errors,stats}")

    errors = commands.add_parser(
        "errors",
        help="Errors command used to return release deployment errors",
        description="The errors command can be used to return error information experienced by releases.",
    )
    _add_report_options(errors, "Top count option to specify how many errors to return")
    errors.set_defaults(handler=run_errors)

    stats = commands.add_parser(
        "stats",
        help="Stats command used to return release deployment stats",
        description="The stats command can be used to return stats information about release deployments.",
    )
    _add_report_options(stats, "Top count option to specify how many deployments to summarize")
    stats.set_defaults(handler=run_stats)

    return parser


def _check_required(args: argparse.Namespace) -> None:
    if args.from_file:
        return
    for attribute, option in REQUIRED_OPTIONS:
        if not getattr(args, attribute):
            raise CommandParsingError(f"The {option} field is required.")


def _configure_logging(args: argparse.Namespace) -> None:
    logging_config = get_config().get_logging_config()
    setup_logging(
        level=args.log_level or logging_config.level,
        log_file=logging_config.log_file,
        json_output=args.json_logs or logging_config.json_output,
    )


def _open_source(args: argparse.Namespace) -> DeploymentSource:
    if args.from_file:
        return PayloadCollector.from_file(args.from_file)
    return ReleaseCollector(args.project_collection_url, args.project_name, args.release_definition_name)


def execute(args: argparse.Namespace) -> str:
    """Run the selected command and return the text to print."""
    handler: Callable[[DeploymentSource, ReportRequest], str] = args.handler
    request = ReportRequest(
        top_count=args.top,
        date_range=args.date_range,
        release_name=args.release_name,
        environment_name=args.environment_name,
    )
    return handler(_open_source(args), request)


def main(argv: list[str] | None = None) -> int:
    """
    Parse the command line, run the command and print the result.

    Returns:
        Always 0; failures are reported on stdout
    """
    parser = build_parser()

    try:
        args = parser.parse_args(argv)
        if args.command is None:
            print(HINT)
            return 0

        _check_required(args)
        _configure_logging(args)
        print(execute(args))
    except CommandParsingError as e:
        print(e)
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Unable to execute application: {e}")

    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
