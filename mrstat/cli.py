"""
mrstat command line interface.

Prints the open merge requests of a project, split into ready and blocked.
Only the report is written to stdout so it can be piped, e.g. ``mrstat | pbcopy``.
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from dataclasses import replace

from mrstat import __version__
from mrstat.client import AsyncMRStatClient
from mrstat.config import MRStatConfig, load_config
from mrstat.exceptions import MRStatError
from mrstat.logging import configure_logging, get_logger
from mrstat.report import Report, group_merge_requests

logger = get_logger()

BEGIN_MARKER = "===== BEGIN MARKDOWN ====="
END_MARKER = "===== END MARKDOWN ====="


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mrstat",
        description="Summarize open merge requests as ready to merge or blocked.",
    )
    parser.add_argument(
        "--config",
        help="configuration file (default: $MRSTAT_CONFIG or ~/.mrstat.json)",
    )
    parser.add_argument("--branch", help="target branch, overrides `target_branch`")
    parser.add_argument(
        "--format",
        choices=["markdown", "details"],
        default="markdown",
        help="markdown for chat, details for an aligned plain-text listing",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose", action="store_true", help="log status codes and timings"
    )
    verbosity.add_argument(
        "-q", "--quiet", action="store_true", help="only log warnings and errors"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


async def build_report(config: MRStatConfig) -> Report:
    """Run one collection against the configured project."""
    async with AsyncMRStatClient.from_config(config) as client:
        logger.debug("%r", client)
        mrs = await client.open_merge_requests()
    return group_merge_requests(config.target_branch, mrs)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        configure_logging(level=logging.DEBUG)
    elif args.quiet:
        configure_logging(level=logging.WARNING)
    else:
        configure_logging()

    try:
        config = load_config(args.config)
        if args.branch:
            config = replace(config, target_branch=args.branch)
        report = asyncio.run(build_report(config))
    except MRStatError as e:
        logger.error("%s", e)
        return 1

    output = report.render() if args.format == "markdown" else report.render_details()

    print("\nOutput can safely be piped to clipboard.\n", file=sys.stderr)
    print("E.g., for macOS: mrstat | pbcopy\n", file=sys.stderr)

    # markers go to stderr so they stay out of a piped report
    tty = sys.stdout.isatty()
    if tty:
        print(BEGIN_MARKER, file=sys.stderr, flush=True)
    print(output, flush=True)
    if tty:
        print(f"{END_MARKER}\n", file=sys.stderr)

    return 0

