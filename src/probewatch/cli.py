#!/usr/bin/env python3
# cli.py — command line entry point for probewatch

import argparse
import asyncio
import contextlib
import logging
import re
import sys

from rich.console import Console

from probewatch.filters import RejectBodySize, RejectErrors, RejectStatusCodes
from probewatch.logging_config import setup_logging
from probewatch.prober import Prober
from probewatch.reporter import Reporter, iter_queue
from probewatch.terminal import LogTerminal, RichTerminal
from probewatch.utils import read_labels


def int_list(value: str) -> list[int]:
    try:
        return [int(v) for v in value.split(",") if v.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a comma separated list of integers: {value!r}")


def regex(value: str) -> str:
    try:
        re.compile(value)
    except re.error as e:
        raise argparse.ArgumentTypeError(f"invalid regular expression {value!r}: {e}")
    return value


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="probewatch: concurrent HTTP prober with live statistics",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "url",
        help="URL template, FUZZ is replaced with each wordlist entry",
    )
    parser.add_argument(
        "-w",
        "--wordlist",
        type=argparse.FileType("r", encoding="utf-8"),
        default="-",
        help="File with one value per line, '-' reads stdin",
    )

    # Requests
    parser.add_argument(
        "--concurrency",
        type=int,
        default=10,
        help="Number of parallel requests",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=10.0,
        help="Per request timeout in seconds",
    )
    parser.add_argument(
        "--method",
        default="GET",
        help="HTTP method",
    )

    # Filters
    parser.add_argument(
        "--hide-status",
        type=int_list,
        action="append",
        default=[],
        help="Hide responses with these status codes (comma separated, repeatable)",
    )
    parser.add_argument(
        "--hide-size",
        type=int_list,
        action="append",
        default=[],
        help="Hide responses with these body sizes (comma separated, repeatable)",
    )
    parser.add_argument(
        "--hide-errors",
        action="store_true",
        help="Hide failed requests",
    )

    # Extraction
    parser.add_argument(
        "--extract",
        type=regex,
        action="append",
        default=[],
        help="Show matches of this regular expression in the response body (repeatable)",
    )

    # Output & Debugging
    parser.add_argument(
        "--logfile",
        type=str,
        default=None,
        help="Also write the transcript of results to this file",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug-level logging",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional file to write diagnostic logs to",
    )

    return parser.parse_args(argv)


def load_wordlist(f) -> list[str]:
    try:
        return read_labels(f)
    finally:
        if f is not sys.stdin:
            f.close()


def build_filters(args) -> list:
    filters = []
    codes = [c for group in args.hide_status for c in group]
    if codes:
        filters.append(RejectStatusCodes(codes))
    sizes = [s for group in args.hide_size for s in group]
    if sizes:
        filters.append(RejectBodySize(sizes))
    if args.hide_errors:
        filters.append(RejectErrors())
    return filters


async def run(args) -> int:
    console = Console()
    setup_logging(level="DEBUG" if args.debug else "WARNING",
                  log_file=args.log_file, console=console)

    try:
        prober = Prober(
            args.url,
            concurrency=args.concurrency,
            request_timeout_s=args.timeout,
            method=args.method,
            extract=args.extract,
        )
    except ValueError as e:
        logging.error(str(e))
        return 2

    labels = load_wordlist(args.wordlist)

    with contextlib.ExitStack() as stack:
        term = RichTerminal(console)
        if args.logfile:
            sink = stack.enter_context(open(args.logfile, "w", encoding="utf-8"))
            term = LogTerminal(term, sink)

        reporter = Reporter(term, build_filters(args))
        results: asyncio.Queue = asyncio.Queue(maxsize=args.concurrency * 2)
        counts: asyncio.Queue = asyncio.Queue(maxsize=1)

        render = asyncio.create_task(term.run())
        try:
            _, stats = await asyncio.gather(
                prober.run(labels, results, counts),
                reporter.display(iter_queue(results), counts),
            )
        finally:
            render.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await render

    logging.getLogger(__name__).info(
        f"Run completed: {stats.responses} requests, {stats.errors} errors"
    )
    return 0


def main():
    args = parse_args()
    try:
        sys.exit(asyncio.run(run(args)))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
