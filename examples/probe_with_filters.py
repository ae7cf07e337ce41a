"""
Quick sanity run: probe a handful of paths and show live statistics.
Run: uv run examples/probe_with_filters.py
"""
import asyncio
import os
import sys

from probewatch import LogTerminal, Prober, Reporter, RichTerminal
from probewatch.filters import RejectStatusCodes
from probewatch.reporter import iter_queue

WORDS = ["", "index.html", "robots.txt", "admin", "login", "status/418"] * 5


async def main():
    prober = Prober(
        os.getenv("PROBE_URL", "https://httpbin.org/FUZZ"),
        concurrency=4,
        request_timeout_s=float(os.getenv("HTTP_REQUEST_TIMEOUT_S", "10")),
    )
    term = LogTerminal(RichTerminal(), sys.stderr)
    reporter = Reporter(term, [RejectStatusCodes([404])])

    results = asyncio.Queue(maxsize=8)
    counts = asyncio.Queue(maxsize=1)

    render = asyncio.create_task(term.run())
    _, stats = await asyncio.gather(
        prober.run(WORDS, results, counts),
        reporter.display(iter_queue(results), counts),
    )
    render.cancel()
    print("\nStats:", dict(stats.status_codes), "errors:", stats.errors)

if __name__ == "__main__":
    asyncio.run(main())
