import asyncio
import logging
from collections.abc import AsyncIterable, AsyncIterator, Callable, Iterable

from .filters import FilterSet, ResultFilter
from .models import Result
from .rendering import render_header
from .stats import HTTPStats
from .terminal import Terminal
from .utils import now, format_seconds

logger = logging.getLogger(__name__)

# Put on a result queue to close the stream.
CLOSED = object()


async def iter_queue(queue: asyncio.Queue) -> AsyncIterator[Result]:
    while True:
        item = await queue.get()
        if item is CLOSED:
            return
        yield item


def send_count(queue: asyncio.Queue, count: int) -> None:
    """
    Publish a new expected total without blocking.

    The queue is expected to hold a single slot: a value the reporter has not
    picked up yet is replaced, so only the most recent total is observed.
    """
    while True:
        try:
            queue.put_nowait(count)
            return
        except asyncio.QueueFull:
            try:
                dropped = queue.get_nowait()
                logger.debug(f"Dropped stale expected total {dropped}")
            except asyncio.QueueEmpty:
                pass


class Reporter:
    """Prints results to the terminal and keeps the status region current."""

    def __init__(
        self,
        term: Terminal,
        filters: FilterSet | Iterable[ResultFilter] = (),
        clock: Callable[[], float] = now,
    ) -> None:
        self.term = term
        self.filters = filters if isinstance(filters, FilterSet) else FilterSet(filters)
        self.clock = clock

    @staticmethod
    def _poll_count(stats: HTTPStats, counts: asyncio.Queue) -> None:
        # only the latest pending total matters, older ones are dropped
        while True:
            try:
                stats.count = counts.get_nowait()
            except asyncio.QueueEmpty:
                return
            logger.debug(f"Expected total updated to {stats.count}")

    async def display(
        self,
        results: AsyncIterable[Result],
        counts: asyncio.Queue | None = None,
    ) -> HTTPStats:
        self.term.print(render_header())

        stats = HTTPStats(clock=self.clock)
        logger.info(f"Reporting started with {len(self.filters)} filters")

        async for result in results:
            if counts is not None:
                self._poll_count(stats, counts)

            stats.record(result)

            if not self.filters.should_suppress(result):
                self.term.print(str(result))
            else:
                logger.debug(f"Suppressed result for {result.label}")

            self.term.set_status(stats.report(result.label))

        elapsed = stats.elapsed()
        self.term.print("")
        self.term.printf(
            "processed %d HTTP requests in %s",
            stats.responses,
            format_seconds(elapsed),
        )
        for line in stats.status_lines():
            self.term.print(line)

        logger.info(
            f"Reporting finished: {stats.responses} results, "
            f"{stats.errors} errors in {elapsed:.1f}s"
        )
        return stats
