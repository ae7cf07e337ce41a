import logging
from collections import defaultdict
from collections.abc import Callable

from .models import Result
from .utils import now, format_seconds

logger = logging.getLogger(__name__)


class HTTPStats:
    """
    Running statistics about the HTTP responses seen during one session.

    The request rate is a cumulative average (responses / whole seconds since
    start), recomputed at most once per second so the status line does not
    jitter between records.
    """

    def __init__(self, clock: Callable[[], float] = now) -> None:
        self.clock = clock
        self.start = clock()
        self.status_codes: dict[int, int] = defaultdict(int)
        self.errors = 0
        self.responses = 0
        self.count = 0

        self.last_rate_update: float | None = None
        self.rate = 0.0

    def record(self, result: Result) -> None:
        self.responses += 1
        if result.error is not None or result.response is None:
            self.errors += 1
        else:
            self.status_codes[result.response.status_code] += 1

    def elapsed(self) -> float:
        return self.clock() - self.start

    def update_rate(self) -> None:
        t = self.clock()
        whole_secs = int(t - self.start)
        if whole_secs < 1:
            return
        if self.last_rate_update is not None and t - self.last_rate_update < 1.0:
            return
        self.rate = self.responses / whole_secs
        self.last_rate_update = t
        logger.debug(f"Rate updated: {self.rate:.2f} req/s after {whole_secs}s")

    @property
    def todo(self) -> int:
        # the expected total may be lowered below what was already processed
        return max(0, self.count - self.responses)

    def status_lines(self) -> list[str]:
        return sorted(f"{code}: {n}" for code, n in self.status_codes.items())

    def report(self, current: str = "") -> list[str]:
        """Return the status region: a blank line, the summary, then one sorted line per status code."""
        self.update_rate()

        status = f"{self.responses} requests"
        if self.rate > 0:
            status += f", {self.rate:.0f} req/s"

        if self.count > 0:
            status += f", {self.todo} todo"
            if self.rate > 0:
                status += f", {format_seconds(self.todo / self.rate)} remaining"

        if current:
            status += f", current: {current}"

        return ["", status, *self.status_lines()]
