import pytest

from probewatch.models import ResponseInfo, Result


class FakeClock:
    def __init__(self, t: float = 1000.0):
        self.t = t

    def __call__(self) -> float:
        return self.t

    def advance(self, secs: float) -> None:
        self.t += secs


class MemoryTerminal:
    """Records transcript lines and status updates in order."""

    def __init__(self):
        self.lines: list[str] = []
        self.statuses: list[list[str]] = []
        self.events: list[str] = []

    def print(self, msg):
        self.lines.append(msg)
        self.events.append("print")

    def printf(self, msg, *args):
        self.print(msg % args if args else msg)

    def set_status(self, lines):
        self.statuses.append(list(lines))
        self.events.append("status")

    async def run(self):
        pass


def ok(label, code=200, body=0):
    return Result(label=label, response=ResponseInfo(status_code=code, body_bytes=body))


def failed(label, msg="connection refused"):
    return Result(label=label, error=ConnectionError(msg))


async def aiter_of(items):
    for item in items:
        yield item


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def term():
    return MemoryTerminal()
