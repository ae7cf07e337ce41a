import asyncio

import pytest

from probewatch.filters import FilterSet
from probewatch.rendering import render_header
from probewatch.reporter import CLOSED, Reporter, iter_queue, send_count

from conftest import aiter_of, failed, ok


class Always:
    def __init__(self, answer):
        self.answer = answer

    def reject(self, result):
        return self.answer


@pytest.mark.asyncio
async def test_end_to_end_with_expected_total(term, clock):
    results = asyncio.Queue()
    counts = asyncio.Queue(maxsize=1)
    send_count(counts, 5)
    for r in (ok("a", 200), ok("b", 200), ok("c", 404)):
        results.put_nowait(r)
    results.put_nowait(CLOSED)

    stats = await Reporter(term, [], clock=clock).display(iter_queue(results), counts)

    assert stats.count == 5
    assert stats.responses == 3
    final = term.statuses[-1]
    assert "200: 2" in final
    assert "404: 1" in final
    assert "2 todo" in final[1]
    assert final[1].endswith("current: c")


@pytest.mark.asyncio
async def test_transcript_layout(term, clock):
    items = [ok("a", 200), failed("b"), ok("c", 301)]

    await Reporter(term, clock=clock).display(aiter_of(items))

    assert term.lines[0] == render_header()
    assert term.lines[1:4] == [str(r) for r in items]
    assert term.lines[4:] == ["", "processed 3 HTTP requests in 0m00s", "200: 1", "301: 1"]


@pytest.mark.asyncio
async def test_closing_summary_uses_transcript_only(term, clock):
    async def slow():
        for r in (ok("a"), ok("b")):
            yield r
        clock.advance(65)

    await Reporter(term, clock=clock).display(slow())

    assert len(term.statuses) == 2
    last_status = len(term.events) - 1 - term.events[::-1].index("status")
    assert all(e == "print" for e in term.events[last_status + 1:])
    assert term.lines[-3:] == ["", "processed 2 HTTP requests in 1m05s", "200: 2"]


@pytest.mark.asyncio
async def test_status_updated_after_every_result(term, clock):
    items = [ok(str(i)) for i in range(4)]
    await Reporter(term, clock=clock).display(aiter_of(items))

    assert [s[1] for s in term.statuses] == [
        f"{i + 1} requests, current: {i}" for i in range(4)
    ]


@pytest.mark.asyncio
async def test_suppressed_results_still_counted(term, clock):
    items = [ok("a", 200), failed("b"), ok("c", 404)]
    stats = await Reporter(term, [Always(True), Always(False)], clock=clock).display(
        aiter_of(items)
    )

    assert term.lines[0] == render_header()
    assert all(str(r) not in term.lines for r in items)
    assert stats.responses == 3
    assert stats.errors == 1
    assert term.statuses[-1][2:] == ["200: 1", "404: 1"]


@pytest.mark.asyncio
async def test_no_filters_prints_everything(term, clock):
    items = [ok("a"), failed("b")]
    await Reporter(term, FilterSet(), clock=clock).display(aiter_of(items))
    assert term.lines[1:3] == [str(r) for r in items]


@pytest.mark.asyncio
async def test_empty_stream(term, clock):
    stats = await Reporter(term, clock=clock).display(aiter_of([]))

    assert stats.responses == 0
    assert term.statuses == []
    assert term.lines == [render_header(), "", "processed 0 HTTP requests in 0m00s"]


@pytest.mark.asyncio
async def test_expected_total_keeps_latest_value(term, clock):
    counts = asyncio.Queue(maxsize=1)
    send_count(counts, 10)
    send_count(counts, 20)
    send_count(counts, 30)

    stats = await Reporter(term, clock=clock).display(aiter_of([ok("a")]), counts)

    assert stats.count == 30
    assert term.statuses[-1][1] == "1 requests, 29 todo, current: a"


@pytest.mark.asyncio
async def test_expected_total_polled_without_blocking(term, clock):
    counts = asyncio.Queue(maxsize=1)

    async def produce():
        yield ok("a")
        send_count(counts, 4)
        yield ok("b")
        yield ok("c")

    stats = await Reporter(term, clock=clock).display(produce(), counts)

    assert "todo" not in term.statuses[0][1]
    assert "2 todo" in term.statuses[1][1]
    assert "1 todo" in term.statuses[2][1]
    assert stats.count == 4


@pytest.mark.asyncio
async def test_expected_total_latest_wins_on_unbounded_queue(term, clock):
    counts = asyncio.Queue()
    for total in (10, 20, 30):
        counts.put_nowait(total)

    stats = await Reporter(term, clock=clock).display(aiter_of([ok("a"), ok("b")]), counts)

    assert stats.count == 30
    assert counts.empty()
    assert term.statuses[0][1] == "1 requests, 29 todo, current: a"
    assert term.statuses[1][1] == "2 requests, 28 todo, current: b"
