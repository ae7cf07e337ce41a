import asyncio
import logging
import re
from collections.abc import Iterable

import aiohttp

from .models import ResponseInfo, Result
from .reporter import CLOSED, send_count

logger = logging.getLogger(__name__)

MARKER = "FUZZ"


class Prober:
    def __init__(
        self,
        url_template: str,
        concurrency: int = 10,
        request_timeout_s: float = 10.0,
        method: str = "GET",
        default_headers: dict[str, str] | None = None,
        extract: Iterable[str] = (),
    ) -> None:
        if MARKER not in url_template:
            raise ValueError(f"URL template {url_template!r} has no {MARKER} marker")
        self.url_template = url_template
        self.concurrency = max(1, concurrency)
        self.request_timeout_s = request_timeout_s
        self.method = method.upper()
        self.default_headers = default_headers or {
            "User-Agent": "probewatch/1.0"
        }
        self.extract = [re.compile(p) for p in extract]

        logger.info(
            f"Initialized Prober for {url_template}, "
            f"concurrency={self.concurrency}, method={self.method}"
        )

    def url_for(self, label: str) -> str:
        return self.url_template.replace(MARKER, label)

    # ────────────────────────────────
    # HTTP Fetch Logic
    # ────────────────────────────────

    def _extract(self, text: str) -> list[str]:
        """Collect every match of the extract patterns, using the first group when a pattern has one."""
        found = []
        for pattern in self.extract:
            for m in pattern.finditer(text):
                found.append(m.group(1) if pattern.groups else m.group(0))
        return found

    async def _probe_once(self, session: aiohttp.ClientSession, label: str) -> Result:
        url = self.url_for(label)
        try:
            async with session.request(self.method, url) as resp:
                body = await resp.read()
                text = body.decode(resp.charset or "utf-8", errors="replace")
                header_bytes = sum(
                    len(k) + len(v) + 4 for k, v in resp.raw_headers
                )
                logger.debug(f"Probed {url}: status={resp.status}, size={len(body)} bytes")
                return Result(
                    label=label,
                    response=ResponseInfo(
                        status_code=resp.status,
                        header_bytes=header_bytes,
                        body_bytes=len(body),
                        extract=self._extract(text),
                    ),
                )
        except aiohttp.ClientError as e:
            logger.debug(f"Client error for {url}: {e}")
            return Result(label=label, error=e)
        except asyncio.TimeoutError as e:
            logger.debug(f"Timeout for {url}")
            return Result(label=label, error=e)

    # ────────────────────────────────
    # Main Runner
    # ────────────────────────────────

    async def run(
        self,
        labels: Iterable[str],
        results: asyncio.Queue,
        counts: asyncio.Queue | None = None,
    ) -> None:
        labels = list(labels)
        if counts is not None:
            send_count(counts, len(labels))

        work: asyncio.Queue = asyncio.Queue()
        for label in labels:
            work.put_nowait(label)

        timeout = aiohttp.ClientTimeout(total=self.request_timeout_s)
        connector = aiohttp.TCPConnector(limit=0, ssl=False)
        try:
            async with aiohttp.ClientSession(
                connector=connector, timeout=timeout, headers=self.default_headers
            ) as session:

                async def worker(worker_id: int):
                    while True:
                        try:
                            label = work.get_nowait()
                        except asyncio.QueueEmpty:
                            break
                        await results.put(await self._probe_once(session, label))
                    logger.debug(f"Worker {worker_id} stopped")

                logger.info(
                    f"Starting {len(labels)} requests with {self.concurrency} workers"
                )
                await asyncio.gather(*(worker(i) for i in range(self.concurrency)))
        finally:
            await results.put(CLOSED)
