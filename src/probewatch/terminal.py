"""
Terminal output for the reporter.

A terminal has two areas: an append-only transcript and a status region
that is replaced as a whole on every update and re-rendered continuously.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Protocol, TextIO

from rich.console import Console
from rich.live import Live
from rich.text import Text

logger = logging.getLogger(__name__)


class Terminal(Protocol):
    """Prints transcript lines while showing a live status region."""

    def print(self, msg: str) -> None:
        ...

    def printf(self, msg: str, *args) -> None:
        ...

    def set_status(self, lines: Sequence[str]) -> None:
        """Replace the status region with the given lines."""
        ...

    async def run(self) -> None:
        """Render until cancelled."""
        ...


class RichTerminal:
    """
    Terminal backed by a Rich ``Live`` display.

    Transcript lines are printed through the live console so they scroll
    above the status region. The live display is only active while ``run``
    is awaited; lines printed outside of it go straight to the console.
    """

    def __init__(self, console: Console | None = None,
                 refresh_per_second: float = 4) -> None:
        self.console = console or Console()
        self.live = Live(
            Text(""),
            console=self.console,
            refresh_per_second=refresh_per_second,
            transient=True,
        )

    def print(self, msg: str) -> None:
        self.console.print(msg.rstrip("\n"), markup=False, highlight=False,
                           soft_wrap=True)

    def printf(self, msg: str, *args) -> None:
        self.print(msg % args if args else msg)

    def set_status(self, lines: Sequence[str]) -> None:
        self.live.update(Text("\n".join(lines)))

    async def run(self) -> None:
        self.live.start()
        try:
            await asyncio.Event().wait()
        finally:
            self.live.stop()


class LogTerminal:
    """Mirrors every transcript line of a terminal into a text sink."""

    def __init__(self, term: Terminal, sink: TextIO) -> None:
        self.term = term
        self.sink = sink

    def print(self, msg: str) -> None:
        if not msg.endswith("\n"):
            msg += "\n"
        self.term.print(msg)
        try:
            self.sink.write(msg)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to write transcript log: {e}")

    def printf(self, msg: str, *args) -> None:
        self.print(msg % args if args else msg)

    def set_status(self, lines: Sequence[str]) -> None:
        self.term.set_status(lines)

    async def run(self) -> None:
        await self.term.run()
