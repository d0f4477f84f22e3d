"""Refresh cycle (fetch both sheets, rank, render) and the timer that drives it."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

from .config import DEFAULT_LAYOUT, REFRESH_INTERVAL_SECONDS, TOP_N, ColumnLayout
from .fetch.sheet_csv import process_sheet_data
from .fetch.sheets import SheetFetcher, SheetFetchError
from .present.presenter import Presenter

_log = logging.getLogger(__name__)


class RefreshOrchestrator:
    """Runs one fetch-parse-render pass against an owned fetcher and presenter."""

    def __init__(
        self,
        fetcher: SheetFetcher,
        presenter: Presenter,
        layout: ColumnLayout = DEFAULT_LAYOUT,
        limit: int = TOP_N,
        on_render: Optional[Callable[[Presenter], None]] = None,
        on_complete: Optional[Callable[[Presenter], None]] = None,
    ) -> None:
        self.fetcher = fetcher
        self.presenter = presenter
        self.layout = layout
        self.limit = limit
        self.on_render = on_render
        self.on_complete = on_complete

    async def run_cycle(self) -> bool:
        """Returns True when both sheets were fetched and rendered.

        On failure the previous rendering is left untouched and the presenter
        shows the error status instead. ``on_complete`` runs after every cycle,
        failed or not, so the published output always reflects the status.
        """
        ok = await self._refresh()
        if self.on_complete is None:
            return ok
        try:
            self.on_complete(self.presenter)
        except Exception:
            # Not retried: the next tick publishes again
            _log.exception("publishing refresh result failed")
            self.presenter.show_error()
            return False
        return ok

    async def _refresh(self) -> bool:
        try:
            text_a, text_b = await self.fetcher.fetch_pair()
            ranking_a = process_sheet_data(text_a, self.layout, self.limit)
            ranking_b = process_sheet_data(text_b, self.layout, self.limit)
            self.presenter.render(ranking_a, ranking_b)
            if self.on_render is not None:
                self.on_render(self.presenter)
        except SheetFetchError as exc:
            _log.warning("refresh failed: %s", exc)
            self.presenter.show_error()
            return False
        except Exception:
            _log.exception("refresh failed while processing sheet data")
            self.presenter.show_error()
            return False
        return True


class RefreshScheduler:
    """Fixed-rate timer: one tick now, then one every ``interval`` seconds.

    A tick that lands while the previous cycle is still running is skipped,
    so renders always happen in cycle order. ``clock`` and ``sleep`` are
    injectable so tests can drive ticks without real delays.
    """

    def __init__(
        self,
        cycle: Callable[[], Awaitable[object]],
        interval: float = REFRESH_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._cycle = cycle
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._inflight: Optional[asyncio.Task] = None
        self.started = 0
        self.skipped = 0

    @property
    def busy(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    def tick(self) -> Optional[asyncio.Task]:
        """Start a cycle unless one is in flight. Must be called inside a running loop."""
        if self.busy:
            self.skipped += 1
            _log.info("previous refresh still running, skipping tick")
            return None
        self.started += 1
        self._inflight = asyncio.ensure_future(self._guarded())
        return self._inflight

    async def _guarded(self) -> None:
        try:
            await self._cycle()
        except Exception:
            # The timer keeps going whatever a single cycle does
            _log.exception("refresh cycle raised")

    async def run(self, max_ticks: Optional[int] = None) -> None:
        ticks = 0
        next_at = self._clock()
        while max_ticks is None or ticks < max_ticks:
            self.tick()
            ticks += 1
            if max_ticks is not None and ticks >= max_ticks:
                break
            next_at += self.interval
            delay = next_at - self._clock()
            if delay < 0:
                # Fell behind (suspended process, slow loop): restart the grid now
                next_at -= delay
                delay = 0.0
            await self._sleep(delay)
        await self.drain()

    async def drain(self) -> None:
        """Wait for the in-flight cycle, if any."""
        if self._inflight is not None:
            await self._inflight
