"""
Bias Scorecard - Recompute Scheduler.

============================================================
PURPOSE
============================================================
Periodically recomputes every scorecard. This is the hook
where a live data refresh will plug in later.

============================================================
LIFECYCLE
============================================================
- start(): spawns the background loop (idempotent)
- stop(): cancels the loop and waits for it (idempotent)
- run_once(): one recompute pass, usable without the loop

The loop goes through BiasScorecardStore.recompute_all(),
so it serializes with on-demand updates on the same
per-currency locks.

============================================================
"""

import asyncio
import logging
from datetime import datetime
from typing import Awaitable, Callable, List, Optional

from core.clock import ClockFactory, ClockProtocol

from .store import BiasScorecardStore
from .types import CurrencyScorecard


logger = logging.getLogger(__name__)


SleepFunction = Callable[[float], Awaitable[None]]


class RecomputeScheduler:
    """Background task running BiasScorecardStore.recompute_all()."""

    def __init__(
        self,
        store: BiasScorecardStore,
        interval_seconds: Optional[float] = None,
        clock: Optional[ClockProtocol] = None,
        sleep: Optional[SleepFunction] = None,
    ):
        """
        Args:
            store: Store to recompute
            interval_seconds: Seconds between passes. Defaults to the
                store config's recompute_interval_seconds.
            clock: Clock for last_run_at. Uses the global clock if not provided.
            sleep: Awaitable sleep, injectable for tests.
        """
        self._store = store
        self._interval = interval_seconds or store.config.recompute_interval_seconds
        self._clock = clock or ClockFactory.get_clock()
        self._sleep = sleep or asyncio.sleep

        self._task: Optional[asyncio.Task] = None
        self._running = False

        self._run_count = 0
        self._error_count = 0
        self._last_run_at: Optional[datetime] = None

    # --------------------------------------------------------
    # LIFECYCLE
    # --------------------------------------------------------

    async def start(self) -> None:
        """Start the recompute loop."""
        if self._running:
            return

        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        logger.info(f"Recompute scheduler started (every {self._interval}s)")

    async def stop(self) -> None:
        """Stop the recompute loop."""
        if not self._running:
            return

        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        logger.info(f"Recompute scheduler stopped after {self._run_count} runs")

    # --------------------------------------------------------
    # EXECUTION
    # --------------------------------------------------------

    def run_once(self) -> List[CurrencyScorecard]:
        """Recompute every scorecard once."""
        scorecards = self._store.recompute_all()
        self._run_count += 1
        self._last_run_at = self._clock.now()
        logger.debug(f"Recomputed {len(scorecards)} scorecards")
        return scorecards

    async def _run_loop(self) -> None:
        while self._running:
            try:
                await self._sleep(self._interval)

                if not self._running:
                    break

                self.run_once()

            except asyncio.CancelledError:
                break
            except Exception as e:
                self._error_count += 1
                logger.error(f"Scorecard recompute failed: {e}")

    # --------------------------------------------------------
    # STATUS
    # --------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def run_count(self) -> int:
        return self._run_count

    @property
    def error_count(self) -> int:
        return self._error_count

    @property
    def last_run_at(self) -> Optional[datetime]:
        return self._last_run_at
