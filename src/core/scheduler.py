"""Daily auto-fetch scheduling (core domain).

The scheduler knows nothing about extraction. It wakes once a day at the
configured time and runs the processor unless the stored last-run marker
says today has already been handled.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime, timedelta
from typing import Awaitable, Callable, Optional

from core.config import ScheduleConfig
from core.ports import StoragePort
from core.processor import DailyTextProcessor

LOGGER = logging.getLogger(__name__)


class DailyScheduler:
    """Runs the processor once per calendar day."""

    def __init__(
        self,
        processor: DailyTextProcessor,
        storage: StoragePort,
        schedule: ScheduleConfig,
        clock: Callable[[], datetime] = datetime.now,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._processor = processor
        self._storage = storage
        self._schedule = schedule
        self._clock = clock
        self._sleep = sleep

    def seconds_until_next_run(self, now: datetime) -> float:
        """Return the delay until the next run_at, today or tomorrow."""

        target = datetime.combine(now.date(), self._schedule.run_at, tzinfo=now.tzinfo)
        if target <= now:
            target += timedelta(days=1)
        return (target - now).total_seconds()

    async def maybe_run(self, today: date) -> bool:
        """Run the processor for today unless the marker already says so."""

        today_str = today.isoformat()
        if self._storage.get_last_run_date() == today_str:
            LOGGER.info("Already auto-fetched %s, skipping", today_str)
            return False

        LOGGER.info("Performing auto-fetch for %s", today_str)
        await self._processor.fetch_and_write(today)
        # Only a completed run moves the marker; a failed day is retried.
        self._storage.set_last_run_date(today_str)
        return True

    async def run_forever(self, max_cycles: Optional[int] = None) -> None:
        """Sleep until each run_at and fetch; max_cycles bounds the loop."""

        if self._schedule.catch_up_on_start:
            await self._run_safely(self._clock().date())

        cycles = 0
        while max_cycles is None or cycles < max_cycles:
            delay = self.seconds_until_next_run(self._clock())
            LOGGER.info("Next auto-fetch in %.0f seconds", delay)
            await self._sleep(delay)
            await self._run_safely(self._clock().date())
            cycles += 1

    async def _run_safely(self, today: date) -> None:
        try:
            await self.maybe_run(today)
        except Exception:
            LOGGER.exception("Auto-fetch for %s failed", today.isoformat())
