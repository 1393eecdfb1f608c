"""Current-time status line ("当前时间：HH:MM:SS | 早餐时段"), refreshed by an interval job."""
import logging
from datetime import datetime
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from whattoeat.domain.MealPeriod import MealPeriod
from whattoeat.logic.store.food_store import FoodStore
from whattoeat.utilities.config import CLOCK_REFRESH_MS
from whattoeat.utilities.constants import STATUS_TEMPLATE, TIME_FORMAT

logger = logging.getLogger(__name__)

REFRESH_JOB_ID = "clock_refresh"


def status_line(now: datetime, period: MealPeriod) -> str:
    return STATUS_TEMPLATE.format(time=now.strftime(TIME_FORMAT), label=period.label)


class ClockStatus:
    """Keeps the status line current.

    `start()` registers an interval job on an AsyncIOScheduler bound to the
    running event loop; `stop()` shuts the scheduler down. Between the two,
    `refresh()` runs every `refresh_ms` milliseconds, one run at a time.
    """

    def __init__(self, store: FoodStore, refresh_ms: int = CLOCK_REFRESH_MS):
        if refresh_ms <= 0:
            raise ValueError(f"refresh_ms must be positive: {refresh_ms}")
        self.store = store
        self.refresh_ms = refresh_ms
        self._scheduler: Optional[AsyncIOScheduler] = None
        self.now: Optional[datetime] = None
        self.period: Optional[MealPeriod] = None
        self.text = ""
        self.refresh()

    def refresh(self):
        self.now = self.store.now()
        self.period = MealPeriod.for_hour(self.now.hour)
        self.text = status_line(self.now, self.period)

    async def _refresh_job(self):
        self.refresh()

    def start(self):
        """Start periodic refresh; needs a running event loop."""
        if self.running:
            return
        scheduler = AsyncIOScheduler(
            timezone="UTC",
            job_defaults={"coalesce": True, "max_instances": 1, "misfire_grace_time": None},
        )
        scheduler.add_job(
            self._refresh_job,
            trigger=IntervalTrigger(seconds=self.refresh_ms / 1000),
            id=REFRESH_JOB_ID,
            name="Refresh clock status line",
            replace_existing=True,
        )
        scheduler.start()
        self._scheduler = scheduler
        logger.debug("Clock refresh scheduled every %d ms", self.refresh_ms)

    def stop(self):
        if self._scheduler is None:
            return
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.debug("Clock refresh stopped")

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def jobs(self) -> list:
        return self._scheduler.get_jobs() if self._scheduler is not None else []

    def snapshot(self) -> dict:
        return {
            "period": self.period.value,
            "label": self.period.label,
            "time": self.now.strftime(TIME_FORMAT),
            "text": self.text,
        }
