"""Daily background refresh of today's cached holidays."""
import logging
from datetime import datetime
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from holiday_webhook.models.day_record import DayRecord
from holiday_webhook.models.result import PipelineFailure, Result
from holiday_webhook.services.holidays import HolidaysService, utc_today
from holiday_webhook.storage.cache import cache_key

logger = logging.getLogger(__name__)

JOB_ID = "daily-holidays-refresh"


class DailyRefreshJob:
    """
    Fetches today's page once a day and stores it in the cache.

    The job is owned by the application lifespan: ``start()`` at startup,
    ``stop()`` at shutdown. A failed run only logs; the existing cache entry
    is left alone and the next run is scheduled as usual.
    """

    def __init__(
        self,
        service: HolidaysService,
        hour: int = 0,
        minute: int = 0,
        timezone: str = "UTC",
    ):
        self.service = service
        self.hour = hour
        self.minute = minute
        self.timezone = timezone
        self.scheduler: Optional[AsyncIOScheduler] = None

    @property
    def running(self) -> bool:
        return self.scheduler is not None and self.scheduler.running

    def start(self) -> None:
        """Start the scheduler; must be called with a running event loop."""
        if self.running:
            return
        self.scheduler = AsyncIOScheduler(timezone=self.timezone)
        self.scheduler.add_job(
            self.run_once,
            "cron",
            hour=self.hour,
            minute=self.minute,
            id=JOB_ID,
            replace_existing=True,
        )
        self.scheduler.start()
        logger.info(
            "Daily refresh scheduled",
            extra={"hour": self.hour, "minute": self.minute, "timezone": self.timezone},
        )

    def stop(self) -> None:
        if not self.running:
            return
        self.scheduler.shutdown(wait=False)
        self.scheduler = None
        logger.info("Daily refresh stopped")

    async def run_once(self, now: Optional[datetime] = None) -> Result[DayRecord, PipelineFailure]:
        """Fetch today's record and cache it."""
        today = utc_today(now)
        key = cache_key(today)

        result = await self.service.fetch_day(today)
        if result.is_err:
            logger.error(
                "[Cron] Failed to cache holidays",
                extra={"operation": "scheduled_refresh", "cache_key": key, "cause": repr(result.error.cause)},
            )
            return result

        if not await self.service.store(today, result.value):
            logger.error(
                "[Cron] Failed to write holidays to cache",
                extra={"operation": "scheduled_refresh", "cache_key": key},
            )
            return result

        logger.info("[Cron] Holidays cached", extra={"cache_key": key})
        return result
