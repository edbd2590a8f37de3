"""Holidays pipeline: fetch the day page, extract fields, read and refresh the cache."""
import logging
from datetime import date, datetime, timezone
from typing import Optional, Union

from holiday_webhook.models.day_record import DayRecord
from holiday_webhook.models.result import CacheReadError, Err, Ok, PipelineFailure, Result
from holiday_webhook.services.extractor import extract_day_record
from holiday_webhook.services.fetcher import ContentFetcher
from holiday_webhook.storage.cache import CacheGateway, cache_key

logger = logging.getLogger(__name__)


def utc_today(now: Optional[datetime] = None) -> date:
    """UTC calendar day of ``now`` (defaults to the current time)."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).date()


class HolidaysService:
    """Service combining the fetcher, the extractor and the cache."""

    def __init__(self, fetcher: ContentFetcher, cache: CacheGateway):
        self.fetcher = fetcher
        self.cache = cache

    async def fetch_day(self, day: date) -> Result[DayRecord, PipelineFailure]:
        """
        Fetch and parse the page for ``day`` without touching the cache.

        Args:
            day: Calendar date to fetch

        Returns:
            Ok with the record, or Err with a FetchFailure/ParseFailure
        """
        page = await self.fetcher.fetch(day)
        if page.is_err:
            return page
        return extract_day_record(page.value)

    async def read_cached(self, day: date) -> Result[Optional[DayRecord], CacheReadError]:
        """Cached record for ``day``; Ok(None) on a miss."""
        return await self.cache.read_day_record(cache_key(day))

    async def store(self, day: date, record: DayRecord) -> bool:
        """Cache ``record`` under the key of ``day``."""
        return await self.cache.write_day_record(cache_key(day), record)

    async def load_day(
        self,
        day: date,
        no_cache: bool = False,
    ) -> Result[tuple[DayRecord, bool], Union[CacheReadError, PipelineFailure]]:
        """
        Resolve the record for ``day``: cache first unless ``no_cache``.

        A cache read error is returned as is and never falls back to a fetch.

        Returns:
            Ok((record, fresh)) where ``fresh`` tells whether the record was
            just fetched and still needs caching, or Err with the failure
        """
        if not no_cache:
            cached = await self.read_cached(day)
            if cached.is_err:
                return cached
            if cached.value is not None:
                return Ok((cached.value, False))
        else:
            logger.info("Cache bypass requested", extra={"cache_key": cache_key(day)})

        fetched = await self.fetch_day(day)
        if fetched.is_err:
            return fetched
        return Ok((fetched.value, True))
