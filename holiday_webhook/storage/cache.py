"""Redis-backed cache of extracted day records."""
import logging
from datetime import date, datetime, timezone
from typing import Optional, Union

from pydantic import ValidationError
from redis.asyncio import Redis
from redis.exceptions import RedisError

from holiday_webhook.models.day_record import DayRecord
from holiday_webhook.models.result import CacheReadError, Err, Ok, Result

logger = logging.getLogger(__name__)

# 2 days
CACHE_TTL_SECONDS = 172_800


def cache_key(moment: Union[datetime, date]) -> str:
    """
    Cache key for the UTC calendar day of ``moment``.

    Naive datetimes are taken as UTC; plain dates are used as they are.
    """
    if isinstance(moment, datetime):
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment.astimezone(timezone.utc).date().isoformat()
    return moment.isoformat()


class CacheGateway:
    """Reads and writes serialized DayRecords keyed by ISO date."""

    def __init__(self, redis: Redis, ttl_seconds: int = CACHE_TTL_SECONDS):
        self.redis = redis
        self.ttl_seconds = ttl_seconds

    async def get(self, key: str) -> Optional[str]:
        """Raw cached text, or None on a miss."""
        value = await self.redis.get(key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, text: str, ttl_seconds: int) -> None:
        """Store ``text`` under ``key``, replacing any previous value."""
        await self.redis.set(key, text, ex=ttl_seconds)

    async def read_day_record(self, key: str) -> Result[Optional[DayRecord], CacheReadError]:
        """
        Load the record cached under ``key``.

        Returns:
            Ok(None) on a miss, Ok(record) on a hit, Err(CacheReadError) if
            Redis fails or the stored value cannot be decoded into a DayRecord
        """
        try:
            text = await self.get(key)
        except (RedisError, UnicodeDecodeError) as e:
            logger.error(
                "Failed to read from Redis",
                extra={"operation": "cache_read", "cache_key": key, "cause": repr(e)},
            )
            return Err(CacheReadError(key=key, cause=e))

        if text is None:
            logger.info("Cache miss", extra={"cache_key": key})
            return Ok(None)

        try:
            record = DayRecord.from_json(text)
        except ValidationError as e:
            logger.error(
                "Failed to decode cached holidays",
                extra={"operation": "cache_decode", "cache_key": key, "cause": repr(e)},
            )
            return Err(CacheReadError(key=key, cause=e))

        logger.info("Holidays read from cache", extra={"cache_key": key})
        return Ok(record)

    async def write_day_record(self, key: str, record: DayRecord) -> bool:
        """
        Cache ``record`` for the fixed TTL.

        Write failures are logged and reported through the return value only.
        """
        try:
            await self.set(key, record.to_json(), self.ttl_seconds)
        except RedisError as e:
            logger.error(
                "Failed to write holidays to Redis",
                extra={"operation": "cache_write", "cache_key": key, "cause": repr(e)},
            )
            return False

        logger.info("Holidays cached", extra={"cache_key": key, "ttl": self.ttl_seconds})
        return True
