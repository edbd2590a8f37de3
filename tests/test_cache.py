"""Tests for the Redis cache gateway and the DayRecord cache format."""
import json
from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from holiday_webhook.models.day_record import DayRecord
from holiday_webhook.models.result import CacheReadError
from holiday_webhook.storage.cache import CACHE_TTL_SECONDS, CacheGateway, cache_key
from conftest import FakeRedis


@pytest.fixture
def record():
    return DayRecord(
        holidays=["Новый год", "Новый год"],
        name_days=["Ивана", "Петра"],
        events=["Принят первый закон"],
    )


def test_cache_key_ignores_time_of_day():
    start = datetime(2026, 10, 16, 0, 0, tzinfo=timezone.utc)
    for minutes in (0, 1, 60 * 12, 60 * 24 - 1):
        assert cache_key(start + timedelta(minutes=minutes)) == "2026-10-16"


def test_cache_key_uses_utc_day():
    moscow = timezone(timedelta(hours=3))
    assert cache_key(datetime(2026, 10, 17, 1, 30, tzinfo=moscow)) == "2026-10-16"


def test_cache_key_naive_datetime_is_utc():
    assert cache_key(datetime(2026, 1, 2, 23, 59)) == "2026-01-02"


def test_cache_key_for_date():
    assert cache_key(date(2026, 2, 3)) == "2026-02-03"


def test_serialization_round_trip(record):
    restored = DayRecord.from_json(record.to_json())

    assert restored == record
    assert restored.holidays == ("Новый год", "Новый год")


def test_record_is_immutable(record):
    with pytest.raises(ValidationError):
        record.holidays = ("Другое",)
    with pytest.raises(AttributeError):
        record.holidays.append("Другое")

    assert record.holidays == ("Новый год", "Новый год")


def test_serialized_field_names(record):
    data = json.loads(record.to_json())
    assert data == {
        "holidays": ["Новый год", "Новый год"],
        "nameDays": ["Ивана", "Петра"],
        "events": ["Принят первый закон"],
    }


def test_from_json_rejects_wrong_shape():
    with pytest.raises(ValidationError):
        DayRecord.from_json('{"holidays": 5}')


@pytest.mark.asyncio
async def test_read_miss(fake_redis):
    gateway = CacheGateway(fake_redis)

    result = await gateway.read_day_record("2026-10-16")

    assert result.is_ok
    assert result.value is None


@pytest.mark.asyncio
async def test_write_then_read(fake_redis, record):
    gateway = CacheGateway(fake_redis)

    assert await gateway.write_day_record("2026-10-16", record) is True
    result = await gateway.read_day_record("2026-10-16")

    assert fake_redis.ttls["2026-10-16"] == CACHE_TTL_SECONDS == 172_800
    assert result.value == record


@pytest.mark.asyncio
async def test_write_overwrites(fake_redis, record):
    gateway = CacheGateway(fake_redis)
    await gateway.write_day_record("2026-10-16", DayRecord(holidays=["old"]))

    await gateway.write_day_record("2026-10-16", record)

    assert DayRecord.from_json(fake_redis.store["2026-10-16"]) == record


@pytest.mark.asyncio
async def test_malformed_value_is_read_error(fake_redis):
    fake_redis.store["2026-10-16"] = "{not json"
    gateway = CacheGateway(fake_redis)

    result = await gateway.read_day_record("2026-10-16")

    assert result.is_err
    assert isinstance(result.error, CacheReadError)
    assert result.error.key == "2026-10-16"
    assert result.error.code.value == "REDIS_READ_ERROR"


@pytest.mark.asyncio
async def test_bytes_value_decoded(fake_redis, record):
    fake_redis.store["2026-10-16"] = record.to_json().encode("utf-8")
    gateway = CacheGateway(fake_redis)

    result = await gateway.read_day_record("2026-10-16")

    assert result.value == record


@pytest.mark.asyncio
async def test_non_utf8_value_is_read_error(fake_redis):
    fake_redis.store["2026-10-16"] = b"\xff\xfe{"
    gateway = CacheGateway(fake_redis)

    result = await gateway.read_day_record("2026-10-16")

    assert result.is_err
    assert isinstance(result.error, CacheReadError)
    assert isinstance(result.error.cause, UnicodeDecodeError)


@pytest.mark.asyncio
async def test_decoding_client_error_is_read_error(fake_redis):
    # decode_responses=True clients raise while decoding the reply
    async def get(key):
        return b"\xff\xfe{".decode("utf-8")

    fake_redis.get = get
    gateway = CacheGateway(fake_redis)

    result = await gateway.read_day_record("2026-10-16")

    assert result.is_err
    assert result.error.code.value == "REDIS_READ_ERROR"


@pytest.mark.asyncio
async def test_redis_failure_is_read_error():
    gateway = CacheGateway(FakeRedis(fail_reads=True))

    result = await gateway.read_day_record("2026-10-16")

    assert result.is_err
    assert isinstance(result.error, CacheReadError)


@pytest.mark.asyncio
async def test_write_failure_not_raised(record):
    gateway = CacheGateway(FakeRedis(fail_writes=True))

    assert await gateway.write_day_record("2026-10-16", record) is False
