"""FastAPI main application."""
import hmac
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import httpx
from fastapi import BackgroundTasks, Depends, FastAPI, Header, Request
from fastapi.responses import PlainTextResponse
from redis.asyncio import Redis

from holiday_webhook.config import Settings, get_settings, settings
from holiday_webhook.logging_config import configure_logging
from holiday_webhook.models.webhook import WebhookCommand, WebhookReply
from holiday_webhook.services.fetcher import ContentFetcher
from holiday_webhook.services.formatter import format_day_message
from holiday_webhook.services.holidays import HolidaysService, utc_today
from holiday_webhook.services.scheduler import DailyRefreshJob
from holiday_webhook.storage.cache import CacheGateway, cache_key

logger = logging.getLogger(__name__)

AUTH_ERROR_TEXT = "Ошибка авторизации"
FAILURE_TEXT = "Не получилось запросить праздники, попробуйте позже. Код ошибки: {code}"
HEALTH_TEXT = "All is Ok."
TOKEN_PREFIX = "Token "


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Own the Redis and HTTP clients and the daily refresh job."""
    configure_logging(settings.log_level, settings.log_file)

    redis = Redis.from_url(settings.redis_url, decode_responses=True)
    http_client = httpx.AsyncClient(follow_redirects=True)
    service = HolidaysService(
        fetcher=ContentFetcher(http_client, settings.source_url_template, settings.fetch_timeout),
        cache=CacheGateway(redis),
    )
    job = DailyRefreshJob(
        service,
        hour=settings.refresh_hour,
        minute=settings.refresh_minute,
        timezone=settings.refresh_timezone,
    )

    app.state.holidays_service = service
    app.state.refresh_job = job
    job.start()
    logger.info("Ready", extra={"host": settings.host, "port": settings.port, "environment": settings.environment})
    try:
        yield
    finally:
        job.stop()
        await http_client.aclose()
        await redis.aclose()


app = FastAPI(title=settings.app_name, lifespan=lifespan)


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------

def get_holidays_service(request: Request) -> HolidaysService:
    return request.app.state.holidays_service


def get_clock() -> datetime:
    return datetime.now(timezone.utc)


async def read_command(request: Request) -> WebhookCommand:
    """Accept the command body either url-encoded or as JSON."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            data = await request.json()
        except ValueError:
            data = {}
    else:
        data = dict(await request.form())

    text = data.get("text") if isinstance(data, dict) else None
    return WebhookCommand(text=text if isinstance(text, str) else None)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def is_authorized(authorization: Optional[str], config: Settings) -> bool:
    """
    Check the shared-secret header; only enforced in production.

    An empty configured secret rejects every request.
    """
    if not config.is_production:
        return True
    if not authorization or not authorization.startswith(TOKEN_PREFIX) or not config.time_token:
        return False
    token = authorization[len(TOKEN_PREFIX):]
    return hmac.compare_digest(token.encode("utf-8"), config.time_token.encode("utf-8"))


def make_reply(text: str, config: Settings) -> WebhookReply:
    return WebhookReply(text=text, icon_url=config.icon_url or None)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.get("/health", response_class=PlainTextResponse)
async def health():
    """Liveness probe."""
    return HEALTH_TEXT


@app.post(
    "/holidays-time-command-webhook",
    response_model=WebhookReply,
    response_model_exclude_none=True,
)
async def holidays_time_command(
    background_tasks: BackgroundTasks,
    command: WebhookCommand = Depends(read_command),
    authorization: Optional[str] = Header(None),
    service: HolidaysService = Depends(get_holidays_service),
    now: datetime = Depends(get_clock),
    config: Settings = Depends(get_settings),
):
    """
    Slash-command webhook returning today's holidays.

    Always answers 200 with a reply envelope:
    1. In production, a missing or wrong token gets an auth error reply
    2. Unless the text contains "nocache", today's record is read from Redis
    3. On a miss the page is fetched and parsed, then cached after the response
    """
    if not is_authorized(authorization, config):
        logger.warning(AUTH_ERROR_TEXT, extra={"operation": "auth"})
        return make_reply(AUTH_ERROR_TEXT, config)

    today = utc_today(now)
    key = cache_key(today)
    logger.info("Getting holidays", extra={"cache_key": key, "no_cache": command.no_cache})

    result = await service.load_day(today, no_cache=command.no_cache)
    if result.is_err:
        failure = result.error
        logger.error(
            "Holidays request failed",
            extra={
                "operation": type(failure).__name__,
                "error_code": failure.code.value,
                "cause": repr(failure.cause),
            },
        )
        return make_reply(FAILURE_TEXT.format(code=failure.code.value), config)

    record, fresh = result.value
    if fresh:
        background_tasks.add_task(service.store, today, record)

    return make_reply(format_day_message(record, today), config)


def run():
    """Console entry point."""
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
