from .fetcher import ContentFetcher, build_source_url, MONTH_SLUGS
from .extractor import extract_day_record
from .formatter import format_day_message
from .holidays import HolidaysService, utc_today
from .scheduler import DailyRefreshJob

__all__ = [
    "ContentFetcher",
    "build_source_url",
    "MONTH_SLUGS",
    "extract_day_record",
    "format_day_message",
    "HolidaysService",
    "utc_today",
    "DailyRefreshJob",
]
