from .day_record import DayRecord
from .result import (
    Ok,
    Err,
    Result,
    ErrorCode,
    FetchFailure,
    ParseFailure,
    CacheReadError,
    PipelineFailure,
)
from .webhook import WebhookCommand, WebhookReply, NO_CACHE_TOKEN

__all__ = [
    "DayRecord",
    "Ok",
    "Err",
    "Result",
    "ErrorCode",
    "FetchFailure",
    "ParseFailure",
    "CacheReadError",
    "PipelineFailure",
    "WebhookCommand",
    "WebhookReply",
    "NO_CACHE_TOKEN",
]
